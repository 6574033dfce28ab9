# -*- coding: utf-8 -*-
"""
password

Password formfield; never exposes the stored hash.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any

from ..utils.passwords import password_hasher
from .base import BaseFormfield
from .registry import registry


@registry.register("password")
class PasswordFormfield(BaseFormfield):
    """Hash new passwords and keep the old hash when left blank."""

    def browse(self, value: Any, record: Any) -> dict[str, Any]:
        return {self.column: ""}

    def edit(self, value: Any, record: Any) -> dict[str, Any]:
        return {self.column: ""}

    def to_storage(self, value: Any, old: Any = None) -> Any:
        if value is None or value == "":
            return old
        return password_hasher.make_password(str(value))

    def query(self, qs: Any, column: str, value: Any) -> Any:
        # Hashes are not searchable.
        return qs

# The End
