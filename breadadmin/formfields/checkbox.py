# -*- coding: utf-8 -*-
"""
checkbox

Boolean formfield.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any

from .base import BaseFormfield
from .registry import registry

TRUTHY = {"1", "true", "yes", "on"}


@registry.register("checkbox")
class CheckboxFormfield(BaseFormfield):
    """Store booleans; browse may substitute ``on``/``off`` labels."""

    @staticmethod
    def coerce(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in TRUTHY

    def browse(self, value: Any, record: Any) -> dict[str, Any]:
        checked = self.coerce(value)
        label = self.get_option("on" if checked else "off")
        return {self.column: label if label is not None else checked}

    def to_form(self, value: Any) -> Any:
        return self.coerce(value)

    def to_storage(self, value: Any, old: Any = None) -> Any:
        return self.coerce(value)

    def query(self, qs: Any, column: str, value: Any) -> Any:
        return qs.filter(**{column: self.coerce(value)})

# The End
