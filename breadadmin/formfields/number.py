# -*- coding: utf-8 -*-
"""
number

Formfield for numeric columns (integers and decimals).

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any

from .base import BaseFormfield
from .registry import registry


@registry.register("number")
class NumberFormfield(BaseFormfield):
    """Coerce submitted values to ``int`` or, with ``decimals``, ``float``."""

    def coerce(self, value: Any) -> int | float | None:
        if value is None or isinstance(value, bool):
            return None
        txt = str(value).strip()
        if txt == "":
            return None
        try:
            if self.get_option("decimals"):
                return float(txt)
            return int(txt)
        except ValueError:
            try:
                return float(txt)
            except ValueError:
                return None

    def to_storage(self, value: Any, old: Any = None) -> Any:
        return self.coerce(value)

    def query(self, qs: Any, column: str, value: Any) -> Any:
        number = self.coerce(value)
        if number is None:
            return qs
        return qs.filter(**{column: number})

# The End
