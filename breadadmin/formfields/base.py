# -*- coding: utf-8 -*-
"""
base

Base formfield class.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import json
from typing import Any, Dict

from ..adapters.tortoise import RawContains
from ..schema.descriptors import FormfieldConfig, RuleDescriptor


class BaseFormfield:
    """
    Base Formfield Class

    A formfield converts one column between its stored form and the shape
    used when browsing, showing and editing, and narrows list queries that
    filter on it. Every capability returns a mapping of attribute name to
    value so a single formfield may touch several columns.
    """
    key: str = "base"

    def __init__(self, config: FormfieldConfig) -> None:
        self.config = config

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.column!r}>"

    @property
    def column(self) -> str:
        return self.config.column

    @property
    def translatable(self) -> bool:
        return self.config.translatable

    @property
    def rules(self) -> list[RuleDescriptor]:
        return self.config.rules

    def get_option(self, name: str, default: Any = None) -> Any:
        return self.config.options.get(name, default)

    # === Read direction ===
    def browse(self, value: Any, record: Any) -> Dict[str, Any]:
        return {self.column: self.to_display(value)}

    def show(self, value: Any, record: Any) -> Dict[str, Any]:
        return self.browse(value, record)

    def edit(self, value: Any, record: Any) -> Dict[str, Any]:
        return {self.column: self.to_form(value)}

    # === Write direction ===
    def store(self, value: Any, old: Any, record: Any, data: Any) -> Dict[str, Any]:
        return {self.column: self.to_storage(value, old)}

    def update(self, value: Any, old: Any, record: Any, data: Any) -> Dict[str, Any]:
        return self.store(value, old, record, data)

    # === Query ===
    def query(self, qs: Any, column: str, value: Any) -> Any:
        """Narrow ``qs`` to rows whose ``column`` is ``LIKE '%value%'``."""
        return qs.filter(RawContains(column, value))

    # === Value Converters ===
    def to_display(self, value: Any) -> Any:
        if self.translatable:
            return self.decode_translations(value)
        return value

    def to_form(self, value: Any) -> Any:
        return self.to_display(value)

    def to_storage(self, value: Any, old: Any = None) -> Any:
        return value

    @staticmethod
    def decode_translations(value: Any) -> Any:
        """Decode a JSON object of per-locale values, leaving anything else as-is."""
        if not isinstance(value, str):
            return value
        try:
            decoded = json.loads(value)
        except ValueError:
            return value
        return decoded if isinstance(decoded, dict) else value

# The End
