# -*- coding: utf-8 -*-
"""
select

Select formfield working with configured choices.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import json
from typing import Any, Dict

from ..adapters.tortoise import RawContains
from .base import BaseFormfield
from .registry import registry


@registry.register("select")
class SelectFormfield(BaseFormfield):
    """Pick one value (or several with ``multiple``) from ``choices``.

    ``choices`` may be a mapping ``{value: label}`` or a list of
    ``{"key": ..., "value": ...}`` pairs. Multiple selections are stored as a
    JSON list.
    """

    def choices_map(self) -> Dict[str, Any]:
        raw = self.get_option("choices") or {}
        if isinstance(raw, dict):
            return {str(key): label for key, label in raw.items()}
        cm: Dict[str, Any] = {}
        for item in raw:
            if isinstance(item, dict) and "key" in item:
                cm[str(item["key"])] = item.get("value", item["key"])
            else:
                cm[str(item)] = item
        return cm

    @property
    def multiple(self) -> bool:
        return bool(self.get_option("multiple", False))

    def _selected(self, value: Any) -> Any:
        if not self.multiple:
            return value
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                return [value] if value else []
        if value is None:
            return []
        return list(value) if isinstance(value, (list, tuple)) else [value]

    def browse(self, value: Any, record: Any) -> dict[str, Any]:
        cm = self.choices_map()
        selected = self._selected(value)
        if self.multiple:
            return {self.column: [cm.get(str(v), v) for v in selected]}
        if selected is None:
            return {self.column: None}
        return {self.column: cm.get(str(selected), selected)}

    def to_form(self, value: Any) -> Any:
        return self._selected(value)

    def to_storage(self, value: Any, old: Any = None) -> Any:
        if self.multiple:
            return json.dumps(self._selected(value))
        if value == "":
            return None
        return value

    def query(self, qs: Any, column: str, value: Any) -> Any:
        if self.multiple:
            return qs.filter(RawContains(column, json.dumps(str(value))))
        return qs.filter(**{column: value})

# The End
