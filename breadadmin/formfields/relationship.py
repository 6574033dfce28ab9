# -*- coding: utf-8 -*-
"""
relationship

Formfield showing columns of related records.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any

from .base import BaseFormfield
from .registry import registry


@registry.register("relationship")
class RelationshipFormfield(BaseFormfield):
    """Display ``relation.column`` values or edit a foreign key column.

    With a dotted column the value arrives already resolved from the related
    record(s): a scalar for a single record, a list for a collection. An
    undotted column is treated as a foreign key and filtered by equality.
    """

    @property
    def relation(self) -> str | None:
        if "." not in self.column:
            return None
        return self.column.split(".", 1)[0]

    def to_display(self, value: Any) -> Any:
        if isinstance(value, tuple):
            value = list(value)
        if isinstance(value, list) and self.get_option("separator"):
            return str(self.get_option("separator")).join(str(v) for v in value)
        return value

    def to_form(self, value: Any) -> Any:
        if isinstance(value, tuple):
            return list(value)
        return value

    def to_storage(self, value: Any, old: Any = None) -> Any:
        if value == "":
            return None
        return value

    def query(self, qs: Any, column: str, value: Any) -> Any:
        return qs.filter(**{column: value})

# The End
