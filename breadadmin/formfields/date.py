# -*- coding: utf-8 -*-
"""
date

Formfield for ``date``/``datetime`` columns.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from .base import BaseFormfield
from .registry import registry


@registry.register("date")
class DateFormfield(BaseFormfield):
    """
    Formfield for ``date``/``datetime`` columns.
    Forms exchange ISO strings; ``options.format`` is "date" (default) or "datetime".
    """

    @property
    def with_time(self) -> bool:
        return self.get_option("format", "date") == "datetime"

    def parse(self, value: Any) -> date | datetime | None:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value if self.with_time else value.date()
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day) if self.with_time else value
        txt = str(value).strip().replace("Z", "+00:00")
        try:
            parsed = datetime.fromisoformat(txt)
        except ValueError:
            return None
        return parsed if self.with_time else parsed.date()

    def to_form(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.replace(microsecond=0).isoformat(timespec="seconds")
        if isinstance(value, date):
            return value.isoformat()
        return value

    def to_display(self, value: Any) -> Any:
        return self.to_form(value)

    def to_storage(self, value: Any, old: Any = None) -> Any:
        return self.parse(value)

    def query(self, qs: Any, column: str, value: Any) -> Any:
        day = self.parse(value)
        if day is None:
            return qs
        if not self.with_time:
            return qs.filter(**{column: day})
        start = day.replace(hour=0, minute=0, second=0, microsecond=0)
        return qs.filter(**{f"{column}__gte": start, f"{column}__lt": start + timedelta(days=1)})

# The End
