# -*- coding: utf-8 -*-
"""
transform

Convert records between their stored form and the browse/edit/show shape.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal, Mapping

from ..schema.descriptors import Bread, Layout
from . import records
from .context import BreadContext

logger = logging.getLogger(__name__)

DisplayMode = Literal["browse", "edit", "show"]
PersistMode = Literal["store", "update"]

DISPLAY_MODES = ("browse", "edit", "show")
PERSIST_MODES = ("store", "update")


class RecordTransformer:
    """Run formfield capabilities over a record in layout order."""

    def __init__(self, context: BreadContext) -> None:
        self.context = context

    @property
    def adapter(self):
        return self.context.adapter

    async def resolve_value(self, record: Any, column: str) -> Any:
        """Return the raw value for ``column``.

        Direct attributes win. A dotted ``relation.column`` loads the relation
        and plucks the column from each related record (collections) or from
        the single related record. Anything unresolved yields ``""``.
        """
        if records.has_attribute(record, column):
            return getattr(record, column)
        if "." not in column:
            return ""
        rl_name, rl_column = column.split(".", 1)
        if not self.adapter.has_relation(record, rl_name):
            logger.debug("%r is not a relation of %r", rl_name, type(record).__name__)
            return ""
        await self.adapter.fetch_related(record, rl_name)
        related = getattr(record, rl_name)
        if self.adapter.is_collection(related):
            return [getattr(item, rl_column, None) for item in related]
        if related:
            return getattr(related, rl_column, None)
        return ""

    async def prepare_for_display(
        self,
        record: Any,
        bread: Bread,
        layout: Layout,
        mode: DisplayMode = "browse",
    ) -> Any:
        """Merge the ``mode`` output of every formfield into ``record``."""
        if mode not in DISPLAY_MODES:
            raise ValueError(f"Unknown display mode {mode!r}")
        for formfield in layout.get_formfields():
            value = await self.resolve_value(record, formfield.column)
            new_value = getattr(formfield, mode)(value, record)
            for key, val in new_value.items():
                records.set_attribute(record, key, val)
        record.primary = record.pk
        return record

    def load_computed_properties(self, result: Any, bread: Bread) -> Any:
        """Append the bread's computed properties to one record or each of many."""
        names = bread.get_computed_properties()
        if self.adapter.is_record(result):
            records.append(result, names)
        elif isinstance(result, (list, tuple)):
            for item in result:
                records.append(item, names)
        return result

    def prepare_for_persist(
        self,
        data: Mapping[str, Any],
        record: Any,
        bread: Bread,
        layout: Layout,
        mode: PersistMode = "store",
    ) -> Any:
        """Assign the ``mode`` output of every formfield onto ``record``.

        Structured values for translatable columns are stored as JSON text.
        Output is written only when the formfield's own column is one of the
        table's storable columns, whichever columns the formfield returns.
        """
        if mode not in PERSIST_MODES:
            raise ValueError(f"Unknown persist mode {mode!r}")
        columns = self.context.get_columns(bread.table)
        for formfield in layout.get_formfields():
            value = data.get(formfield.column, None)
            old = getattr(record, formfield.column, None)
            new_value = dict(getattr(formfield, mode)(value, old, record, data))
            for column, val in new_value.items():
                if layout.is_formfield_translatable(column) and isinstance(val, (dict, list)):
                    new_value[column] = json.dumps(val)

            if formfield.column not in columns:
                logger.debug("Skipping %r: not a storable column of %r", formfield.column, bread.table)
                continue
            for column, val in new_value.items():
                records.set_attribute(record, column, val)
        return record


__all__ = ["RecordTransformer", "DISPLAY_MODES", "PERSIST_MODES"]

# The End
