# -*- coding: utf-8 -*-
"""
search

Compose list querysets from global search, column filters and ordering.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..adapters import Adapter
from ..schema.descriptors import Layout
from .exceptions import BadRequestError

logger = logging.getLogger(__name__)

# Placeholder for the active ORM's QuerySet implementation
QuerySet = Any

PIVOT_MARKER = "pivot."
SORT_DIRECTIONS = ("asc", "desc")


class SearchOutcome(str, Enum):
    """How a single filter entry was applied."""

    GLOBAL = "global"
    RELATION = "relation"
    FORMFIELD = "formfield"
    IGNORED_PIVOT = "ignored_pivot"
    IGNORED_UNKNOWN = "ignored_unknown"

    @property
    def ignored(self) -> bool:
        return self in (SearchOutcome.IGNORED_PIVOT, SearchOutcome.IGNORED_UNKNOWN)


@dataclass(slots=True)
class SearchStep:
    """Record of one applied (or skipped) search constraint."""

    column: str
    value: Any
    outcome: SearchOutcome


@dataclass(slots=True)
class SearchPlan:
    """Queryset produced by :meth:`QueryComposer.apply_search` plus its steps."""

    queryset: QuerySet
    steps: list[SearchStep] = field(default_factory=list)

    @property
    def ignored(self) -> list[SearchStep]:
        return [step for step in self.steps if step.outcome.ignored]


class QueryComposer:
    """Translate search and sort requests into ORM querysets.

    Each method takes a queryset and returns a new one; nothing is mutated in
    place. Columns that cannot be resolved are skipped rather than reported
    as errors so list pages keep working with stale filter state.
    """

    def __init__(self, adapter: Adapter) -> None:
        self.adapter = adapter

    def plan_search(
        self,
        qs: QuerySet,
        layout: Layout,
        filters: Mapping[str, Any] | None,
        global_term: str | None,
    ) -> SearchPlan:
        plan = SearchPlan(queryset=qs)
        if global_term:
            columns = [c for c in layout.get_searchable_columns() if "." not in c]
            cond = self.adapter.contains_any(columns, global_term)
            if cond is not None:
                plan.queryset = self.adapter.filter(plan.queryset, cond)
                plan.steps.append(SearchStep(",".join(columns), global_term, SearchOutcome.GLOBAL))

        for column, value in (filters or {}).items():
            if "." in column:
                relation, rel_column = column.split(".", 1)
                if rel_column.startswith(PIVOT_MARKER):
                    # Pivot columns of many-to-many links are not filterable yet.
                    outcome = SearchOutcome.IGNORED_PIVOT
                else:
                    path = f"{relation}__{rel_column.replace('.', '__')}"
                    plan.queryset = self.adapter.distinct(
                        self.adapter.filter(plan.queryset, self.adapter.contains(path, value))
                    )
                    outcome = SearchOutcome.RELATION
            else:
                formfield = layout.get_formfield(column)
                if formfield is not None:
                    plan.queryset = formfield.query(plan.queryset, column, value)
                    outcome = SearchOutcome.FORMFIELD
                else:
                    outcome = SearchOutcome.IGNORED_UNKNOWN
            if outcome.ignored:
                logger.debug("Filter on %r ignored (%s)", column, outcome.value)
            plan.steps.append(SearchStep(column, value, outcome))
        return plan

    def apply_search(
        self,
        qs: QuerySet,
        layout: Layout,
        filters: Mapping[str, Any] | None,
        global_term: str | None,
    ) -> QuerySet:
        """Return ``qs`` narrowed by ``global_term`` and per-column ``filters``."""
        return self.plan_search(qs, layout, filters, global_term).queryset

    def apply_sort(
        self,
        qs: QuerySet,
        layout: Layout,
        column: str | None,
        direction: str | None = "asc",
    ) -> QuerySet:
        """Return ``qs`` ordered by ``column``.

        ``direction`` is ``asc`` or ``desc`` in any case and defaults to
        ascending. Other values raise :class:`BadRequestError`.
        """
        if not column:
            return qs
        normalized = (direction or "asc").lower()
        if normalized not in SORT_DIRECTIONS:
            raise BadRequestError(f"Invalid sort direction {direction!r}")
        ordering = f"-{column}" if normalized == "desc" else column
        if layout.is_formfield_translatable(column):
            # Ordering by the active locale's value is not supported yet.
            logger.debug("Ordering translatable column %r by its raw value", column)
        return self.adapter.order_by(qs, ordering)


__all__ = [
    "PIVOT_MARKER",
    "SORT_DIRECTIONS",
    "QueryComposer",
    "SearchOutcome",
    "SearchPlan",
    "SearchStep",
]

# The End
