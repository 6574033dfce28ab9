# -*- coding: utf-8 -*-
"""
controller

Base class for BREAD controllers.

Concrete controllers resolve the bread and layout for a request and call the
helpers below in order: search, order, fetch, prepare for display on the read
path; validate, prepare for persist, save on the write path.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from fastapi import Request

from ..schema.descriptors import Bread, Layout
from .breads import BreadManager
from .context import BreadContext
from .exceptions import NotFoundError
from .jsonbody import extract_json
from .plugins import AuthenticationPlugin, AuthorizationPlugin
from .search import QueryComposer, SearchPlan
from .transform import RecordTransformer
from .validation import Validator, build_validator

# Placeholder for the active ORM's QuerySet implementation
QuerySet = Any


class Controller:
    """Shared helpers for listing, transforming and validating BREAD records."""

    def __init__(self, context: BreadContext, breads: BreadManager) -> None:
        self.context = context
        self.breads = breads
        self.composer = QueryComposer(context.adapter)

    @property
    def adapter(self):
        return self.context.adapter

    def transformer(self, context: BreadContext | None = None) -> RecordTransformer:
        return RecordTransformer(context or self.context)

    # --- plugins ----------------------------------------------------------

    def authorize(self, ability: str, arguments: Iterable[Any] = ()) -> bool:
        return self.get_authorization_plugin().authorize(ability, arguments)

    def get_authorization_plugin(self) -> AuthorizationPlugin:
        return self.context.get_plugin_by_type("authorization", AuthorizationPlugin)

    def get_authentication_plugin(self) -> AuthenticationPlugin:
        return self.context.get_plugin_by_type("authentication", AuthenticationPlugin)

    # --- bread lookup -----------------------------------------------------

    def get_bread(self, request: Request) -> Bread:
        """Return the bread named by the matched route (``<prefix>.<slug>.<action>``)."""
        route = request.scope.get("route")
        name = getattr(route, "name", None) or ""
        parts = name.split(".")
        if len(parts) < 2 or not parts[1]:
            raise NotFoundError(f"Route {name!r} does not name a bread")
        return self.breads.get_bread_by_slug(parts[1])

    # --- query ------------------------------------------------------------

    def search_query(
        self,
        qs: QuerySet,
        layout: Layout,
        filters: Mapping[str, Any] | None,
        global_term: str | None,
    ) -> QuerySet:
        return self.composer.apply_search(qs, layout, filters, global_term)

    def search_plan(
        self,
        qs: QuerySet,
        layout: Layout,
        filters: Mapping[str, Any] | None,
        global_term: str | None,
    ) -> SearchPlan:
        """Like :meth:`search_query` but also report which filters were ignored."""
        return self.composer.plan_search(qs, layout, filters, global_term)

    def order_query(
        self,
        qs: QuerySet,
        bread: Bread,
        layout: Layout,
        column: str | None,
        direction: str | None,
    ) -> QuerySet:
        return self.composer.apply_sort(qs, layout, column, direction)

    def load_accessors(self, result: Any, bread: Bread) -> Any:
        return self.transformer().load_computed_properties(result, bread)

    # --- read direction -----------------------------------------------------

    async def prepare_data_for_browsing(
        self,
        record: Any,
        bread: Bread,
        layout: Layout,
        method: str = "browse",
        context: BreadContext | None = None,
    ) -> Any:
        return await self.transformer(context).prepare_for_display(record, bread, layout, method)

    async def prepare_data_for_editing(
        self, record: Any, bread: Bread, layout: Layout, context: BreadContext | None = None
    ) -> Any:
        return await self.prepare_data_for_browsing(record, bread, layout, "edit", context)

    async def prepare_data_for_reading(
        self, record: Any, bread: Bread, layout: Layout, context: BreadContext | None = None
    ) -> Any:
        return await self.prepare_data_for_browsing(record, bread, layout, "show", context)

    # --- write direction ----------------------------------------------------

    def prepare_data_for_storing(
        self,
        data: Mapping[str, Any],
        record: Any,
        bread: Bread,
        layout: Layout,
        method: str = "store",
        context: BreadContext | None = None,
    ) -> Any:
        return self.transformer(context).prepare_for_persist(data, record, bread, layout, method)

    def prepare_data_for_updating(
        self,
        data: Mapping[str, Any],
        record: Any,
        bread: Bread,
        layout: Layout,
        context: BreadContext | None = None,
    ) -> Any:
        return self.prepare_data_for_storing(data, record, bread, layout, "update", context)

    def get_validator(
        self, layout: Layout, data: Mapping[str, Any], context: BreadContext | None = None
    ) -> Validator:
        return build_validator(layout, data, context or self.context)

    async def get_json(self, request: Request, key: str = "data") -> Any:
        return await extract_json(request, key)

# The End
