# -*- coding: utf-8 -*-
"""
bread_controller

JSON endpoints browsing and editing any registered bread.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder

from ..conf import BreadSettings, current_settings
from ..schema.descriptors import Bread, Layout, LayoutType
from . import records
from .breads import BreadManager
from .context import BreadContext
from .controller import Controller
from .exceptions import BadRequestError, NotFoundError, PermissionError

logger = logging.getLogger(__name__)


class BreadController(Controller):
    """Browse, read, edit, add and delete records of the requested bread."""

    def __init__(
        self,
        context: BreadContext,
        breads: BreadManager,
        settings: BreadSettings | None = None,
    ) -> None:
        super().__init__(context, breads)
        self.settings = settings or current_settings()

    # --- helpers ------------------------------------------------------------

    def request_context(self, request: Request) -> BreadContext:
        return self.context.with_locale(request.query_params.get("locale"))

    def get_layout(self, bread: Bread, kind: LayoutType) -> Layout:
        layout = bread.get_layout_for(kind)
        if layout is None:
            raise NotFoundError(f"Bread {bread.slug} has no {kind} layout")
        return layout

    def get_model(self, bread: Bread):
        model = self.adapter.get_model(bread.model)
        if model is None:
            raise NotFoundError(f"Model {bread.model} of bread {bread.slug} is not registered")
        return model

    def ensure(self, ability: str, *arguments: Any) -> None:
        if not self.authorize(ability, arguments):
            raise PermissionError(f"Not allowed to {ability}")

    @staticmethod
    def _to_int(value: Any, default: int) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def paginate_params(self, request: Request) -> tuple[int, int]:
        page = max(self._to_int(request.query_params.get("page"), 1), 1)
        per_page = self._to_int(request.query_params.get("perpage"), self.settings.default_per_page)
        per_page = min(max(per_page, 1), self.settings.max_per_page)
        return page, per_page

    def serialize(self, record: Any) -> dict[str, Any]:
        return jsonable_encoder(records.to_dict(record))

    async def find_record(self, bread: Bread, pk: Any) -> Any:
        model = self.get_model(bread)
        pk_attr = self.adapter.get_pk_attr(model)
        record = await self.adapter.get_or_none(
            model, **{pk_attr: self.adapter.coerce_pk(model, pk)}
        )
        if record is None:
            raise NotFoundError(f"{bread.name_singular or bread.slug} {pk} not found")
        return record

    # --- endpoints ------------------------------------------------------------

    async def data(self, request: Request) -> dict[str, Any]:
        """List records with global search, column filters, ordering and paging."""
        bread = self.get_bread(request)
        ctx = self.request_context(request)
        layout = self.get_layout(bread, "list")
        self.ensure("browse", bread)

        filters = await self.get_json(request, "filters")
        if not isinstance(filters, dict):
            raise BadRequestError("Filters must be a JSON object")
        params = request.query_params
        page, per_page = self.paginate_params(request)

        qs = self.adapter.all(self.get_model(bread))
        records_total = await self.adapter.count(qs)
        plan = self.search_plan(qs, layout, filters, params.get("query"))
        qs = self.order_query(plan.queryset, bread, layout, params.get("order"), params.get("direction"))
        filtered = await self.adapter.count(qs)
        qs = self.adapter.limit(self.adapter.offset(qs, (page - 1) * per_page), per_page)
        rows = await self.adapter.fetch_all(qs)
        for row in rows:
            await self.prepare_data_for_browsing(row, bread, layout, context=ctx)
        self.load_accessors(rows, bread)
        return {
            "results": [self.serialize(row) for row in rows],
            "filtered": filtered,
            "records": records_total,
            "page": page,
            "perpage": per_page,
            "ignored_filters": [step.column for step in plan.ignored],
        }

    async def read(self, request: Request, pk: str) -> dict[str, Any]:
        bread = self.get_bread(request)
        layout = self.get_layout(bread, "view")
        record = await self.find_record(bread, pk)
        self.ensure("read", record)
        await self.prepare_data_for_reading(record, bread, layout, self.request_context(request))
        self.load_accessors(record, bread)
        return self.serialize(record)

    async def edit(self, request: Request, pk: str) -> dict[str, Any]:
        bread = self.get_bread(request)
        layout = self.get_layout(bread, "view")
        record = await self.find_record(bread, pk)
        self.ensure("edit", record)
        await self.prepare_data_for_editing(record, bread, layout, self.request_context(request))
        return self.serialize(record)

    async def store(self, request: Request) -> dict[str, Any]:
        bread = self.get_bread(request)
        ctx = self.request_context(request)
        layout = self.get_layout(bread, "view")
        self.ensure("add", bread)
        data = await self.submitted_data(request)
        self.get_validator(layout, data, ctx).validate()
        record = self.get_model(bread)()
        self.prepare_data_for_storing(data, record, bread, layout, context=ctx)
        await self.save(record)
        logger.debug("Stored %s %s", bread.slug, record.pk)
        return {"primary": record.pk}

    async def update(self, request: Request, pk: str) -> dict[str, Any]:
        bread = self.get_bread(request)
        ctx = self.request_context(request)
        layout = self.get_layout(bread, "view")
        record = await self.find_record(bread, pk)
        self.ensure("edit", record)
        data = await self.submitted_data(request)
        self.get_validator(layout, data, ctx).validate()
        self.prepare_data_for_updating(data, record, bread, layout, context=ctx)
        await self.save(record)
        return {"primary": record.pk}

    async def delete(self, request: Request) -> dict[str, Any]:
        bread = self.get_bread(request)
        primary = await self.get_json(request, "primary")
        keys = primary if isinstance(primary, list) else [primary]
        if not keys or keys == [{}]:
            raise BadRequestError("No records selected")
        deleted = 0
        for pk in keys:
            record = await self.find_record(bread, pk)
            self.ensure("delete", record)
            await self.adapter.delete(record)
            deleted += 1
        return {"deleted": deleted}

    async def submitted_data(self, request: Request) -> dict[str, Any]:
        data = await self.get_json(request)
        if not isinstance(data, dict):
            raise BadRequestError("Submitted data must be a JSON object")
        return data

    async def save(self, record: Any) -> None:
        try:
            await self.adapter.save(record)
        except self.adapter.IntegrityError as exc:
            raise BadRequestError(str(exc)) from exc

# The End
