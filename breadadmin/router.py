# -*- coding: utf-8 -*-
"""
router

Router utilities for mounting BREAD endpoints.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from .core.bread_controller import BreadController
from .core.exceptions import HTTPError


class BreadRouter:
    """Encapsulates mounting the BREAD endpoints onto an application.

    Routes are named ``<name_prefix>.<slug>.<action>`` so controllers can
    recover the bread from the matched route.
    """

    def __init__(
        self,
        controller: BreadController,
        prefix: str | None = None,
        name_prefix: str | None = None,
    ) -> None:
        self.controller = controller
        settings = controller.settings
        self.prefix = (settings.route_prefix if prefix is None else prefix).rstrip("/")
        self.name_prefix = name_prefix or settings.route_name_prefix

    def build_router(self) -> APIRouter:
        router = APIRouter()
        c = self.controller
        for bread in c.breads:
            base = f"/{bread.slug}"
            name = f"{self.name_prefix}.{bread.slug}"
            router.add_api_route(f"{base}/data", c.data, methods=["GET"], name=f"{name}.browse")
            router.add_api_route(f"{base}/{{pk}}/edit", c.edit, methods=["GET"], name=f"{name}.edit")
            router.add_api_route(f"{base}/{{pk}}", c.read, methods=["GET"], name=f"{name}.read")
            router.add_api_route(base, c.store, methods=["POST"], name=f"{name}.store")
            router.add_api_route(f"{base}/{{pk}}", c.update, methods=["PUT"], name=f"{name}.update")
            router.add_api_route(base, c.delete, methods=["DELETE"], name=f"{name}.delete")
        return router

    @staticmethod
    async def handle_error(request: Request, exc: HTTPError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    def mount(self, app: FastAPI) -> None:
        """Mount the BREAD endpoints onto the given application."""
        app.state.bread_router = self
        app.include_router(self.build_router(), prefix=self.prefix)
        app.add_exception_handler(HTTPError, self.handle_error)

# The End
