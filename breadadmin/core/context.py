# -*- coding: utf-8 -*-
"""
context

Request context handed to every BREAD helper.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Type

from ..adapters import Adapter
from ..conf import BreadSettings, current_settings
from .plugins import BasePlugin, PluginRegistry


@dataclass(frozen=True)
class BreadContext:
    """Locale, storage and plugin lookups needed while handling one request."""
    adapter: Adapter
    locale: str = "en"
    fallback_locale: str | None = None
    plugins: PluginRegistry = field(default_factory=PluginRegistry)
    locales: tuple[str, ...] = ()

    @classmethod
    def from_settings(
        cls,
        settings: BreadSettings | None = None,
        adapter: Adapter | None = None,
        plugins: PluginRegistry | None = None,
    ) -> "BreadContext":
        settings = settings or current_settings()
        return cls(
            adapter=adapter or Adapter(),
            locale=settings.locale,
            fallback_locale=settings.fallback_locale,
            plugins=plugins or PluginRegistry(),
            locales=settings.locales,
        )

    def get_locale(self) -> str:
        return self.locale

    def get_fallback_locale(self) -> str | None:
        return self.fallback_locale

    def with_locale(self, locale: str | None) -> "BreadContext":
        """Return a copy using ``locale`` when it is one of the known locales."""
        if not locale or locale == self.locale:
            return self
        if self.locales and locale not in self.locales:
            return self
        return replace(self, locale=locale)

    def get_columns(self, table: str) -> list[str]:
        """Return the storable column names of ``table``."""
        return self.adapter.get_columns(table)

    def get_plugin_by_type(self, type: str, default: Type[BasePlugin] | None = None) -> Any:
        return self.plugins.get_plugin_by_type(type, default)

# The End
