# -*- coding: utf-8 -*-
"""
conf

Runtime configuration utilities for the breadadmin package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from threading import RLock
from typing import Mapping


@dataclass
class BreadSettings:
    """Container for BREAD configuration derived from environment variables."""

    locale: str = "en"
    fallback_locale: str | None = None
    locales: tuple[str, ...] = field(default_factory=tuple)
    route_prefix: str = "/bread"
    route_name_prefix: str = "bread"
    bread_path: Path | None = None
    default_per_page: int = 10
    max_per_page: int = 100

    def __post_init__(self) -> None:
        """Finalize defaults by falling back to the primary locale where required."""
        self.locale = self.locale.strip() or "en"
        if not self.fallback_locale:
            self.fallback_locale = self.locale
        if isinstance(self.locales, str):
            self.locales = self._split(self.locales)
        self.locales = tuple(self.locales)
        if not self.locales:
            self.locales = (self.locale,)
        elif self.locale not in self.locales:
            self.locales = (self.locale, *self.locales)
        self.route_prefix = self._normalize_prefix(self.route_prefix)
        self.route_name_prefix = self.route_name_prefix.strip(".") or "bread"
        if self.bread_path is not None and not isinstance(self.bread_path, Path):
            self.bread_path = Path(str(self.bread_path))
        if self.default_per_page < 1:
            self.default_per_page = 10
        if self.max_per_page < self.default_per_page:
            self.max_per_page = self.default_per_page

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        prefix: str = "BREAD_",
    ) -> "BreadSettings":
        """Build a settings instance from environment variables."""
        source = env if env is not None else os.environ
        data = {key[len(prefix) :]: value for key, value in source.items() if key.startswith(prefix)}
        locale = data.get("LOCALE") or "en"
        bread_path = data.get("PATH")
        return cls(
            locale=locale,
            fallback_locale=data.get("FALLBACK_LOCALE"),
            locales=cls._split(data.get("LOCALES") or ""),
            route_prefix=data.get("ROUTE_PREFIX") or "/bread",
            route_name_prefix=data.get("ROUTE_NAME_PREFIX") or "bread",
            bread_path=Path(bread_path) if bread_path else None,
            default_per_page=cls._to_int(data.get("PER_PAGE"), default=10),
            max_per_page=cls._to_int(data.get("MAX_PER_PAGE"), default=100),
        )

    @staticmethod
    def _to_int(value: str | None, *, default: int) -> int:
        """Return an integer from ``value`` or ``default`` when conversion fails."""
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    @staticmethod
    def _split(value: str) -> tuple[str, ...]:
        """Split a comma separated list, dropping blanks."""
        return tuple(part.strip() for part in value.split(",") if part.strip())

    @staticmethod
    def _normalize_prefix(value: str) -> str:
        """Ensure paths contain a single leading slash and no trailing one."""
        stripped = value.strip().strip("/")
        if not stripped:
            return ""
        return "/" + stripped


class SettingsManager:
    """Thread-safe holder of the process wide ``BreadSettings``."""

    def __init__(self, initial: BreadSettings | None = None) -> None:
        self._guard = RLock()
        self._active = initial

    def configure(self, settings: BreadSettings) -> None:
        """Make ``settings`` the active instance."""
        with self._guard:
            self._active = settings

    def current(self) -> BreadSettings:
        """Active settings; the environment is read on first access."""
        with self._guard:
            if self._active is None:
                self._active = BreadSettings.from_env()
            return self._active

    def reset(self) -> None:
        """Forget the active settings so the next access re-reads the environment."""
        with self._guard:
            self._active = None


_manager = SettingsManager()


def configure(settings: BreadSettings) -> None:
    """Install application specific settings for all BREAD components."""
    _manager.configure(settings)


def current_settings() -> BreadSettings:
    return _manager.current()


def reset_settings() -> None:
    """Drop the active settings instance."""
    _manager.reset()


__all__ = [
    "BreadSettings",
    "SettingsManager",
    "configure",
    "current_settings",
    "reset_settings",
]


# The End
