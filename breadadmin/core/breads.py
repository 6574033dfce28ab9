# -*- coding: utf-8 -*-
"""
breads

Registry of bread definitions keyed by slug.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from ..schema.descriptors import Bread
from .exceptions import AdminError, NotFoundError

logger = logging.getLogger(__name__)


class BreadDefinitionError(AdminError):
    """Raised when a stored bread definition cannot be parsed."""


class BreadManager:
    """Store registered breads and load them from JSON definitions."""

    def __init__(self) -> None:
        self._breads: dict[str, Bread] = {}

    def __iter__(self) -> Iterator[Bread]:
        return iter(self._breads.values())

    def __len__(self) -> int:
        return len(self._breads)

    def register(self, bread: Bread | Mapping[str, Any]) -> Bread:
        """Register ``bread``; a slug may only be registered once."""
        if not isinstance(bread, Bread):
            bread = Bread.model_validate(bread)
        if bread.slug in self._breads:
            raise ValueError(f"Bread slug already registered: {bread.slug}")
        self._breads[bread.slug] = bread
        logger.info("Registered bread %s for table %s", bread.slug, bread.table)
        return bread

    def unregister(self, slug: str) -> None:
        self._breads.pop(slug, None)

    def clear(self) -> None:
        self._breads.clear()

    def get_breads(self) -> list[Bread]:
        return list(self._breads.values())

    def find(self, slug: str) -> Bread | None:
        return self._breads.get(slug)

    def get_bread_by_slug(self, slug: str) -> Bread:
        bread = self.find(slug)
        if bread is None:
            raise NotFoundError(f"Bread not found: {slug}")
        return bread

    def get_bread_by_table(self, table: str) -> Bread | None:
        for bread in self._breads.values():
            if bread.table == table:
                return bread
        return None

    def load_file(self, path: Path) -> Bread:
        try:
            bread = Bread.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            raise BreadDefinitionError(f"Invalid bread definition {path}: {exc}") from exc
        return self.register(bread)

    def load_directory(self, path: Path | str) -> list[Bread]:
        """Register every ``*.json`` bread found in ``path`` (sorted by name)."""
        directory = Path(path)
        if not directory.is_dir():
            logger.warning("Bread directory %s does not exist", directory)
            return []
        return [self.load_file(file) for file in sorted(directory.glob("*.json"))]


__all__ = ["BreadManager", "BreadDefinitionError"]

# The End
