# -*- coding: utf-8 -*-
"""
registry

Formfield registry.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations
from typing import Dict, Type

from ..core.exceptions import UnknownFormfield
from ..schema.descriptors import FormfieldConfig
from .base import BaseFormfield


class FormfieldRegistry:
    def __init__(self) -> None:
        self._by_key: Dict[str, Type[BaseFormfield]] = {}

    def register(self, key: str):
        """Decorator to register a formfield by key."""
        def _decorator(cls: Type[BaseFormfield]) -> Type[BaseFormfield]:
            cls.key = key
            self._by_key[key] = cls
            return cls
        return _decorator

    def get(self, key: str) -> Type[BaseFormfield] | None:
        return self._by_key.get(key)

    def keys(self) -> list[str]:
        return sorted(self._by_key)

    def build(self, config: FormfieldConfig) -> BaseFormfield:
        """Instantiate the formfield registered for ``config.type``."""
        cls = self.get(config.type)
        if cls is None:
            raise UnknownFormfield(
                f"No formfield registered for type {config.type!r} (column {config.column!r})"
            )
        return cls(config)

registry = FormfieldRegistry()
register_formfield = registry.register

# The End
