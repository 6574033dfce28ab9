# -*- coding: utf-8 -*-
"""
plugins

Authentication and authorization plugins and their registry.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Type, TypeVar

logger = logging.getLogger(__name__)

P = TypeVar("P", bound="BasePlugin")


class BasePlugin:
    """Common base for pluggable behaviour looked up by ``type``."""

    type: str = ""
    name: str = ""


class AuthenticationPlugin(BasePlugin):
    """Resolve the current user from the request state."""

    type = "authentication"
    name = "default-authentication"

    def user(self, request: Any) -> Any:
        state = getattr(request, "state", None)
        return getattr(state, "user", None) if state is not None else None

    def name_of(self, request: Any) -> str | None:
        user = self.user(request)
        if user is None:
            return None
        return getattr(user, "name", None) or getattr(user, "username", None)


class AuthorizationPlugin(BasePlugin):
    """Allow every ability; replace with a real policy in applications."""

    type = "authorization"
    name = "default-authorization"

    def authorize(self, ability: str, arguments: Iterable[Any] = ()) -> bool:
        return True


class PluginRegistry:
    """Store enabled plugins in registration order."""

    def __init__(self, plugins: Iterable[BasePlugin] = ()) -> None:
        self._plugins: list[BasePlugin] = []
        for plugin in plugins:
            self.register(plugin)

    def register(self, plugin: BasePlugin) -> BasePlugin:
        if not plugin.type:
            raise ValueError(f"Plugin {plugin!r} does not declare a type")
        self._plugins.append(plugin)
        logger.debug("Registered %s plugin %s", plugin.type, plugin.name or plugin)
        return plugin

    def get_plugins(self, type: str) -> list[BasePlugin]:
        return [p for p in self._plugins if p.type == type]

    def get_plugin_by_type(self, type: str, default: Type[P] | None = None) -> BasePlugin | None:
        """Return the first plugin of ``type`` or an instance of ``default``."""
        for plugin in self._plugins:
            if plugin.type == type:
                return plugin
        if default is None:
            return None
        return default()


__all__ = [
    "BasePlugin",
    "AuthenticationPlugin",
    "AuthorizationPlugin",
    "PluginRegistry",
]

# The End
