# -*- coding: utf-8 -*-
"""
text

Text, textarea and rich text formfields.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import re
from typing import Any

from .base import BaseFormfield
from .registry import registry

_TAG_RE = re.compile(r"<[^>]+>")


@registry.register("text")
class TextFormfield(BaseFormfield):
    """Single line text stored verbatim."""

    def to_storage(self, value: Any, old: Any = None) -> Any:
        if value is None:
            return self.get_option("default_value")
        return value


@registry.register("textarea")
class TextAreaFormfield(TextFormfield):
    """Multi line text; ``display_length`` shortens list output."""

    def browse(self, value: Any, record: Any) -> dict[str, Any]:
        return {self.column: self.shorten(self.to_display(value))}

    def show(self, value: Any, record: Any) -> dict[str, Any]:
        return {self.column: self.to_display(value)}

    def shorten(self, value: Any) -> Any:
        limit = self.get_option("display_length")
        if not limit:
            return value
        if isinstance(value, dict):
            return {locale: self._cut(text, int(limit)) for locale, text in value.items()}
        return self._cut(value, int(limit))

    @staticmethod
    def _cut(value: Any, limit: int) -> Any:
        if not isinstance(value, str) or len(value) <= limit:
            return value
        return value[:limit].rstrip() + "..."


@registry.register("rich-text-editor")
class RichTextEditorFormfield(TextAreaFormfield):
    """HTML content; markup is stripped when browsing."""

    def browse(self, value: Any, record: Any) -> dict[str, Any]:
        value = self.to_display(value)
        if isinstance(value, dict):
            value = {locale: self.strip_tags(text) for locale, text in value.items()}
        else:
            value = self.strip_tags(value)
        return {self.column: self.shorten(value)}

    @staticmethod
    def strip_tags(value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return _TAG_RE.sub("", value).strip()

# The End
