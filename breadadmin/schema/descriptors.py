# -*- coding: utf-8 -*-
"""
descriptors

Bread, layout and formfield descriptors.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field as PField, PrivateAttr

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from ..formfields.base import BaseFormfield

LayoutType = Literal["list", "view"]


class RuleDescriptor(BaseModel):
    """Single validation rule attached to a formfield."""
    rule: str
    message: str | dict[str, str] = ""

    @property
    def name(self) -> str:
        """Rule name without its parameters (``max:255`` -> ``max``)."""
        return self.rule.split(":", 1)[0]

    def resolve_message(self, locale: str, fallback_locale: str | None) -> str:
        """Return the message text for ``locale``.

        Plain strings are returned as-is. Per-locale mappings are looked up by
        ``locale``, then ``fallback_locale``, then an empty string.
        """
        if isinstance(self.message, str):
            return self.message
        if locale in self.message:
            return self.message[locale]
        if fallback_locale is not None and fallback_locale in self.message:
            return self.message[fallback_locale]
        return ""


class FormfieldConfig(BaseModel):
    """One row of a layout: the column it edits and how."""
    type: str
    column: str
    title: str | dict[str, str] = ""
    translatable: bool = False
    searchable: bool = False
    orderable: bool = False
    rules: list[RuleDescriptor] = PField(default_factory=list)
    options: dict[str, Any] = PField(default_factory=dict)


class Layout(BaseModel):
    """Ordered set of formfields describing one list or view of a bread."""
    name: str
    type: LayoutType = "list"
    formfields: list[FormfieldConfig] = PField(default_factory=list)

    _instances: list["BaseFormfield"] | None = PrivateAttr(default=None)

    def get_formfields(self) -> list["BaseFormfield"]:
        """Return formfield plugins in layout order, built on first access."""
        if self._instances is None:
            from ..formfields import registry

            self._instances = [registry.build(cfg) for cfg in self.formfields]
        return self._instances

    def get_formfield(self, column: str) -> "BaseFormfield | None":
        """Return the first formfield editing ``column``."""
        for formfield in self.get_formfields():
            if formfield.column == column:
                return formfield
        return None

    def get_searchable_columns(self) -> list[str]:
        """Return columns flagged as searchable, in layout order."""
        return [cfg.column for cfg in self.formfields if cfg.searchable]

    def is_formfield_translatable(self, column: str) -> bool:
        """Return ``True`` if a translatable formfield edits ``column``."""
        return any(cfg.translatable for cfg in self.formfields if cfg.column == column)


class Bread(BaseModel):
    """Metadata describing one database table exposed through BREAD."""
    slug: str
    table: str
    model: str  # dotted path "app.Model"
    name_singular: str = ""
    name_plural: str = ""
    icon: str | None = None
    computed_properties: list[str] = PField(default_factory=list)
    layouts: list[Layout] = PField(default_factory=list)

    def get_computed_properties(self) -> list[str]:
        """Return names of derived attributes appended on serialization."""
        return list(self.computed_properties)

    def get_layout(self, name: str) -> Layout | None:
        for layout in self.layouts:
            if layout.name == name:
                return layout
        return None

    def get_layout_for(self, kind: LayoutType) -> Layout | None:
        """Return the first layout of type ``kind``."""
        for layout in self.layouts:
            if layout.type == kind:
                return layout
        return None

# The End
