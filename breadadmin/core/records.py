# -*- coding: utf-8 -*-
"""
records

Attribute helpers for records mutated by the BREAD transforms.

A record is an ORM instance. Its attributes are the public entries of its
instance dictionary: the loaded columns plus every value merged in by a
formfield. Computed property names appended with :func:`append` are resolved
when the record is serialized.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Dict, Iterable

APPENDS_ATTR = "_bread_appends"


def get_attributes(record: Any) -> Dict[str, Any]:
    return {key: value for key, value in vars(record).items() if not key.startswith("_")}


def has_attribute(record: Any, name: str) -> bool:
    return not name.startswith("_") and name in vars(record)


def set_attribute(record: Any, name: str, value: Any) -> None:
    setattr(record, name, value)


def append(record: Any, names: Iterable[str]) -> None:
    """Mark computed properties ``names`` for serialization, keeping earlier ones."""
    current = list(getattr(record, APPENDS_ATTR, ()))
    for name in names:
        if name not in current:
            current.append(name)
    setattr(record, APPENDS_ATTR, tuple(current))


def get_appends(record: Any) -> tuple[str, ...]:
    return tuple(getattr(record, APPENDS_ATTR, ()))


def to_dict(record: Any) -> Dict[str, Any]:
    """Serialize ``record`` attributes followed by its appended properties."""
    data = get_attributes(record)
    for name in get_appends(record):
        value = getattr(record, name, None)
        data[name] = value() if callable(value) else value
    return data


__all__ = [
    "get_attributes",
    "has_attribute",
    "set_attribute",
    "append",
    "get_appends",
    "to_dict",
]

# The End
