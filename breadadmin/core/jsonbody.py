# -*- coding: utf-8 -*-
"""
jsonbody

Read JSON encoded parameters from incoming requests.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from .exceptions import JSON_ERROR_SYNTAX, JSON_ERROR_UTF8, JsonInvalid

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_parameter(request: Request, key: str, default: Any = None) -> Any:
    """Return ``key`` from the query string, a form body or a JSON object body."""
    value = request.query_params.get(key)
    if value is not None:
        return value
    if request.method in ("GET", "HEAD"):
        return default
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        value = form.get(key)
        return default if value is None else value
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return default
        if isinstance(body, dict) and key in body:
            return body[key]
    return default


def decode(text: Any) -> Any:
    """Parse JSON ``text``; a ``null`` document yields an empty dict."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise JsonInvalid(repr(text), JSON_ERROR_UTF8, exc.start) from exc
    text = str(text)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise JsonInvalid(text, JSON_ERROR_SYNTAX, exc.pos) from exc
    return {} if data is None else data


async def extract_json(request: Request, key: str = "data") -> Any:
    """Return the JSON document stored in request parameter ``key``.

    A missing parameter decodes as ``{}``. Parameters that already arrived
    decoded inside a JSON body are returned unchanged.
    """
    value = await read_parameter(request, key, "{}")
    if isinstance(value, (dict, list)):
        return value
    if value is None:
        return {}
    return decode(value)


__all__ = ["extract_json", "decode", "read_parameter"]

# The End
