# -*- coding: utf-8 -*-
"""
exceptions

Custom domain exceptions for the BREAD core.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Mapping


class AdminError(Exception):
    """Base class for admin-specific exceptions."""


class UnknownFormfield(AdminError):
    """Raised when a layout references an unregistered formfield type."""


# --- HTTP-like domain errors -------------------------------------------------

class HTTPError(AdminError):
    """Base class for exceptions carrying an HTTP status code."""

    status_code: int = 500

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or "")
        self.detail = detail

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body describing this error."""
        return {"detail": self.detail}


class BadRequestError(HTTPError):
    """Raised when a request fails validation or is malformed."""

    status_code = 400


class PermissionError(HTTPError):
    """Raised when an operation is not permitted."""

    status_code = 403


class NotFoundError(HTTPError):
    """Raised when a requested resource is not found."""

    status_code = 404


class ValidationFailed(HTTPError):
    """Raised when submitted data does not satisfy the layout rules."""

    status_code = 422

    def __init__(self, errors: Mapping[str, list[str]]) -> None:
        super().__init__("The given data was invalid.")
        self.errors = {key: list(value) for key, value in errors.items()}

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.detail, "errors": self.errors}


JSON_ERROR_NONE = 0
JSON_ERROR_SYNTAX = 4
JSON_ERROR_UTF8 = 5


class JsonInvalid(BadRequestError):
    """Raised when a request parameter does not contain valid JSON text."""

    def __init__(self, text: str, code: int = JSON_ERROR_SYNTAX, position: int | None = None) -> None:
        super().__init__(f"Unable to parse response data: {code}")
        self.text = text
        self.code = code
        self.position = position


__all__ = [
    "AdminError",
    "UnknownFormfield",
    "HTTPError",
    "BadRequestError",
    "PermissionError",
    "NotFoundError",
    "ValidationFailed",
    "JsonInvalid",
    "JSON_ERROR_NONE",
    "JSON_ERROR_SYNTAX",
    "JSON_ERROR_UTF8",
]


# The End
