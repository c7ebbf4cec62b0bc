# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    THROTTLED = "THROTTLED"
    AUTH_ERROR = "AUTH_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    GRAPHQL_ERROR = "GRAPHQL_ERROR"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class BulkTagError(Exception):
    """Base class for bulktag failures."""


class ValidationError(BulkTagError):
    """Input rejected before any network call."""


class TagValidationError(ValidationError):
    pass


class InvalidCursorError(ValidationError):
    def __init__(self, cursor: str):
        super().__init__(f"Malformed pagination cursor: {cursor!r}")
        self.cursor = cursor


class GraphQLError(BulkTagError):
    """A GraphQL round trip failed or returned top-level errors."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        errors: list[dict[str, Any]] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.errors = errors or []
        self.status_code = status_code


class PageFetchError(GraphQLError):
    """A product page could not be read; fatal to a bulk run."""


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, GraphQLError):
        return exc.category

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError, socket.gaierror)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, TimeoutError)):
        return ErrorCategory.TIMEOUT if isinstance(exc, TimeoutError) else ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ValueError):
        return ErrorCategory.MALFORMED_RESPONSE

    return ErrorCategory.UNKNOWN_ERROR


def categorize_status(status_code: int | None) -> ErrorCategory:
    if status_code is None:
        return ErrorCategory.CONNECTION_ERROR
    if status_code in (401, 403):
        return ErrorCategory.AUTH_ERROR
    if status_code == 429:
        return ErrorCategory.THROTTLED
    if 200 <= status_code < 300:
        return ErrorCategory.NONE
    return ErrorCategory.HTTP_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request to the store timed out",
        ErrorCategory.THROTTLED: "Store API rate limit reached",
        ErrorCategory.AUTH_ERROR: "Access token rejected by the store",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.HTTP_ERROR: "Store returned an HTTP error",
        ErrorCategory.GRAPHQL_ERROR: "Store rejected the GraphQL request",
        ErrorCategory.MALFORMED_RESPONSE: "Store returned an unreadable response",
        ErrorCategory.UNKNOWN_ERROR: "Unexpected error talking to the store",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


def describe_failure(exc: GraphQLError) -> str:
    """Prefix the raw failure with the user-facing reason for its category."""
    reason = error_category_to_reason(exc.category)
    return f"{reason}: {exc}" if reason else str(exc)
