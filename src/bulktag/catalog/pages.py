# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cursor-paginated product reads."""

from __future__ import annotations

import re
from typing import Any

from ..config import RunSettings
from ..errors import ErrorCategory, GraphQLError, InvalidCursorError, PageFetchError
from ..graphql.client import GraphQLClient
from ..graphql.queries import PRODUCTS_COUNT_QUERY, PRODUCTS_PAGE_QUERY
from ..models.catalog import Page
from ..models.filters import Direction

PREVIEW_PAGE_SIZE = RunSettings.preview_page_size
BULK_PAGE_SIZE = RunSettings.bulk_page_size

_CURSOR_RE = re.compile(r"[A-Za-z0-9+/=]*")


def is_valid_cursor(cursor: str | None) -> bool:
    return cursor is None or _CURSOR_RE.fullmatch(cursor) is not None


def validate_cursor(cursor: str | None) -> str | None:
    """Return the cursor (None for empty) or raise InvalidCursorError."""
    if not is_valid_cursor(cursor):
        raise InvalidCursorError(str(cursor))
    return cursor or None


def pagination_variables(cursor: str | None, direction: Direction, page_size: int) -> dict[str, Any]:
    if direction is Direction.PREV and cursor:
        return {"last": page_size, "before": cursor}
    if cursor:
        return {"first": page_size, "after": cursor}
    return {"first": page_size}


class PageFetcher:
    """Reads one page of products matching a query expression."""

    def __init__(self, client: GraphQLClient):
        self.client = client

    def fetch(
        self,
        query: str | None,
        cursor: str | None = None,
        direction: Direction = Direction.NEXT,
        page_size: int = PREVIEW_PAGE_SIZE,
    ) -> Page:
        cursor = validate_cursor(cursor)
        variables = pagination_variables(cursor, direction, page_size)
        if query:
            variables["query"] = query
        try:
            data = self.client.execute(PRODUCTS_PAGE_QUERY, variables)
        except GraphQLError as exc:
            raise PageFetchError(
                f"Product page read failed: {exc}",
                category=exc.category,
                errors=exc.errors,
                status_code=exc.status_code,
            ) from exc

        connection = data.get("products")
        if not isinstance(connection, dict):
            raise PageFetchError(
                "Product page response has no products connection",
                category=ErrorCategory.MALFORMED_RESPONSE,
            )
        return Page.from_connection(connection)

    def count(self, query: str | None) -> int:
        data = self.client.execute(PRODUCTS_COUNT_QUERY, {"query": query} if query else None)
        count = (data.get("productsCount") or {}).get("count")
        return int(count) if isinstance(count, int) else 0
