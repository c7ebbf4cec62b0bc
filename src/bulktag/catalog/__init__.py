# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Catalog reads: query building, collection resolution and pagination."""

from .members import CollectionResolver, list_collections
from .pages import BULK_PAGE_SIZE, PREVIEW_PAGE_SIZE, PageFetcher, is_valid_cursor, validate_cursor
from .query import EMPTY_MATCH_CLAUSE, build_query_expression, escape_search_value

__all__ = [
    "BULK_PAGE_SIZE",
    "EMPTY_MATCH_CLAUSE",
    "PREVIEW_PAGE_SIZE",
    "CollectionResolver",
    "PageFetcher",
    "build_query_expression",
    "escape_search_value",
    "is_valid_cursor",
    "list_collections",
    "validate_cursor",
]
