# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Read-only preview: one product page, the match count and the collection list."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..catalog.members import CollectionResolver
from ..catalog.pages import PREVIEW_PAGE_SIZE, PageFetcher, validate_cursor
from ..catalog.query import build_query_expression
from ..errors import GraphQLError
from ..models.catalog import Collection, Page
from ..models.filters import Direction, FilterCriteria
from ..models.run import PreviewResult

logger = logging.getLogger(__name__)

PREVIEW_ERROR_MESSAGE = "Failed to load products."


class CatalogPreview:
    def __init__(
        self,
        resolver: CollectionResolver,
        fetcher: PageFetcher,
        collection_lister: Callable[[], list[Collection]],
        *,
        page_size: int = PREVIEW_PAGE_SIZE,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.collection_lister = collection_lister
        self.page_size = page_size

    def run(
        self,
        filters: FilterCriteria,
        cursor: str | None = None,
        direction: Direction = Direction.NEXT,
    ) -> PreviewResult:
        """Raises InvalidCursorError for malformed cursors; read failures come back as ``error``."""
        cursor = validate_cursor(cursor)
        member_ids = self.resolver.resolve(filters.collection_id)
        query = build_query_expression(filters, member_ids)
        try:
            page = self.fetcher.fetch(query, cursor, direction, self.page_size)
            total_count = self.fetcher.count(query)
            collections = self.collection_lister()
        except GraphQLError as exc:
            logger.error("Preview failed: %s", exc)
            return PreviewResult(page=Page(), filters=filters, error=PREVIEW_ERROR_MESSAGE)
        return PreviewResult(page=page, total_count=total_count, collections=collections, filters=filters)
