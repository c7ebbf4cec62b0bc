# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level bulktag facade for preview and bulk tag runs."""

from __future__ import annotations

import threading
from contextlib import suppress
from functools import partial

from .bulk.engine import BulkRunEngine, ProgressCallback
from .bulk.preview import CatalogPreview
from .catalog.members import CollectionResolver, list_collections
from .catalog.pages import PageFetcher
from .config import (
    HttpSettings,
    RunSettings,
    ShopifySettings,
    load_http_settings,
    load_run_settings,
    load_shopify_settings,
)
from .graphql.client import GraphQLClient
from .http.client import HttpClient, create_default_http_client
from .models import Direction, FilterCriteria, Mode, PreviewResult, RunRequest, RunResult
from .tagging.mutation import MutationApplier


class BulkTagger:
    """
    Convenience wrapper that wires one HTTP client through every catalog read and tag write.

    The engines are rebuilt from the shared client, so a BulkTagger can serve
    any number of sequential runs; no run state is kept on it.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        shopify_settings: ShopifySettings | None = None,
        http_settings: HttpSettings | None = None,
        run_settings: RunSettings | None = None,
    ):
        self.http_settings = http_settings or load_http_settings()
        self.shopify_settings = shopify_settings or load_shopify_settings()
        self.run_settings = run_settings or load_run_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.graphql = GraphQLClient(self.http_client, self.shopify_settings, self.http_settings)
        self.resolver = CollectionResolver(self.graphql)
        self.fetcher = PageFetcher(self.graphql)
        self.applier = MutationApplier(self.graphql)

    def run(
        self,
        filters: FilterCriteria,
        tag: str,
        *,
        mode: Mode = Mode.APPLY,
        dry_run: bool = False,
        max_workers: int | None = None,
        cancel_event: threading.Event | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> RunResult:
        engine = BulkRunEngine(
            self.resolver,
            self.fetcher,
            self.applier,
            page_size=self.run_settings.bulk_page_size,
            max_workers=max_workers or self.run_settings.max_workers,
        )
        request = RunRequest(filters=filters, tag=tag, mode=mode, dry_run=dry_run)
        return engine.run(request, cancel_event=cancel_event, on_progress=on_progress)

    def preview(
        self,
        filters: FilterCriteria,
        *,
        cursor: str | None = None,
        direction: Direction = Direction.NEXT,
    ) -> PreviewResult:
        preview = CatalogPreview(
            self.resolver,
            self.fetcher,
            partial(list_collections, self.graphql),
            page_size=self.run_settings.preview_page_size,
        )
        return preview.run(filters, cursor=cursor, direction=direction)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> BulkTagger:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
