# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Bulk tag run engine.

A run moves through ``RunState`` in order: resolve the collection filter,
build the query expression, then alternate between fetching and processing
pages until a page reports no further cursor. Pages are strictly sequential
since each cursor comes from the previous page. Within a page, live mutations
may fan out over a bounded thread pool; the calling thread is the only one
that touches the tally.

A page read failure ends the run with the tally gathered so far and an error.
Mutations already applied stay applied. Per-product failures are counted and
never end the run.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Protocol

from ..catalog.pages import BULK_PAGE_SIZE
from ..catalog.query import build_query_expression
from ..config import RunSettings
from ..errors import InvalidCursorError, PageFetchError, TagValidationError, describe_failure
from ..models.catalog import Page, ProductRecord
from ..models.filters import Direction, Mode
from ..models.run import RunProgress, RunRequest, RunResult, RunTally
from ..tagging.decision import decide
from ..tagging.mutation import MutationOutcome, MutationStatus

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    RESOLVING_COLLECTION = "resolving_collection"
    BUILDING_QUERY = "building_query"
    FETCHING_PAGE = "fetching_page"
    PROCESSING_PAGE = "processing_page"
    DONE = "done"


class CollectionSource(Protocol):
    def resolve(self, collection_id: str | None) -> tuple[str, ...]: ...


class PageSource(Protocol):
    def fetch(
        self,
        query: str | None,
        cursor: str | None = None,
        direction: Direction = Direction.NEXT,
        page_size: int = BULK_PAGE_SIZE,
    ) -> Page: ...


class TagWriter(Protocol):
    def apply(self, product_id: str, tags: Sequence[str]) -> MutationOutcome: ...


ProgressCallback = Callable[[RunProgress], None]
StateCallback = Callable[[RunState], None]


class BulkRunEngine:
    """Drives one full-catalog traversal per ``run`` call; keeps no state between runs."""

    def __init__(
        self,
        resolver: CollectionSource,
        fetcher: PageSource,
        applier: TagWriter,
        *,
        page_size: int = BULK_PAGE_SIZE,
        max_workers: int = RunSettings.max_workers,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.applier = applier
        self.page_size = page_size
        self.max_workers = max(1, max_workers)

    def run(
        self,
        request: RunRequest,
        *,
        cancel_event: threading.Event | None = None,
        on_progress: ProgressCallback | None = None,
        on_state: StateCallback | None = None,
    ) -> RunResult:
        tag = (request.tag or "").strip()
        if not tag:
            raise TagValidationError("Tag cannot be empty")

        def enter(state: RunState) -> None:
            if on_state is not None:
                on_state(state)

        tally = RunTally()
        pages = 0

        def finish(*, error: str | None = None, cancelled: bool = False) -> RunResult:
            enter(RunState.DONE)
            return RunResult.from_tally(
                tally,
                dry_run=request.dry_run,
                mode=request.mode,
                pages=pages,
                error=error,
                cancelled=cancelled,
            )

        enter(RunState.RESOLVING_COLLECTION)
        member_ids = self.resolver.resolve(request.filters.collection_id)

        enter(RunState.BUILDING_QUERY)
        query = build_query_expression(request.filters, member_ids)
        logger.info(
            "Starting %s run for tag %r (dry_run=%s, query=%s)",
            request.mode.value,
            tag,
            request.dry_run,
            query,
        )

        cursor: str | None = None
        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Run cancelled after %d page(s)", pages)
                return finish(cancelled=True)

            enter(RunState.FETCHING_PAGE)
            try:
                page = self.fetcher.fetch(query, cursor, Direction.NEXT, self.page_size)
            except PageFetchError as exc:
                logger.error("Aborting run after %d page(s): %s (%s)", pages, exc, exc.category.value)
                return finish(error=describe_failure(exc))
            except InvalidCursorError as exc:
                logger.error("Aborting run after %d page(s): %s", pages, exc)
                return finish(error=str(exc))

            enter(RunState.PROCESSING_PAGE)
            self._process_page(page, tag, request.mode, request.dry_run, tally)
            pages += 1
            logger.info(
                "Page %d: %d product(s) (updated=%d skipped=%d failed=%d)",
                pages,
                len(page.items),
                tally.updated,
                tally.skipped,
                tally.failed,
            )
            if on_progress is not None:
                on_progress(
                    RunProgress(
                        page=pages,
                        visited=tally.visited,
                        updated=tally.updated,
                        skipped=tally.skipped,
                        failed=tally.failed,
                    )
                )

            if not page.has_more or not page.next_cursor:
                return finish()
            if page.next_cursor == cursor:
                logger.error("Pagination cursor did not advance past %s", cursor)
                return finish(error="Pagination cursor did not advance")
            cursor = page.next_cursor

    def _process_page(self, page: Page, tag: str, mode: Mode, dry_run: bool, tally: RunTally) -> None:
        pending: list[tuple[ProductRecord, tuple[str, ...]]] = []
        for product in page.items:
            decision = decide(product.tags, tag, mode)
            if decision.is_noop:
                tally.record_skip()
                continue
            if dry_run:
                tally.record_sample(product.label)
                tally.record_update()
                continue
            pending.append((product, decision.tags))

        for outcome in self._apply_all(pending):
            if outcome.applied:
                tally.record_update()
            else:
                tally.record_failure()

    def _apply_all(self, pending: list[tuple[ProductRecord, tuple[str, ...]]]) -> list[MutationOutcome]:
        if not pending:
            return []
        workers = min(self.max_workers, len(pending))
        if workers == 1:
            return [self._apply_one(product, tags) for product, tags in pending]

        outcomes: list[MutationOutcome] = []
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bulktag") as pool:
            futures = [pool.submit(self._apply_one, product, tags) for product, tags in pending]
            for future in as_completed(futures):
                outcomes.append(future.result())
        return outcomes

    def _apply_one(self, product: ProductRecord, tags: tuple[str, ...]) -> MutationOutcome:
        try:
            return self.applier.apply(product.id, tags)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tag update for %s raised: %s", product.id, exc)
            return MutationOutcome(product.id, MutationStatus.TRANSPORT_ERROR, (str(exc),))
