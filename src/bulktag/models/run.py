# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run request, tally and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import SAMPLE_TITLE_CAP
from .catalog import Collection, Page
from .filters import FilterCriteria, Mode


@dataclass(frozen=True)
class RunRequest:
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    tag: str = ""
    mode: Mode = Mode.APPLY
    dry_run: bool = False


@dataclass
class RunTally:
    """
    Running counts for one bulk run.

    Counters only ever grow. ``updated + skipped + failed`` is the number of
    products visited so far.
    """

    updated: int = 0
    skipped: int = 0
    failed: int = 0
    sample_titles: list[str] = field(default_factory=list)

    @property
    def visited(self) -> int:
        return self.updated + self.skipped + self.failed

    def record_skip(self) -> None:
        self.skipped += 1

    def record_update(self) -> None:
        self.updated += 1

    def record_failure(self) -> None:
        self.failed += 1

    def record_sample(self, title: str) -> None:
        if len(self.sample_titles) < SAMPLE_TITLE_CAP:
            self.sample_titles.append(title)


@dataclass(frozen=True)
class RunProgress:
    """Snapshot emitted after each processed page."""

    page: int
    visited: int
    updated: int
    skipped: int
    failed: int


@dataclass
class RunResult:
    """Tally-shaped outcome returned for every run, including aborted ones."""

    updated: int
    skipped: int
    failed: int
    dry_run: bool
    mode: Mode
    sample_titles: list[str] | None = None
    pages: int = 0
    error: str | None = None
    cancelled: bool = False

    @property
    def action_word(self) -> str:
        return self.mode.action_word

    @property
    def completed(self) -> bool:
        return self.error is None and not self.cancelled

    @classmethod
    def from_tally(
        cls,
        tally: RunTally,
        *,
        dry_run: bool,
        mode: Mode,
        pages: int,
        error: str | None = None,
        cancelled: bool = False,
    ) -> RunResult:
        return cls(
            updated=tally.updated,
            skipped=tally.skipped,
            failed=tally.failed,
            dry_run=dry_run,
            mode=mode,
            sample_titles=list(tally.sample_titles[:SAMPLE_TITLE_CAP]) if dry_run else None,
            pages=pages,
            error=error,
            cancelled=cancelled,
        )

    def summary(self) -> str:
        if self.dry_run:
            return (
                f"Dry run: {self.updated} would be {self.action_word}, "
                f"{self.skipped} skipped, {self.failed} failed (simulated)."
            )
        return f"{self.updated} {self.action_word}, {self.skipped} skipped, {self.failed} failed."

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
            "dry_run": self.dry_run,
            "mode": self.mode.value,
            "action_word": self.action_word,
            "pages": self.pages,
            "cancelled": self.cancelled,
            "error": self.error,
        }
        if self.sample_titles is not None:
            data["sample_titles"] = list(self.sample_titles)
        return data


@dataclass
class PreviewResult:
    page: Page
    total_count: int = 0
    collections: list[Collection] = field(default_factory=list)
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page.to_dict(),
            "total_count": self.total_count,
            "collections": [collection.to_dict() for collection in self.collections],
            "filters": self.filters.to_dict(),
            "error": self.error,
        }
