# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for bulktag."""

from ..http.models import Headers, HttpRequest, HttpResponse, RetryConfig
from .catalog import Collection, Page, ProductRecord
from .filters import Direction, FilterCriteria, Mode
from .run import PreviewResult, RunProgress, RunRequest, RunResult, RunTally

__all__ = [
    "Collection",
    "Direction",
    "FilterCriteria",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "Mode",
    "Page",
    "PreviewResult",
    "ProductRecord",
    "RetryConfig",
    "RunProgress",
    "RunRequest",
    "RunResult",
    "RunTally",
]
