# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable HttpClient implementations for fixtures and tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic HttpClient that answers through a handler callable."""

    def __init__(self, handler: Callable[[HttpRequest], HttpResponse] | None = None):
        self._handler = handler
        self.requests: list[HttpRequest] = []

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self._handler is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        return self._handler(request)

    def close(self) -> None:
        return None


class SequenceHttpClient(HttpClient):
    """Replays a fixed list of responses; the last one repeats once the list runs out."""

    def __init__(self, responses: Iterable[HttpResponse]):
        self._responses = list(responses)
        self.requests: list[HttpRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if not self._responses:
            return HttpResponse(ok=False, error_message="No stubbed response configured")
        return self._responses[min(self.calls - 1, len(self._responses) - 1)]

    def close(self) -> None:
        return None
