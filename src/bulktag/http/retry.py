# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for HttpClient implementations."""

from __future__ import annotations

import logging
import time

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse, RetryConfig

logger = logging.getLogger(__name__)


def build_default_retry_config(settings: HttpSettings | None = None) -> RetryConfig:
    """Create a RetryConfig from environment-backed HttpSettings."""
    return RetryConfig.from_settings(settings or load_http_settings())


def send_with_retries(
    client: HttpClient,
    request: HttpRequest,
    *,
    retry_config: RetryConfig | None = None,
    settings: HttpSettings | None = None,
) -> HttpResponse:
    """Execute a request with basic retry/backoff semantics."""
    settings = settings or load_http_settings()
    cfg = retry_config or build_default_retry_config(settings)

    attempt = 0
    delay = cfg.initial_delay
    last_response: HttpResponse | None = None
    budget = settings.retry_budget_cap if settings.retry_budget_cap and settings.retry_budget_cap > 0 else 0.0
    deadline = time.monotonic() + budget if budget > 0 else None

    while attempt < cfg.max_attempts:
        if deadline is not None and time.monotonic() >= deadline:
            break
        try:
            response = client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                error_message=str(exc),
                error_type=exc.__class__.__name__,
            )
        last_response = response

        if response.ok:
            if attempt:
                response.meta["retry_count"] = attempt
            return response

        # Only transport-level failures (no status code) and throttling are retried.
        if response.status_code is not None and response.status_code != 429:
            if attempt:
                response.meta.setdefault("retry_count", attempt)
            return response

        attempt += 1
        if attempt >= cfg.max_attempts:
            break
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            delay_to_sleep = min(delay, remaining)
        else:
            delay_to_sleep = delay
        logger.debug("Retrying %s in %.2fs after: %s", request.url, delay_to_sleep, response.error_message)
        time.sleep(delay_to_sleep)
        delay *= cfg.backoff_factor

    if last_response is not None:
        last_response.meta.setdefault("retry_count", attempt)
        last_response.meta.setdefault("retry_exhausted", True)
        return last_response

    error_message = "Retry budget exhausted" if deadline else None
    return HttpResponse(ok=False, error_message=error_message, meta={"retry_count": attempt, "retry_exhausted": True})
