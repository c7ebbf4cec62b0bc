# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GraphQL envelope handling on top of the HttpClient protocol."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from ..config import HttpSettings, ShopifySettings, load_http_settings, load_shopify_settings
from ..errors import ErrorCategory, GraphQLError, categorize_status
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse, RetryConfig
from ..http.retry import build_default_retry_config, send_with_retries

logger = logging.getLogger(__name__)


class GraphQLClient:
    """Posts GraphQL documents to the store and unwraps the ``data`` envelope."""

    def __init__(
        self,
        http_client: HttpClient,
        shopify_settings: ShopifySettings | None = None,
        http_settings: HttpSettings | None = None,
    ):
        self.http_client = http_client
        self.shopify_settings = shopify_settings or load_shopify_settings()
        self.http_settings = http_settings or load_http_settings()

    def execute(
        self,
        document: str,
        variables: dict[str, Any] | None = None,
        *,
        retry: bool = True,
    ) -> dict[str, Any]:
        """
        Run one GraphQL operation and return its ``data`` mapping.

        Raises GraphQLError for transport failures, non-2xx statuses, top-level
        GraphQL ``errors`` and payloads that are not a JSON object with ``data``.
        Mutation-level ``userErrors`` are part of ``data`` and left to the caller.

        With ``retry`` set, transport failures and HTTP 429 are retried by
        ``send_with_retries``; a 2xx response carrying a ``THROTTLED`` error is
        retried here with the same backoff. Without it, exactly one request is sent.
        """
        payload: dict[str, Any] = {"query": document}
        if variables:
            payload["variables"] = variables
        request = HttpRequest(
            url=self.shopify_settings.endpoint,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "X-Shopify-Access-Token": self.shopify_settings.access_token,
            },
            body=json.dumps(payload),
        )
        retry_config = build_default_retry_config(self.http_settings) if retry else RetryConfig.single_attempt()
        delay = retry_config.initial_delay
        attempt = 1
        while True:
            response = send_with_retries(
                self.http_client, request, retry_config=retry_config, settings=self.http_settings
            )
            try:
                return self._unwrap(response)
            except GraphQLError as exc:
                # HTTP-level throttling was already retried by send_with_retries.
                if not response.ok or exc.category is not ErrorCategory.THROTTLED:
                    raise
                if attempt >= retry_config.max_attempts:
                    raise
                logger.warning("Store throttled the request, retrying in %.2fs (attempt %d)", delay, attempt)
                time.sleep(delay)
                delay *= retry_config.backoff_factor
                attempt += 1

    @staticmethod
    def _unwrap(response: HttpResponse) -> dict[str, Any]:
        if not response.ok:
            category = categorize_status(response.status_code)
            if response.status_code is None and "timeout" in (response.error_type or "").lower():
                category = ErrorCategory.TIMEOUT
            raise GraphQLError(
                response.error_message or f"HTTP {response.status_code}",
                category=category,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise GraphQLError(
                f"Response is not valid JSON: {exc}",
                category=ErrorCategory.MALFORMED_RESPONSE,
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            raise GraphQLError(
                "Response is not a JSON object",
                category=ErrorCategory.MALFORMED_RESPONSE,
                status_code=response.status_code,
            )

        errors = body.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [{"message": str(errors)}]
            throttled = any(
                isinstance(err, dict) and (err.get("extensions") or {}).get("code") == "THROTTLED" for err in errors
            )
            messages = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            raise GraphQLError(
                messages or "GraphQL request failed",
                category=ErrorCategory.THROTTLED if throttled else ErrorCategory.GRAPHQL_ERROR,
                errors=[err for err in errors if isinstance(err, dict)],
                status_code=response.status_code,
            )

        data = body.get("data")
        if not isinstance(data, dict):
            raise GraphQLError(
                "Response has no data object",
                category=ErrorCategory.MALFORMED_RESPONSE,
                status_code=response.status_code,
            )
        return data
