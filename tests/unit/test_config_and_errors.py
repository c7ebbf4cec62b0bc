# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx

from bulktag import config
from bulktag.config import DEFAULT_USER_AGENT, RunSettings, ShopifySettings
from bulktag.errors import (
    ErrorCategory,
    GraphQLError,
    categorize_exception,
    categorize_status,
    describe_failure,
    error_category_to_reason,
)
from bulktag.models import Direction, FilterCriteria, Mode


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("BULKTAG_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("BULKTAG_HTTP_RETRIES", "0")
    monkeypatch.setenv("BULKTAG_HTTP_BACKOFF", "1.5")
    monkeypatch.setenv("BULKTAG_HTTP_INITIAL_DELAY", "0.1")
    monkeypatch.setenv("BULKTAG_HTTP_RETRY_BUDGET_CAP", "50")
    monkeypatch.setenv("BULKTAG_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("BULKTAG_HTTP_VERIFY_SSL", "0")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.max_retries == 0  # retry config clamps later
    assert settings.backoff_factor == 1.5
    assert settings.initial_delay == 0.1
    assert settings.retry_budget_cap == 50
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("BULKTAG_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("BULKTAG_HTTP_RETRIES", "ten")
    monkeypatch.setenv("BULKTAG_HTTP_BACKOFF", "")

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_retries == config.HttpSettings.max_retries
    assert settings.backoff_factor == config.HttpSettings.backoff_factor
    assert DEFAULT_USER_AGENT in settings.user_agent


def test_run_settings_reject_non_positive_values(monkeypatch):
    monkeypatch.setenv("BULKTAG_BULK_PAGE_SIZE", "0")
    monkeypatch.setenv("BULKTAG_PREVIEW_PAGE_SIZE", "25")
    monkeypatch.setenv("BULKTAG_MAX_WORKERS", "-3")
    settings = config.load_run_settings()
    assert settings.bulk_page_size == RunSettings.bulk_page_size
    assert settings.preview_page_size == 25
    assert settings.max_workers == RunSettings.max_workers


def test_shopify_settings_endpoint(monkeypatch):
    monkeypatch.setenv("BULKTAG_SHOP", "https://demo.myshopify.com/")
    monkeypatch.setenv("BULKTAG_ACCESS_TOKEN", "token")
    monkeypatch.delenv("BULKTAG_API_VERSION", raising=False)
    settings = config.load_shopify_settings()
    assert settings.configured
    assert settings.endpoint == f"https://demo.myshopify.com/admin/api/{config.DEFAULT_API_VERSION}/graphql.json"
    assert ShopifySettings(shop="demo.myshopify.com").endpoint.startswith("https://demo.myshopify.com/")
    assert not ShopifySettings(shop="demo.myshopify.com").configured


def test_categorize_exception_variants():
    request = httpx.Request("POST", "https://shop.test")
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("down", request=request)) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("bad json")) is ErrorCategory.MALFORMED_RESPONSE
    assert categorize_exception(GraphQLError("x", category=ErrorCategory.THROTTLED)) is ErrorCategory.THROTTLED
    assert categorize_exception(RuntimeError("?")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_status():
    assert categorize_status(None) is ErrorCategory.CONNECTION_ERROR
    assert categorize_status(401) is ErrorCategory.AUTH_ERROR
    assert categorize_status(429) is ErrorCategory.THROTTLED
    assert categorize_status(500) is ErrorCategory.HTTP_ERROR
    assert categorize_status(200) is ErrorCategory.NONE


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.THROTTLED) == "Store API rate limit reached"
    assert error_category_to_reason(None) == ""


def test_describe_failure_prefixes_reason():
    throttled = GraphQLError("Throttled", category=ErrorCategory.THROTTLED)
    assert describe_failure(throttled) == "Store API rate limit reached: Throttled"
    assert describe_failure(GraphQLError("ok", category=ErrorCategory.NONE)) == "ok"


def test_filter_and_mode_parsing():
    filters = FilterCriteria(keyword="  mug ", product_type="", collection_id=None)
    assert filters.keyword == "mug"
    assert filters.product_type is None
    assert Mode.parse("remove") is Mode.REMOVE
    assert Mode.parse("anything") is Mode.APPLY
    assert Mode.APPLY.action_word == "applied"
    assert Direction.parse("prev") is Direction.PREV
    assert Direction.parse(None) is Direction.NEXT
