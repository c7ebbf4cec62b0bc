# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for bulktag."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"bulktag/{__version__}"
DEFAULT_API_VERSION = "2025-01"

# Member ids fetched per collection lookup; larger collections filter on the first 250 only.
COLLECTION_MEMBER_CAP = 250
# Collections listed alongside a preview page.
COLLECTION_LIST_LIMIT = 100
# Titles kept for a dry-run report.
SAMPLE_TITLE_CAP = 100


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _positive_int_env(name: str, default: int) -> int:
    value = _int_env(name, default)
    return value if value > 0 else default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    retry_budget_cap: float = 120.0
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("BULKTAG_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("BULKTAG_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("BULKTAG_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("BULKTAG_HTTP_INITIAL_DELAY", cls.initial_delay),
            retry_budget_cap=_float_env("BULKTAG_HTTP_RETRY_BUDGET_CAP", cls.retry_budget_cap),
            user_agent=os.getenv("BULKTAG_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("BULKTAG_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


@dataclass
class ShopifySettings:
    """Store coordinates for the Admin GraphQL API."""

    shop: str = ""
    access_token: str = ""
    api_version: str = DEFAULT_API_VERSION

    @property
    def endpoint(self) -> str:
        shop = self.shop.strip().rstrip("/")
        if not shop.startswith(("http://", "https://")):
            shop = f"https://{shop}"
        return f"{shop}/admin/api/{self.api_version}/graphql.json"

    @property
    def configured(self) -> bool:
        return bool(self.shop.strip() and self.access_token.strip())

    @classmethod
    def from_env(cls) -> "ShopifySettings":
        return cls(
            shop=os.getenv("BULKTAG_SHOP", cls.shop),
            access_token=os.getenv("BULKTAG_ACCESS_TOKEN", cls.access_token),
            api_version=os.getenv("BULKTAG_API_VERSION") or cls.api_version,
        )


@dataclass
class RunSettings:
    """Page sizes and worker pool bounds for preview and bulk runs."""

    preview_page_size: int = 10
    bulk_page_size: int = 50
    max_workers: int = 4

    @classmethod
    def from_env(cls) -> "RunSettings":
        return cls(
            preview_page_size=_positive_int_env("BULKTAG_PREVIEW_PAGE_SIZE", cls.preview_page_size),
            bulk_page_size=_positive_int_env("BULKTAG_BULK_PAGE_SIZE", cls.bulk_page_size),
            max_workers=_positive_int_env("BULKTAG_MAX_WORKERS", cls.max_workers),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_shopify_settings() -> ShopifySettings:
    return ShopifySettings.from_env()


def load_run_settings() -> RunSettings:
    return RunSettings.from_env()
