# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
bulktag package entrypoint.

This package adds or removes a tag across every product matching a set of
filters in a Shopify store, either as a dry run or live through the Admin
GraphQL API. HTTP behavior is abstracted behind an injectable client
interface, and domain objects are modeled with typed dataclasses for clarity.
"""

from .bulk import BulkRunEngine, CatalogPreview, RunState
from .config import (
    HttpSettings,
    RunSettings,
    ShopifySettings,
    load_http_settings,
    load_run_settings,
    load_shopify_settings,
)
from .errors import (
    BulkTagError,
    ErrorCategory,
    GraphQLError,
    InvalidCursorError,
    PageFetchError,
    TagValidationError,
    ValidationError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, RetryConfig, create_default_http_client
from .log import setup_logging
from .models import Direction, FilterCriteria, Mode, PreviewResult, RunResult
from .runtime import BulkTagger
from .version import __version__

__all__ = [
    "BulkRunEngine",
    "BulkTagError",
    "BulkTagger",
    "CatalogPreview",
    "Direction",
    "ErrorCategory",
    "FilterCriteria",
    "GraphQLError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InvalidCursorError",
    "Mode",
    "PageFetchError",
    "PreviewResult",
    "RetryConfig",
    "RunResult",
    "RunSettings",
    "RunState",
    "ShopifySettings",
    "TagValidationError",
    "ValidationError",
    "create_default_http_client",
    "load_http_settings",
    "load_run_settings",
    "load_shopify_settings",
    "setup_logging",
    "__version__",
]
