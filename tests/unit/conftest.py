# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import base64
import json

import pytest

from bulktag.config import HttpSettings, ShopifySettings
from bulktag.graphql.client import GraphQLClient
from bulktag.http.models import HttpRequest, HttpResponse


def encode_cursor(index: int) -> str:
    return base64.b64encode(f"cursor:{index}".encode()).decode()


def decode_cursor(cursor: str) -> int:
    return int(base64.b64decode(cursor).decode().split(":", 1)[1])


class FakeShop:
    """In-memory Admin API: paginates products, resolves collections and applies productUpdate."""

    def __init__(self, products=None, collections=None):
        self.products = [dict(p) for p in (products or [])]
        self.collections = dict(collections or {})
        self.requests: list[dict] = []
        self.reject_ids: set[str] = set()
        self.transport_fail_ids: set[str] = set()
        self.fail_page_reads_from: int | None = None
        self.fail_collection_reads = False
        self.fail_count_reads = False
        self.throttle_page_reads: set[int] = set()
        self.bad_end_cursor_pages: set[int] = set()

    # HttpClient protocol
    def request(self, request: HttpRequest) -> HttpResponse:
        payload = json.loads(request.body)
        self.requests.append(payload)
        document = payload["query"]
        variables = payload.get("variables") or {}
        if "productUpdate" in document:
            return self._product_update(variables)
        if "CollectionMembers" in document:
            return self._collection_members(variables)
        if "productsCount" in document:
            if self.fail_count_reads:
                return HttpResponse(ok=False, error_message="connection reset", error_type="ReadError")
            return HttpResponse.from_payload({"data": {"productsCount": {"count": len(self.products)}}})
        if "collections(" in document:
            nodes = [{"id": cid, "title": cid.rsplit("/", 1)[-1], "handle": "h"} for cid in self.collections]
            return HttpResponse.from_payload({"data": {"collections": {"nodes": nodes}}})
        return self._products_page(variables)

    def close(self) -> None:
        return None

    @property
    def mutation_calls(self) -> list[dict]:
        return [r for r in self.requests if "productUpdate" in r["query"]]

    @property
    def page_reads(self) -> list[dict]:
        return [r for r in self.requests if "ProductsPage" in r["query"]]

    def tags_of(self, product_id: str) -> list[str]:
        return next(p["tags"] for p in self.products if p["id"] == product_id)

    def _products_page(self, variables) -> HttpResponse:
        page_number = len(self.page_reads)
        if self.fail_page_reads_from is not None and page_number >= self.fail_page_reads_from:
            return HttpResponse(ok=False, error_message="timed out", error_type="ReadTimeout")
        if page_number in self.throttle_page_reads:
            self.throttle_page_reads.discard(page_number)
            return HttpResponse.from_payload(
                {"errors": [{"message": "Throttled", "extensions": {"code": "THROTTLED"}}]}
            )
        if "last" in variables:
            end = decode_cursor(variables["before"])
            start = max(0, end - variables["last"])
        else:
            start = decode_cursor(variables["after"]) + 1 if variables.get("after") else 0
            end = start + variables["first"]
        window = self.products[start:end]
        last_index = start + len(window) - 1
        end_cursor = encode_cursor(last_index) if window else None
        if page_number in self.bad_end_cursor_pages:
            end_cursor = "bad!!"
        return HttpResponse.from_payload(
            {
                "data": {
                    "products": {
                        "nodes": [dict(p) for p in window],
                        "pageInfo": {
                            "hasNextPage": end < len(self.products),
                            "hasPreviousPage": start > 0,
                            "startCursor": encode_cursor(start) if window else None,
                            "endCursor": end_cursor,
                        },
                    }
                }
            }
        )

    def _collection_members(self, variables) -> HttpResponse:
        if self.fail_collection_reads:
            return HttpResponse(ok=False, error_message="connection refused", error_type="ConnectError")
        members = self.collections.get(variables["id"])
        if members is None:
            return HttpResponse.from_payload({"data": {"collection": None}})
        nodes = [{"id": member} for member in members[: variables["first"]]]
        return HttpResponse.from_payload({"data": {"collection": {"products": {"nodes": nodes}}}})

    def _product_update(self, variables) -> HttpResponse:
        product_input = variables["input"]
        product_id = product_input["id"]
        if product_id in self.transport_fail_ids:
            return HttpResponse(ok=False, error_message="connection reset", error_type="ReadError")
        if product_id in self.reject_ids:
            return HttpResponse.from_payload(
                {
                    "data": {
                        "productUpdate": {
                            "product": None,
                            "userErrors": [{"field": ["tags"], "message": "Tags are invalid"}],
                        }
                    }
                }
            )
        for product in self.products:
            if product["id"] == product_id:
                product["tags"] = list(product_input["tags"])
        return HttpResponse.from_payload(
            {"data": {"productUpdate": {"product": {"id": product_id, "tags": product_input["tags"]}, "userErrors": []}}}
        )


def make_products(count: int, *, tagged=(), tag="Sale"):
    products = []
    for index in range(1, count + 1):
        tags = ["existing"]
        if index in tagged:
            tags.append(tag)
        products.append({"id": f"gid://shopify/Product/{index}", "title": f"Product {index}", "tags": tags})
    return products


@pytest.fixture
def http_settings():
    return HttpSettings(max_retries=1, initial_delay=0.0, retry_budget_cap=0)


@pytest.fixture
def shopify_settings():
    return ShopifySettings(shop="example.myshopify.com", access_token="shpat_test", api_version="2025-01")


@pytest.fixture
def graphql_factory(http_settings, shopify_settings):
    def factory(http_client):
        return GraphQLClient(http_client, shopify_settings, http_settings)

    return factory


@pytest.fixture
def shop_factory():
    return FakeShop


@pytest.fixture
def products_factory():
    return make_products
