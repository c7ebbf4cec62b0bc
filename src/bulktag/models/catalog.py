# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Catalog records as read from the Admin API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ProductRecord:
    id: str
    title: str = ""
    tags: tuple[str, ...] = ()
    product_type: str | None = None

    @property
    def label(self) -> str:
        """Title for reports, falling back to the id for untitled products."""
        return self.title or self.id

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> ProductRecord:
        raw_tags = node.get("tags") or []
        return cls(
            id=str(node.get("id") or ""),
            title=str(node.get("title") or ""),
            tags=tuple(str(tag) for tag in raw_tags),
            product_type=node.get("productType") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "tags": list(self.tags),
            "product_type": self.product_type,
        }


@dataclass(frozen=True)
class Page:
    """One page of products plus the cursors needed to move on from it."""

    items: tuple[ProductRecord, ...] = field(default_factory=tuple)
    next_cursor: str | None = None
    previous_cursor: str | None = None
    has_more: bool = False
    has_previous: bool = False

    @classmethod
    def from_connection(cls, connection: Mapping[str, Any] | None) -> Page:
        connection = connection or {}
        page_info = connection.get("pageInfo") or {}
        nodes = connection.get("nodes") or []
        return cls(
            items=tuple(ProductRecord.from_node(node) for node in nodes if isinstance(node, Mapping)),
            next_cursor=page_info.get("endCursor") or None,
            previous_cursor=page_info.get("startCursor") or None,
            has_more=bool(page_info.get("hasNextPage")),
            has_previous=bool(page_info.get("hasPreviousPage")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "next_cursor": self.next_cursor,
            "previous_cursor": self.previous_cursor,
            "has_more": self.has_more,
            "has_previous": self.has_previous,
        }


@dataclass(frozen=True)
class Collection:
    id: str
    title: str = ""
    handle: str = ""

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> Collection:
        return cls(
            id=str(node.get("id") or ""),
            title=str(node.get("title") or ""),
            handle=str(node.get("handle") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "handle": self.handle}
