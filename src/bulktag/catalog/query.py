# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Search-syntax query building.

Filter values are user input and end up inside a backend search expression,
so every free-text value passes through ``escape_search_value`` before it is
interpolated. A multi-word keyword is wrapped in its own group so words such as
``OR`` cannot widen the match past the product type or collection clauses.
Collection members are reduced to numeric ids and rendered as an OR group; an
empty group becomes ``EMPTY_MATCH_CLAUSE`` so a collection filter that resolved
to nothing still matches nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..models.filters import FilterCriteria

PRODUCT_GID_PREFIX = "gid://shopify/Product/"
# No product has id 0; the clause keeps the filter in place while matching nothing.
EMPTY_MATCH_CLAUSE = "(id:0)"
CLAUSE_JOINER = " AND "

_SPECIAL_CHARS_RE = re.compile(r'(["\\()])')
_NUMERIC_ID_RE = re.compile(r"[0-9]+")


def escape_search_value(value: str | None) -> str:
    """Backslash-escape quotes, backslashes and parentheses, then trim."""
    return _SPECIAL_CHARS_RE.sub(r"\\\1", str(value or "")).strip()


def _quote_if_spaced(value: str) -> str:
    # Multi-word values must be quoted to stay a single term.
    return f'"{value}"' if any(ch.isspace() for ch in value) else value


def _group_if_spaced(clause: str, value: str) -> str:
    # Keeps operators inside a multi-word value from binding to the other clauses.
    return f"({clause})" if any(ch.isspace() for ch in value) else clause


def numeric_product_id(product_id: str) -> str | None:
    """Reduce a product GID (or bare id) to its numeric id; None if it is not one."""
    raw = str(product_id or "").strip()
    if raw.startswith(PRODUCT_GID_PREFIX):
        raw = raw[len(PRODUCT_GID_PREFIX) :]
    return raw if _NUMERIC_ID_RE.fullmatch(raw) else None


def id_membership_clause(product_ids: Iterable[str]) -> str:
    numeric_ids = [pid for pid in (numeric_product_id(item) for item in product_ids) if pid]
    if not numeric_ids:
        return EMPTY_MATCH_CLAUSE
    return "(" + " OR ".join(f"id:{pid}" for pid in numeric_ids) + ")"


def build_query_expression(
    filters: FilterCriteria,
    collection_product_ids: Iterable[str] | None = None,
) -> str | None:
    """
    Combine title, product type and collection membership clauses with AND.

    ``collection_product_ids`` is consulted only when ``filters.collection_id``
    is set. Returns None when no clause applies.
    """
    clauses: list[str] = []

    keyword = escape_search_value(filters.keyword)
    if keyword:
        clauses.append(_group_if_spaced(f"title:*{keyword}*", keyword))

    product_type = escape_search_value(filters.product_type)
    if product_type:
        clauses.append(f"product_type:{_quote_if_spaced(product_type)}")

    if filters.collection_id:
        clauses.append(id_membership_clause(collection_product_ids or ()))

    return CLAUSE_JOINER.join(clauses) if clauses else None


__all__ = [
    "EMPTY_MATCH_CLAUSE",
    "PRODUCT_GID_PREFIX",
    "build_query_expression",
    "escape_search_value",
    "id_membership_clause",
    "numeric_product_id",
]
