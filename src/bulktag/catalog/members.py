# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Collection membership and listing reads."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..config import COLLECTION_LIST_LIMIT, COLLECTION_MEMBER_CAP
from ..errors import GraphQLError, categorize_exception
from ..graphql.client import GraphQLClient
from ..graphql.queries import COLLECTION_MEMBERS_QUERY, COLLECTIONS_QUERY
from ..models.catalog import Collection

logger = logging.getLogger(__name__)


class CollectionResolver:
    """
    Resolves a collection to the ids of its first ``member_cap`` products.

    Collections larger than the cap filter on their first members only. Any
    failure degrades to an empty tuple so a bad collection never aborts a run.
    """

    def __init__(self, client: GraphQLClient, member_cap: int = COLLECTION_MEMBER_CAP):
        self.client = client
        self.member_cap = member_cap

    def resolve(self, collection_id: str | None) -> tuple[str, ...]:
        if not collection_id:
            return ()
        try:
            data = self.client.execute(
                COLLECTION_MEMBERS_QUERY,
                {"id": collection_id, "first": self.member_cap},
            )
        except (GraphQLError, ValueError) as exc:
            logger.warning(
                "Collection %s could not be resolved (%s): %s",
                collection_id,
                categorize_exception(exc).value,
                exc,
            )
            return ()

        collection = data.get("collection")
        if not isinstance(collection, Mapping):
            logger.warning("Collection %s not found", collection_id)
            return ()
        nodes = (collection.get("products") or {}).get("nodes") or []
        member_ids = tuple(str(node["id"]) for node in nodes if isinstance(node, Mapping) and node.get("id"))
        return member_ids[: self.member_cap]


def list_collections(client: GraphQLClient, limit: int = COLLECTION_LIST_LIMIT) -> list[Collection]:
    data = client.execute(COLLECTIONS_QUERY, {"first": limit})
    nodes = (data.get("collections") or {}).get("nodes") or []
    return [Collection.from_node(node) for node in nodes if isinstance(node, Mapping)]
