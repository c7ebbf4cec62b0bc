# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Remote tag rewrites through the productUpdate mutation."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ErrorCategory, GraphQLError, categorize_exception
from ..graphql.client import GraphQLClient
from ..graphql.queries import PRODUCT_TAGS_UPDATE_MUTATION

logger = logging.getLogger(__name__)


class MutationStatus(str, Enum):
    APPLIED = "applied"
    REJECTED = "rejected"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class MutationOutcome:
    product_id: str
    status: MutationStatus
    messages: tuple[str, ...] = field(default_factory=tuple)

    @property
    def applied(self) -> bool:
        return self.status is MutationStatus.APPLIED


def _format_user_errors(user_errors: Sequence[Any]) -> tuple[str, ...]:
    messages = []
    for err in user_errors:
        if not isinstance(err, Mapping):
            messages.append(str(err))
            continue
        field_path = err.get("field")
        if isinstance(field_path, list):
            field_path = ".".join(str(part) for part in field_path)
        message = str(err.get("message") or "")
        messages.append(f"{field_path}: {message}" if field_path else message)
    return tuple(messages)


class MutationApplier:
    """Overwrites one product's tag list. Single attempt; failures are classified, not raised."""

    def __init__(self, client: GraphQLClient):
        self.client = client

    def apply(self, product_id: str, tags: Sequence[str]) -> MutationOutcome:
        try:
            data = self.client.execute(
                PRODUCT_TAGS_UPDATE_MUTATION,
                {"input": {"id": product_id, "tags": list(tags)}},
                retry=False,
            )
            payload = data.get("productUpdate")
            if not isinstance(payload, Mapping):
                raise GraphQLError(
                    "productUpdate payload missing from response",
                    category=ErrorCategory.MALFORMED_RESPONSE,
                )
        except (GraphQLError, ValueError) as exc:
            logger.error(
                "Tag update for %s failed in transport (%s): %s",
                product_id,
                categorize_exception(exc).value,
                exc,
            )
            return MutationOutcome(product_id, MutationStatus.TRANSPORT_ERROR, (str(exc),))

        user_errors = payload.get("userErrors") or []
        if user_errors:
            messages = _format_user_errors(user_errors)
            logger.warning("Tag update for %s rejected: %s", product_id, "; ".join(messages))
            return MutationOutcome(product_id, MutationStatus.REJECTED, messages)
        return MutationOutcome(product_id, MutationStatus.APPLIED)
