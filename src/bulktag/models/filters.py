# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filter and mode models shared by preview and bulk runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Mode(str, Enum):
    APPLY = "apply"
    REMOVE = "remove"

    @property
    def action_word(self) -> str:
        return "removed" if self is Mode.REMOVE else "applied"

    @classmethod
    def parse(cls, value: Any) -> Mode:
        """Anything other than ``remove`` means apply."""
        return cls.REMOVE if str(value or "").strip().lower() == cls.REMOVE.value else cls.APPLY


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"

    @classmethod
    def parse(cls, value: Any) -> Direction:
        return cls.PREV if str(value or "").strip().lower() == cls.PREV.value else cls.NEXT


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


@dataclass(frozen=True)
class FilterCriteria:
    """Structured product filters; blank values mean "not filtered"."""

    keyword: str | None = None
    product_type: str | None = None
    collection_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "keyword", _blank_to_none(self.keyword))
        object.__setattr__(self, "product_type", _blank_to_none(self.product_type))
        object.__setattr__(self, "collection_id", _blank_to_none(self.collection_id))

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "product_type": self.product_type,
            "collection_id": self.collection_id,
        }
