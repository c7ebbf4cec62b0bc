# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-product tag decision."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.filters import Mode


@dataclass(frozen=True)
class TagDecision:
    changed: bool
    tags: tuple[str, ...]

    @property
    def is_noop(self) -> bool:
        return not self.changed


def decide(tags: Sequence[str], tag: str, mode: Mode) -> TagDecision:
    """
    Decide whether applying/removing ``tag`` changes ``tags``.

    Comparison is exact and case-sensitive. Apply appends at the end; remove
    drops every occurrence and keeps the order of the remaining tags.
    """
    current = tuple(tags)
    present = tag in current

    if mode is Mode.APPLY:
        if present:
            return TagDecision(changed=False, tags=current)
        return TagDecision(changed=True, tags=current + (tag,))

    if not present:
        return TagDecision(changed=False, tags=current)
    return TagDecision(changed=True, tags=tuple(existing for existing in current if existing != tag))
