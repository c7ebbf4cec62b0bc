# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tag decisions and remote tag rewrites."""

from .decision import TagDecision, decide
from .mutation import MutationApplier, MutationOutcome, MutationStatus

__all__ = [
    "MutationApplier",
    "MutationOutcome",
    "MutationStatus",
    "TagDecision",
    "decide",
]
