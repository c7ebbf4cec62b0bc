# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bulk run engine and catalog preview."""

from .engine import BulkRunEngine, RunState
from .preview import CatalogPreview

__all__ = ["BulkRunEngine", "CatalogPreview", "RunState"]
