# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GraphQL transport and documents."""

from .client import GraphQLClient

__all__ = ["GraphQLClient"]
