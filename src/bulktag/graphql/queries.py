# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""GraphQL documents sent to the Admin API."""

from typing import Final

PRODUCTS_PAGE_QUERY: Final = """
query ProductsPage($first: Int, $after: String, $last: Int, $before: String, $query: String) {
  products(first: $first, after: $after, last: $last, before: $before, query: $query) {
    nodes {
      id
      title
      tags
      productType
    }
    pageInfo {
      hasNextPage
      hasPreviousPage
      startCursor
      endCursor
    }
  }
}
"""

PRODUCTS_COUNT_QUERY: Final = """
query ProductsCount($query: String) {
  productsCount(query: $query) {
    count
  }
}
"""

COLLECTION_MEMBERS_QUERY: Final = """
query CollectionMembers($id: ID!, $first: Int!) {
  collection(id: $id) {
    products(first: $first) {
      nodes {
        id
      }
    }
  }
}
"""

COLLECTIONS_QUERY: Final = """
query Collections($first: Int!) {
  collections(first: $first) {
    nodes {
      id
      title
      handle
    }
  }
}
"""

PRODUCT_TAGS_UPDATE_MUTATION: Final = """
mutation UpdateProductTags($input: ProductInput!) {
  productUpdate(input: $input) {
    product {
      id
      tags
    }
    userErrors {
      field
      message
    }
  }
}
"""

__all__ = [
    "COLLECTIONS_QUERY",
    "COLLECTION_MEMBERS_QUERY",
    "PRODUCTS_COUNT_QUERY",
    "PRODUCTS_PAGE_QUERY",
    "PRODUCT_TAGS_UPDATE_MUTATION",
]
