"""
==============================================================================
GraphQL Catalog Gateway
==============================================================================

Synchronous client for the remote GraphQL catalog.

Operations:
-----------
- get_category_tree: full category tree below a root id
- get_product_by_sku: one product (simple or configurable)
- get_category_products: products directly assigned to a category

Any transport failure, non-2xx status or GraphQL "errors" entry is raised
as GatewayError. The cache and the mapper only depend on the
CatalogGateway protocol, so tests can substitute an in-memory gateway.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx
from pydantic import ValidationError

from commerce_tree.catalog.models import (
    CategoryNode,
    ConfigurableProduct,
    Product,
    SimpleProduct,
)
from commerce_tree.gateway.queries import (
    CATEGORY_PRODUCTS_QUERY,
    PRODUCT_BY_SKU_QUERY,
    build_category_tree_query,
)


# Module logger
logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised when the remote catalog cannot answer a query."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


class CatalogGateway(Protocol):
    """Remote catalog operations consumed by the cache and the mapper."""

    def get_category_tree(self, root_id: int) -> Optional[CategoryNode]:
        ...

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        ...

    def get_category_products(self, category_id: int) -> List[Product]:
        ...


def parse_product(data: Dict[str, Any]) -> Product:
    """
    Parse one product item into the matching product model.

    Every type other than ConfigurableProduct (virtual, downloadable...)
    is handled as a simple product.
    """
    payload = {key: value for key, value in data.items() if key != "__typename"}
    if data.get("__typename") == "ConfigurableProduct":
        return ConfigurableProduct.model_validate(payload)
    return SimpleProduct.model_validate(payload)


class GraphqlCatalogGateway:
    """
    Catalog gateway backed by a GraphQL endpoint.

    Example:
        >>> gateway = GraphqlCatalogGateway("https://shop.example/graphql")
        >>> tree = gateway.get_category_tree(2)
        >>> product = gateway.get_product_by_sku("meskwielt")
    """

    def __init__(
        self,
        url: str,
        store_code: Optional[str] = None,
        timeout_seconds: float = 20.0,
        category_tree_depth: int = 5,
        page_size: int = 100,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            url: GraphQL endpoint
            store_code: Store view sent as the "Store" header
            timeout_seconds: Timeout applied to every request
            category_tree_depth: Levels of children requested for the tree
            page_size: Page size of the category products query
            transport: Custom httpx transport (used by tests)
        """
        headers = {"Content-Type": "application/json"}
        if store_code:
            headers["Store"] = store_code

        self._url = url
        self._page_size = page_size
        self._category_tree_query = build_category_tree_query(category_tree_depth)
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=headers,
            transport=transport,
        )

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    def execute(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Post a GraphQL document and return its "data" object.

        Raises:
            GatewayError: On transport failure, HTTP error or GraphQL errors
        """
        try:
            response = self._client.post(
                self._url,
                json={"query": query, "variables": variables},
            )
            response.raise_for_status()
            body = response.json() if response.content else {}
        except httpx.HTTPError as e:
            raise GatewayError(f"GraphQL request failed: {e}") from e
        except ValueError as e:
            raise GatewayError(f"GraphQL response is not JSON: {e}") from e

        errors = body.get("errors")
        if errors:
            messages = "; ".join(str(err.get("message", err)) for err in errors)
            raise GatewayError(f"GraphQL errors: {messages}", errors)

        return body.get("data") or {}

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self._client.close()

    # =========================================================================
    # CATALOG OPERATIONS
    # =========================================================================

    def get_category_tree(self, root_id: int) -> Optional[CategoryNode]:
        """Fetch the category tree rooted at root_id, None if unknown."""
        data = self.execute(self._category_tree_query, {"id": root_id})
        category = data.get("category")
        if not category:
            return None

        try:
            return CategoryNode.model_validate(category)
        except ValidationError as e:
            raise GatewayError(f"Invalid category tree for {root_id}: {e}") from e

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        """Fetch a single product by SKU, None if no product matches."""
        data = self.execute(PRODUCT_BY_SKU_QUERY, {"sku": sku})
        items = self._items(data)
        if not items:
            return None

        if len(items) > 1:
            logger.debug(f"{len(items)} products returned for SKU {sku}, using the first")

        return self._parse(items[0])

    def get_category_products(self, category_id: int) -> List[Product]:
        """
        Fetch the products directly assigned to a category.

        Items that fail validation are logged and left out of the list.
        """
        data = self.execute(
            CATEGORY_PRODUCTS_QUERY,
            {"categoryId": str(category_id), "pageSize": self._page_size},
        )

        products: List[Product] = []
        for item in self._items(data):
            try:
                products.append(parse_product(item))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid product {item.get('sku')!r} in category {category_id}: {e}"
                )
        return products

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _items(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        products = data.get("products") or {}
        return products.get("items") or []

    @staticmethod
    def _parse(item: Dict[str, Any]) -> Product:
        try:
            return parse_product(item)
        except ValidationError as e:
            raise GatewayError(f"Invalid product payload: {e}") from e
