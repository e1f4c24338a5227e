"""
==============================================================================
Catalog Mapper Module
==============================================================================

Facade answering "resolve path" and "list children" for the virtual tree.

Resolution Order (resolve):
--------------------------
1. Root path or exact category path -> CategoryResource
2. Path ending with "/image"          -> SyntheticImageResource
3. Anything else below the root       -> ProductResource

Products are never cached: every product resolution or listing fetches
from the gateway. A failing fetch is logged and reported as "not found"
for that call only.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from .models import ConfigurableProduct, Product
from .resolver import PathResolver
from .resources import (
    IMAGE_SUFFIX,
    CategoryResource,
    ProductResource,
    SyntheticImageResource,
    VirtualResource,
    image_path,
    resolve_image_url,
)

if TYPE_CHECKING:
    from commerce_tree.gateway.client import CatalogGateway

    from .cache import CatalogCache
    from .snapshot import CatalogSnapshot


# Module logger
logger = logging.getLogger(__name__)


class CatalogMapper:
    """
    Maps virtual paths to catalog resources.

    Attributes:
        root: Virtual path of the catalog root

    Example:
        >>> mapper = CatalogMapper("/var/commerce/products/cloud", gateway, cache)
        >>> coats = mapper.resolve("/var/commerce/products/cloud/Men/Coats")
        >>> children = mapper.list_children(coats)
    """

    def __init__(self, root: str, gateway: CatalogGateway, cache: CatalogCache) -> None:
        """
        Initialize the mapper.

        Args:
            root: Virtual path of the catalog root
            gateway: Remote catalog used for product lookups
            cache: Category cache
        """
        self._resolver = PathResolver(root)
        self._gateway = gateway
        self._cache = cache

    @property
    def root(self) -> str:
        return self._resolver.root

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def resolve(self, path: str) -> Optional[VirtualResource]:
        """Resolve any virtual path, None when nothing lives there."""
        if self._resolver.relative_path(path) is None:
            return None

        # One snapshot serves the whole resolution
        snapshot = self._cache.ensure_initialized()

        category = self._resolve_category(path, snapshot)
        if category is not None:
            return category

        if path.endswith(IMAGE_SUFFIX):
            return self._resolve_product_image(path, snapshot)

        return self._resolve_product(path, snapshot)

    def resolve_category(self, path: str) -> Optional[CategoryResource]:
        """Resolve a path that is exactly a category path."""
        return self._resolve_category(path, self._cache.ensure_initialized())

    def resolve_product(self, path: str) -> Optional[ProductResource]:
        """
        Resolve a product or variant path.

        The product is always fetched by the base SKU; a second part
        selects the variant.
        """
        return self._resolve_product(path, self._cache.ensure_initialized())

    def resolve_product_image(self, path: str) -> Optional[SyntheticImageResource]:
        """Resolve the synthetic image of a product or variant."""
        return self._resolve_product_image(path, self._cache.ensure_initialized())

    def _resolve_category(
        self,
        path: str,
        snapshot: Optional[CatalogSnapshot],
    ) -> Optional[CategoryResource]:
        category = self._resolver.resolve_category(path, snapshot)
        if category is None:
            return None
        return CategoryResource(path=path, category=category)

    def _resolve_product(
        self,
        path: str,
        snapshot: Optional[CatalogSnapshot],
    ) -> Optional[ProductResource]:
        product_parts = self._product_parts(path, snapshot)
        if not product_parts:
            return None

        sku = product_parts[0]
        variant_sku = product_parts[1] if len(product_parts) > 1 else None

        product = self._fetch_product(sku)
        if product is None or product.id is None:
            return None

        return ProductResource(path=path, product=product, variant_sku=variant_sku)

    def _resolve_product_image(
        self,
        path: str,
        snapshot: Optional[CatalogSnapshot],
    ) -> Optional[SyntheticImageResource]:
        if not path.endswith(IMAGE_SUFFIX):
            return None

        product_path = path[:-len(IMAGE_SUFFIX)]
        product_parts = self._product_parts(product_path, snapshot)
        if not product_parts:
            return None

        variant_sku = product_parts[1] if len(product_parts) > 1 else None
        product = self._fetch_product(product_parts[0])
        if product is None:
            return None

        image_url = resolve_image_url(product, variant_sku)
        if image_url is None:
            return None

        return SyntheticImageResource(path=path, image_url=image_url)

    def get_absolute_category_path(self, category_id: int) -> Optional[str]:
        """Get the virtual path of a category id."""
        snapshot = self._cache.ensure_initialized()
        if snapshot is None:
            return None

        url_path = snapshot.get_path(category_id)
        if url_path is None:
            return None
        return self._resolver.absolute_path(url_path)

    # =========================================================================
    # LISTING
    # =========================================================================

    def list_children(self, parent: VirtualResource) -> Optional[List[VirtualResource]]:
        """
        List the children of a resource.

        Returns:
            Children in display order, None when there are none
        """
        if isinstance(parent, CategoryResource):
            return self.list_category_children(parent.path, parent.category.id)
        if isinstance(parent, ProductResource):
            return self.list_product_children(parent.path, parent.variant_sku or parent.sku)
        return None

    def list_category_children(
        self,
        parent_path: str,
        category_id: Optional[int] = None,
    ) -> Optional[List[VirtualResource]]:
        """
        List sub-categories, or the category's products when it has none.

        Args:
            parent_path: Virtual path of the category
            category_id: Remote id used for the product fallback, defaults
                to the id of the category found at parent_path

        Returns:
            Child resources, None when neither source yields any
        """
        snapshot = self._cache.ensure_initialized()

        # The root itself maps to the "" key
        key = self._resolver.relative_path(parent_path)
        category = None
        if snapshot is not None and key is not None:
            category = snapshot.get_category(key)

        children: List[VirtualResource] = []
        if category is not None:
            for child in category.children or []:
                children.append(
                    CategoryResource(path=self._resolver.absolute_path(child.url_path), category=child)
                )
            if category_id is None:
                category_id = category.id

        if not children and category_id is not None:
            for product in self._fetch_category_products(category_id, parent_path):
                children.append(
                    ProductResource(path=f"{parent_path}/{product.sku}", product=product)
                )

        return children or None

    def list_product_children(
        self,
        parent_path: str,
        sku: str,
    ) -> Optional[List[VirtualResource]]:
        """
        List the variants of a configurable product.

        The synthetic image, when an image URL is found, comes first.

        Returns:
            Image and variant resources, None for products without variants
        """
        self._cache.ensure_initialized()

        product = self._fetch_product(sku)
        if not isinstance(product, ConfigurableProduct) or not product.variants:
            return None

        children: List[VirtualResource] = []
        image_url = product.image_url
        for variant in product.variants:
            simple_product = variant.product
            children.append(
                ProductResource(
                    path=f"{parent_path}/{simple_product.sku}",
                    product=simple_product,
                    variant_sku=simple_product.sku,
                )
            )
            if image_url is None:
                image_url = simple_product.image_url

        if image_url is not None:
            children.insert(0, SyntheticImageResource(path=image_path(parent_path), image_url=image_url))

        return children

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _product_parts(self, path: str, snapshot: Optional[CatalogSnapshot]) -> List[str]:
        if snapshot is None:
            return []
        return self._resolver.resolve_product_segments(path, snapshot)

    def _fetch_product(self, sku: str) -> Optional[Product]:
        try:
            return self._gateway.get_product_by_sku(sku)
        except Exception as e:
            logger.error(f"Error while fetching product {sku}: {e}", exc_info=True)
            return None

    def _fetch_category_products(self, category_id: int, parent_path: str) -> List[Product]:
        try:
            return self._gateway.get_category_products(category_id) or []
        except Exception as e:
            logger.error(
                f"Error while fetching category products for {parent_path} ({category_id}): {e}",
                exc_info=True,
            )
            return []
