"""
==============================================================================
Virtual Resources Module
==============================================================================

Values returned by the catalog mapper for each node of the virtual tree.

Resource Kinds:
--------------
- CategoryResource: a category of the snapshot
- ProductResource: a product, or one variant of a configurable product
- SyntheticImageResource: the "image" child of a product

Resources are built fresh for every call and are frozen.

==============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import CategoryNode, ConfigurableProduct, Product


IMAGE_NAME = "image"
IMAGE_SUFFIX = "/" + IMAGE_NAME


class _Resource(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute virtual path")

    @property
    def name(self) -> str:
        """Last segment of the path."""
        return self.path.rsplit("/", 1)[-1]


class CategoryResource(_Resource):
    """Virtual node backed by a category."""

    kind: Literal["category"] = "category"
    category: CategoryNode

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "name": self.name,
            "category_id": self.category.id,
            "url_path": self.category.url_path,
            "title": self.category.name,
            "has_children": self.category.has_children(),
        }


class ProductResource(_Resource):
    """
    Virtual node backed by a product.

    Attributes:
        product: Product fetched from the gateway
        variant_sku: Selected variant, None for the product itself
    """

    kind: Literal["product"] = "product"
    product: Product = Field(..., discriminator="product_type")
    variant_sku: Optional[str] = None

    @property
    def sku(self) -> str:
        return self.product.sku

    @property
    def is_variant(self) -> bool:
        return self.variant_sku is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "name": self.name,
            "sku": self.product.sku,
            "variant_sku": self.variant_sku,
            "product_type": self.product.product_type,
            "title": self.product.name,
        }


class SyntheticImageResource(_Resource):
    """Virtual image node exposing a product's image URL."""

    kind: Literal["image"] = "image"
    image_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "path": self.path,
            "name": self.name,
            "image_url": self.image_url,
        }


VirtualResource = Union[CategoryResource, ProductResource, SyntheticImageResource]


# =============================================================================
# IMAGE RESOLUTION
# =============================================================================

def resolve_image_url(product: Product, variant_sku: Optional[str] = None) -> Optional[str]:
    """
    Find the image URL to expose for a product.

    Order:
    1. The selected variant's own image (configurable products only)
    2. The product's own image
    3. The first variant's image (configurable products only)

    Returns:
        The image URL, None when nothing provides one
    """
    if isinstance(product, ConfigurableProduct):
        if variant_sku is not None:
            variant = product.find_variant(variant_sku)
            if variant is not None and variant.product.image_url:
                return variant.product.image_url

        if product.image_url:
            return product.image_url

        if product.variants:
            return product.variants[0].product.image_url
        return None

    return product.image_url


def image_path(product_path: str) -> str:
    """Virtual path of a product's synthetic image."""
    return product_path + IMAGE_SUFFIX
