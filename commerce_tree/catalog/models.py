"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for the remote catalog entities.

Categories form a tree of CategoryNode. Products are a tagged union:
- SimpleProduct: a single purchasable item
- ConfigurableProduct: a product exposing variants, each a SimpleProduct

==============================================================================
"""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryNode(BaseModel):
    """
    One category of the remote catalog tree.

    Attributes:
        id: Remote category id
        url_path: Path relative to the catalog root ("" for the root)
        name: Display name
        children: Sub-categories, None when the remote omitted the list
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(..., description="Remote category id")
    url_path: str = Field(default="", description="Relative category path")
    name: Optional[str] = Field(default=None, description="Category name")
    children: Optional[List[CategoryNode]] = Field(default=None)

    @field_validator("url_path", mode="before")
    @classmethod
    def null_path_is_root(cls, value: Optional[str]) -> str:
        # The remote reports the root category with a null url_path. Other
        # categories without a path are left out of the snapshot.
        return value or ""

    def has_children(self) -> bool:
        return bool(self.children)


class ProductImage(BaseModel):
    """Image reference of a product."""

    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = None
    label: Optional[str] = None


class _BaseProduct(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[int] = Field(default=None, description="Remote product id")
    sku: str = Field(..., min_length=1, description="Stock keeping unit")
    name: Optional[str] = Field(default=None, description="Product name")
    url_key: Optional[str] = Field(default=None)
    image: Optional[ProductImage] = Field(default=None)

    @property
    def image_url(self) -> Optional[str]:
        """Get the product's own image URL, if any."""
        return self.image.url if self.image else None


class SimpleProduct(_BaseProduct):
    """A single purchasable product (also the shape of every variant)."""

    product_type: Literal["simple"] = "simple"


class VariantAttribute(BaseModel):
    """Attribute value selecting one variant (e.g. size=L)."""

    model_config = ConfigDict(extra="ignore")

    code: str
    label: Optional[str] = None
    value_index: Optional[int] = None


class ConfigurableVariant(BaseModel):
    """One variant of a configurable product."""

    model_config = ConfigDict(extra="ignore")

    product: SimpleProduct
    attributes: List[VariantAttribute] = Field(default_factory=list)


class ConfigurableProduct(_BaseProduct):
    """
    Product exposing several purchasable variants.

    Attributes:
        variants: Variants in remote order, None when the remote omitted them
    """

    product_type: Literal["configurable"] = "configurable"
    variants: Optional[List[ConfigurableVariant]] = Field(default=None)

    def find_variant(self, sku: str) -> Optional[ConfigurableVariant]:
        """Find a variant by its SKU."""
        for variant in self.variants or []:
            if variant.product.sku == sku:
                return variant
        return None


Product = Union[SimpleProduct, ConfigurableProduct]
