"""
==============================================================================
Catalog Schemas Module
==============================================================================

Response schemas for the virtual catalog tree endpoints.

==============================================================================
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from commerce_tree.catalog.resources import VirtualResource


class ResourceOut(BaseModel):
    """One node of the virtual tree."""

    kind: Literal["category", "product", "image"]
    path: str
    name: str
    title: Optional[str] = None

    # Category nodes
    category_id: Optional[int] = None
    url_path: Optional[str] = None
    has_children: Optional[bool] = None

    # Product nodes
    sku: Optional[str] = None
    variant_sku: Optional[str] = None
    product_type: Optional[str] = None

    # Image nodes
    image_url: Optional[str] = None

    @classmethod
    def from_resource(cls, resource: VirtualResource) -> "ResourceOut":
        """Create schema from a virtual resource."""
        return cls(**resource.to_dict())


class ResourceResponse(BaseModel):
    """Resolved resource response."""
    success: bool = Field(default=True)
    resource: ResourceOut


class ChildrenResponse(BaseModel):
    """Children listing response."""
    success: bool = Field(default=True)
    path: str
    has_children: bool
    total: int = Field(ge=0)
    children: List[ResourceOut]


class CategoryPathResponse(BaseModel):
    """Virtual path of a category id."""
    success: bool = Field(default=True)
    category_id: int
    path: str
