"""
==============================================================================
Catalog Package - Virtual Catalog Tree
==============================================================================

Exposes the remote category/product catalog as a path addressable tree.

Classes:
--------
- CategoryNode, SimpleProduct, ConfigurableProduct: catalog entities
- CatalogSnapshot: immutable path/id maps of the category tree
- CatalogCache: snapshot holder with lazy init and scheduled refresh
- PathResolver: splits virtual paths into category and product parts
- CatalogMapper: resolve/list facade used by the API

==============================================================================
"""

from .models import (
    CategoryNode,
    ConfigurableProduct,
    ConfigurableVariant,
    Product,
    ProductImage,
    SimpleProduct,
    VariantAttribute,
)
from .snapshot import CatalogSnapshot, build_snapshot, fix_category_tree
from .cache import CatalogCache
from .resolver import PathResolver
from .resources import (
    CategoryResource,
    ProductResource,
    SyntheticImageResource,
    VirtualResource,
    resolve_image_url,
)
from .mapper import CatalogMapper

__all__ = [
    "CategoryNode",
    "ConfigurableProduct",
    "ConfigurableVariant",
    "Product",
    "ProductImage",
    "SimpleProduct",
    "VariantAttribute",
    "CatalogSnapshot",
    "build_snapshot",
    "fix_category_tree",
    "CatalogCache",
    "PathResolver",
    "CategoryResource",
    "ProductResource",
    "SyntheticImageResource",
    "VirtualResource",
    "resolve_image_url",
    "CatalogMapper",
]
