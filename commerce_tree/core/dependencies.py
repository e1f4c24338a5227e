"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency providers handing the catalog components to the endpoints.

The Application factory builds one CatalogCache and one CatalogMapper and
stores them on ``app.state``; these functions read them back so that
endpoints never reach for module globals.

Usage:
------
    @router.get("/resource")
    def get_resource(mapper: CatalogMapper = Depends(get_catalog_mapper)):
        ...

==============================================================================
"""

from __future__ import annotations

from fastapi import Request

from commerce_tree.catalog import CatalogCache, CatalogMapper
from commerce_tree.core import exceptions


def get_catalog_mapper(request: Request) -> CatalogMapper:
    """Get the application's catalog mapper."""
    mapper = getattr(request.app.state, "catalog_mapper", None)
    if mapper is None:
        raise exceptions.internal_error("Catalog mapper is not configured")
    return mapper


def get_catalog_cache(request: Request) -> CatalogCache:
    """Get the application's catalog cache."""
    cache = getattr(request.app.state, "catalog_cache", None)
    if cache is None:
        raise exceptions.internal_error("Catalog cache is not configured")
    return cache
