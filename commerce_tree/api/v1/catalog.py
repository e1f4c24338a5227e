"""
==============================================================================
Catalog Tree Endpoints
==============================================================================

Endpoints for walking the virtual catalog tree by path.

The endpoints are plain (sync) functions: resolution may block on the
remote catalog, so FastAPI runs them in its thread pool and concurrent
requests resolve in parallel.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query

from commerce_tree.catalog import CatalogMapper
from commerce_tree.core import exceptions
from commerce_tree.core.dependencies import get_catalog_mapper
from commerce_tree.schemas.catalog import (
    CategoryPathResponse,
    ChildrenResponse,
    ResourceOut,
    ResourceResponse,
)


router = APIRouter(prefix="/catalog", tags=["Catalog"])


class CatalogController:
    """Controller for virtual tree operations."""

    def __init__(self, mapper: CatalogMapper):
        self._mapper = mapper

    def _validate_path(self, path: str) -> str:
        normalized = path.rstrip("/") or path
        root = self._mapper.root
        if normalized != root and not normalized.startswith(root + "/"):
            raise exceptions.invalid_path(path, f"path must be below {root}")
        if "//" in normalized:
            raise exceptions.invalid_path(path, "empty path segment")
        return normalized

    def get_resource(self, path: str) -> ResourceResponse:
        """Resolve a path to its resource."""
        path = self._validate_path(path)
        resource = self._mapper.resolve(path)

        if resource is None:
            raise exceptions.resource_not_found(path)

        return ResourceResponse(resource=ResourceOut.from_resource(resource))

    def list_children(self, path: str) -> ChildrenResponse:
        """List the children of the resource at a path."""
        path = self._validate_path(path)
        parent = self._mapper.resolve(path)

        if parent is None:
            raise exceptions.resource_not_found(path)

        children = self._mapper.list_children(parent) or []

        return ChildrenResponse(
            path=path,
            has_children=bool(children),
            total=len(children),
            children=[ResourceOut.from_resource(child) for child in children],
        )

    def get_category_path(self, category_id: int) -> CategoryPathResponse:
        """Get the virtual path of a category."""
        path = self._mapper.get_absolute_category_path(category_id)

        if path is None:
            raise exceptions.category_not_found(category_id)

        return CategoryPathResponse(category_id=category_id, path=path)


@router.get("/resource", response_model=ResourceResponse)
def get_resource(
    path: str = Query(..., min_length=1),
    mapper: CatalogMapper = Depends(get_catalog_mapper)
):
    """Resolve a virtual path to a category, product or image."""
    controller = CatalogController(mapper)
    return controller.get_resource(path)


@router.get("/children", response_model=ChildrenResponse)
def list_children(
    path: str = Query(..., min_length=1),
    mapper: CatalogMapper = Depends(get_catalog_mapper)
):
    """List the children of the resource at a virtual path."""
    controller = CatalogController(mapper)
    return controller.list_children(path)


@router.get("/categories/{category_id}/path", response_model=CategoryPathResponse)
def get_category_path(
    category_id: int,
    mapper: CatalogMapper = Depends(get_catalog_mapper)
):
    """Get the virtual path of a category id."""
    controller = CatalogController(mapper)
    return controller.get_category_path(category_id)
