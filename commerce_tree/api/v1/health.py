"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends

from commerce_tree.catalog import CatalogCache
from commerce_tree.core.dependencies import get_catalog_cache


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, cache: CatalogCache):
        self._cache = cache

    def check_catalog(self) -> dict:
        """Check catalog cache status without triggering a fetch."""
        snapshot = self._cache.snapshot
        if snapshot is None:
            return {"status": "not_loaded", "categories": 0}
        return {"status": "healthy", "categories": len(snapshot)}

    def get_health(self) -> dict:
        """Get full health status."""
        catalog_info = self.check_catalog()

        overall = "healthy" if catalog_info["status"] == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "catalog": catalog_info["status"]
            },
            "details": {
                "categories_loaded": catalog_info["categories"],
                "cache_initialized": self._cache.is_initialized,
                "caching_enabled": self._cache.caching_enabled
            }
        }


@router.get("")
async def health_check(cache: CatalogCache = Depends(get_catalog_cache)):
    """
    Health check endpoint.

    Returns system status including API and catalog cache.
    """
    controller = HealthController(cache)
    return controller.get_health()


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
