"""
==============================================================================
Commerce Tree - Application Entry Point
==============================================================================

FastAPI application exposing a remote product catalog as a virtual,
path addressable tree:
- Category tree cached in memory and refreshed in the background
- Products and variants resolved on demand from the GraphQL catalog
- Synthetic image nodes for product images

Usage:
------
    # Development
    uvicorn commerce_tree.main:app --reload

    # Production
    uvicorn commerce_tree.main:app --host 0.0.0.0 --port 8000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from commerce_tree.api.router import api_router
from commerce_tree.catalog import CatalogCache, CatalogMapper
from commerce_tree.config import Settings, get_settings
from commerce_tree.core.exceptions import register_exception_handlers
from commerce_tree.gateway import CatalogGateway, GraphqlCatalogGateway
from commerce_tree.services import CacheRefreshScheduler


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)

CACHE_REFRESH_JOB = "CatalogCache.scheduled_refresh"


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Builds the catalog components and handles the application lifecycle:
    - Startup and shutdown events
    - Background cache refresh scheduling
    - Middleware, router and exception handler setup
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gateway: Optional[CatalogGateway] = None,
    ):
        """
        Initialize the application.

        Args:
            settings: Settings to use (global settings if None)
            gateway: Catalog gateway (GraphQL client built from settings if None)
        """
        self._settings = settings or get_settings()
        self._gateway = gateway or self._create_gateway()
        self._cache = CatalogCache(
            self._gateway,
            root_category_id=self._settings.root_category_id,
            caching_enabled=self._settings.catalog_caching_enabled,
        )
        self._mapper = CatalogMapper(
            self._settings.catalog_root_path,
            self._gateway,
            self._cache,
        )
        self._scheduler = CacheRefreshScheduler()
        self._app = self._create_app()

    def _create_gateway(self) -> GraphqlCatalogGateway:
        """Create the GraphQL gateway from settings."""
        return GraphqlCatalogGateway(
            self._settings.graphql_url,
            store_code=self._settings.graphql_store_code,
            timeout_seconds=self._settings.graphql_timeout_seconds,
            category_tree_depth=self._settings.category_tree_depth,
            page_size=self._settings.category_products_page_size,
        )

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Virtual path addressable tree over a remote commerce catalog",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        app.state.catalog_cache = self._cache
        app.state.catalog_mapper = self._mapper

        self._configure_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup()
        yield
        self._shutdown()

    def _startup(self) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info(f"📂 Catalog mounted at {self._settings.catalog_root_path}")
        logger.info("=" * 60)

        # The first build happens lazily on the first request
        if self._settings.refresh_scheduled:
            self._scheduler.schedule(
                self._cache.scheduled_refresh,
                CACHE_REFRESH_JOB,
                self._settings.catalog_caching_time_seconds,
            )
        elif not self._settings.catalog_caching_enabled:
            logger.info("Catalog caching disabled, categories are fetched on every call")

        logger.info(f"✅ {self._settings.app_name} ready")

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")
        self._scheduler.stop()
        close = getattr(self._gateway, "close", None)
        if callable(close):
            close()
        logger.info("✅ Shutdown complete")

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app

    @property
    def scheduler(self) -> CacheRefreshScheduler:
        return self._scheduler

    @property
    def cache(self) -> CatalogCache:
        return self._cache


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "commerce_tree.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
