"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the commerce tree service using Pydantic
Settings.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Computed properties for derived values
- Cached accessor so every component sees the same instance

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Catalog Caching:
---------------
- CATALOG_CACHING_ENABLED=false rebuilds the category cache on every call
- CATALOG_CACHING_SCHEDULER_ENABLED toggles the periodic background refresh
- CATALOG_CACHING_TIME_MINUTES is the refresh period

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        graphql_url: Endpoint of the remote GraphQL catalog
        graphql_store_code: Optional store view sent as the "Store" header
        graphql_timeout_seconds: HTTP timeout for every gateway call
        category_tree_depth: Nesting depth requested by the category query
        category_products_page_size: Page size of the category products query
        catalog_root_path: Virtual path under which the catalog is mounted
        root_category_id: Id of the remote category used as tree root
        catalog_caching_enabled: Keep the category tree in memory
        catalog_caching_scheduler_enabled: Refresh the tree periodically
        catalog_caching_time_minutes: Refresh period in minutes
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> print(settings.catalog_root_path)
        '/var/commerce/products/cloud'
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Commerce Tree API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # GRAPHQL GATEWAY SETTINGS
    # =========================================================================
    graphql_url: str = Field(
        default="http://localhost/graphql",
        description="Endpoint of the remote GraphQL catalog"
    )

    graphql_store_code: Optional[str] = Field(
        default=None,
        description="Store view code sent with every GraphQL request"
    )

    graphql_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        le=300,
        description="HTTP timeout for gateway calls"
    )

    category_tree_depth: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Nesting depth of the category tree query"
    )

    category_products_page_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Page size of the category products query"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    catalog_root_path: str = Field(
        default="/var/commerce/products/cloud",
        description="Virtual path under which the catalog is mounted"
    )

    root_category_id: int = Field(
        default=2,
        ge=1,
        description="Remote id of the root category"
    )

    catalog_caching_enabled: bool = Field(
        default=True,
        description="Keep the category tree in memory between calls"
    )

    catalog_caching_scheduler_enabled: bool = Field(
        default=True,
        description="Refresh the cached category tree periodically"
    )

    catalog_caching_time_minutes: int = Field(
        default=10,
        ge=1,
        le=1440,  # Max 24 hours
        description="Category tree refresh period in minutes"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Args:
            value: Raw environment value

        Returns:
            Lowercase normalized environment name
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("catalog_root_path")
    @classmethod
    def validate_catalog_root_path(cls, value: str) -> str:
        """
        Validate the virtual root path.

        The root must be absolute and is stored without a trailing slash,
        so that child paths can be built as ``root + "/" + url_path``.

        Raises:
            ValueError: If the path is not absolute or is "/" alone
        """
        normalized = value.strip().rstrip("/")

        if not normalized.startswith("/"):
            raise ValueError(
                f"Catalog root path must be absolute: {value!r}"
            )

        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def catalog_caching_time_seconds(self) -> int:
        """Get the refresh period in seconds."""
        return self.catalog_caching_time_minutes * 60

    @property
    def refresh_scheduled(self) -> bool:
        """Whether the background refresh job should be scheduled."""
        return self.catalog_caching_enabled and self.catalog_caching_scheduler_enabled

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"catalog_root_path={self.catalog_root_path!r}, "
            f"root_category_id={self.root_category_id})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Uses lru_cache so only one Settings instance is created for the
    lifetime of the process.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
