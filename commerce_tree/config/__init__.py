"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from commerce_tree.config import get_settings, Settings

    settings = get_settings()
    print(settings.catalog_root_path)
    print(settings.graphql_url)

==============================================================================
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
