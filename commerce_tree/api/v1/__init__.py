"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- catalog: Virtual catalog tree

==============================================================================
"""

from . import health, catalog

__all__ = ["health", "catalog"]
