"""
==============================================================================
Schemas Package
==============================================================================

Pydantic response schemas for the API.

==============================================================================
"""

from .catalog import (
    CategoryPathResponse,
    ChildrenResponse,
    ResourceOut,
    ResourceResponse,
)

__all__ = [
    "CategoryPathResponse",
    "ChildrenResponse",
    "ResourceOut",
    "ResourceResponse",
]
