"""
==============================================================================
Services Package - Background Services
==============================================================================

This package provides:
- CacheRefreshScheduler: periodic background jobs (catalog cache refresh)

==============================================================================
"""

from .refresh_service import CacheRefreshScheduler

__all__ = [
    "CacheRefreshScheduler",
]
