"""
==============================================================================
Catalog Cache Module
==============================================================================

Holds the current CatalogSnapshot and arbitrates rebuilds.

Concurrency:
-----------
- Readers use the published snapshot reference without locking; a
  rebuild builds a new snapshot aside and swaps the reference once.
- ensure_initialized() blocks on the rebuild lock, so concurrent first
  callers wait for a single fetch and all see the same snapshot.
- scheduled_refresh() only tries the lock; a tick that finds it held is
  skipped and the next tick tries again.

Caching Disabled:
----------------
With caching disabled, initialization is never marked complete, so every
ensure_initialized() call rebuilds the snapshot from the remote tree.

==============================================================================
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from .snapshot import CatalogSnapshot, build_snapshot

if TYPE_CHECKING:
    from commerce_tree.gateway.client import CatalogGateway


# Module logger
logger = logging.getLogger(__name__)


class CatalogCache:
    """
    Periodically refreshed in-memory projection of the category tree.

    Attributes:
        snapshot: Last published snapshot, None until a build succeeds
        is_initialized: True once a build succeeded with caching enabled

    Example:
        >>> cache = CatalogCache(gateway, root_category_id=2)
        >>> cache.ensure_initialized()
        >>> node = cache.snapshot.get_category("Men/Coats")
    """

    def __init__(
        self,
        gateway: CatalogGateway,
        root_category_id: int,
        caching_enabled: bool = True,
    ) -> None:
        """
        Initialize an empty cache.

        Args:
            gateway: Remote catalog used to fetch the category tree
            root_category_id: Id of the category used as tree root
            caching_enabled: Keep the snapshot between calls
        """
        self._gateway = gateway
        self._root_category_id = root_category_id
        self._caching_enabled = caching_enabled
        self._lock = threading.Lock()
        self._snapshot: Optional[CatalogSnapshot] = None
        self._initialized = False

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def snapshot(self) -> Optional[CatalogSnapshot]:
        """Get the current snapshot."""
        return self._snapshot

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def caching_enabled(self) -> bool:
        return self._caching_enabled

    # =========================================================================
    # REFRESH PROTOCOL
    # =========================================================================

    def ensure_initialized(self) -> Optional[CatalogSnapshot]:
        """
        Build the snapshot if no build has completed yet.

        Blocks while another thread is building. With caching disabled
        this rebuilds on every call.

        Returns:
            The current snapshot, None if no build ever succeeded
        """
        if not self._initialized:
            with self._lock:
                if not self._initialized:
                    self._rebuild()
        return self._snapshot

    def refresh(self) -> bool:
        """
        Rebuild the snapshot, waiting for any build in progress.

        Returns:
            True if a new snapshot was published
        """
        with self._lock:
            return self._rebuild()

    def scheduled_refresh(self) -> bool:
        """
        Rebuild the snapshot unless a build is already running.

        Entry point of the background refresh job.

        Returns:
            True if a new snapshot was published, False if skipped or failed
        """
        if not self._lock.acquire(blocking=False):
            logger.debug("Catalog cache build in progress, skipping scheduled refresh")
            return False

        try:
            return self._rebuild()
        finally:
            self._lock.release()

    def _rebuild(self) -> bool:
        """Fetch the tree and publish a new snapshot. Caller holds the lock."""
        logger.debug("Fetching catalog and building categories cache")

        tree = self._gateway.get_category_tree(self._root_category_id)
        if tree is None or not tree.children:
            logger.error(
                f"The catalog is null or empty for root category {self._root_category_id}"
            )
            return False

        snapshot = build_snapshot(tree)
        self._snapshot = snapshot

        if self._caching_enabled:
            self._initialized = True

        logger.info(f"Catalog cache built with {len(snapshot)} categories")
        return True
