"""
==============================================================================
Path Resolver Module
==============================================================================

Maps absolute virtual paths onto the category snapshot.

Path Layout:
-----------
    {root}/{category url path}/{sku}[/{variant sku}][/image]

    /var/commerce/products/cloud/Men/Coats/meskwielt.1-s/meskwielt.2-l
    \\________ root ___________/ \\category/ \\___ product parts ____/

Category paths and SKUs share the "/" separator, so the boundary between
them is found by backtracking from the end of the path until the remaining
prefix is a known category path.

==============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from .models import CategoryNode
from .snapshot import PATH_SEPARATOR, ROOT_PATH, CatalogSnapshot


class PathResolver:
    """
    Splits virtual paths into category and product parts.

    Example:
        >>> resolver = PathResolver("/var/commerce/products/cloud")
        >>> resolver.resolve_product_segments(
        ...     "/var/commerce/products/cloud/Men/Coats/meskwielt.1-s", snapshot)
        ['meskwielt.1-s']
    """

    def __init__(self, root: str) -> None:
        self._root = root

    @property
    def root(self) -> str:
        return self._root

    def relative_path(self, path: str) -> Optional[str]:
        """
        Strip the root prefix from a path.

        Returns:
            "" for the root itself, the remainder for paths below the root,
            None for paths outside the root
        """
        if path == self._root:
            return ROOT_PATH
        prefix = self._root + PATH_SEPARATOR
        if path.startswith(prefix):
            return path[len(prefix):]
        return None

    def absolute_path(self, url_path: str) -> str:
        """Build the virtual path of a category."""
        if url_path == ROOT_PATH:
            return self._root
        return self._root + PATH_SEPARATOR + url_path

    def resolve_category(
        self,
        path: str,
        snapshot: Optional[CatalogSnapshot],
    ) -> Optional[CategoryNode]:
        """Look up the category at exactly this path."""
        sub_path = self.relative_path(path)
        if sub_path is None or snapshot is None:
            return None
        return snapshot.get_category(sub_path)

    def resolve_product_segments(
        self,
        path: str,
        snapshot: Optional[CatalogSnapshot],
    ) -> List[str]:
        """
        Split the product parts off a path.

        Segments are removed from the end until the remaining prefix is a
        category path; the removed segments are the product parts. The root
        path "" always matches, so the walk ends at the latest with every
        segment taken as a product part.

        Returns:
            [sku] or [sku, variant_sku], in path order
        """
        sub_path = self.relative_path(path)
        if not sub_path:
            return []

        # Taken once so a concurrent refresh cannot change it mid-walk
        path_to_node = snapshot.path_to_node if snapshot else {}

        segments = sub_path.split(PATH_SEPARATOR)
        product_parts: List[str] = []
        while segments:
            product_parts.append(segments.pop())
            if PATH_SEPARATOR.join(segments) in path_to_node:
                break

        product_parts.reverse()
        return product_parts
