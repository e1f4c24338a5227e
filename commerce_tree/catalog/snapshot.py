"""
==============================================================================
Catalog Snapshot Module
==============================================================================

Immutable projection of the remote category tree.

A snapshot holds two lookup maps built in one pass over a freshly fetched
tree:
- path_to_node: relative url path -> CategoryNode ("" is the root)
- id_to_path: category id -> relative url path

Build Steps:
-----------
1. Depth-first walk from the root, registering every node
2. Consistency fix-up of the parent/child links reported by the remote
3. Freeze the maps into a CatalogSnapshot

The remote catalog is known to return some categories under the wrong
parent, or not at all under their real parent. The fix-up attaches every
category to the parent derived from its url path, then drops children
whose path does not extend their parent's path.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .models import CategoryNode


# Module logger
logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"
ROOT_PATH = ""


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Published, read-only view of the category tree.

    Attributes:
        path_to_node: Relative url path -> category
        id_to_path: Category id -> relative url path
    """

    path_to_node: Mapping[str, CategoryNode]
    id_to_path: Mapping[int, str]

    @property
    def root(self) -> CategoryNode:
        return self.path_to_node[ROOT_PATH]

    def get_category(self, url_path: str) -> Optional[CategoryNode]:
        return self.path_to_node.get(url_path)

    def get_path(self, category_id: int) -> Optional[str]:
        return self.id_to_path.get(category_id)

    def __len__(self) -> int:
        return len(self.path_to_node)


def build_snapshot(tree: CategoryNode) -> CatalogSnapshot:
    """
    Build a snapshot from a category tree.

    The tree must come from a fresh gateway call: the fix-up rewrites the
    children lists of its nodes in place.

    Args:
        tree: Root category with its descendants

    Returns:
        New CatalogSnapshot
    """
    path_to_node: Dict[str, CategoryNode] = {ROOT_PATH: tree}
    id_to_path: Dict[int, str] = {tree.id: ROOT_PATH}

    for child in tree.children or []:
        _add_category(child, path_to_node, id_to_path)

    fix_category_tree(path_to_node)

    return CatalogSnapshot(
        path_to_node=MappingProxyType(path_to_node),
        id_to_path=MappingProxyType(id_to_path),
    )


def _add_category(
    category: CategoryNode,
    path_to_node: Dict[str, CategoryNode],
    id_to_path: Dict[int, str],
) -> None:
    if category.url_path == ROOT_PATH:
        # Only the tree root may live under ""
        logger.warning(f"Skipping category {category.id} without url path")
    else:
        logger.debug(f"Adding cached category {category.id} --> {category.url_path}")
        path_to_node[category.url_path] = category
        id_to_path[category.id] = category.url_path

    for child in category.children or []:
        _add_category(child, path_to_node, id_to_path)


def fix_category_tree(path_to_node: Dict[str, CategoryNode]) -> None:
    """
    Repair parent/child links in place.

    1. Every category whose path has a separator is attached, exactly
       once, to the category found at its parent path.
    2. Every category keeps only the children that have a path starting
       with its own path. For the root this drops path-less children only.
    """
    for category in path_to_node.values():
        if PATH_SEPARATOR not in category.url_path:
            continue

        parent_path = category.url_path.rsplit(PATH_SEPARATOR, 1)[0]
        parent = path_to_node.get(parent_path)
        if parent is None:
            continue

        if parent.children is None:
            parent.children = [category]
        elif not any(child.id == category.id for child in parent.children):
            parent.children.append(category)

    for category in path_to_node.values():
        if category.children:
            category.children = [
                child for child in category.children
                if child.url_path and child.url_path.startswith(category.url_path)
            ]
