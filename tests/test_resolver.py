"""
==============================================================================
Path Resolver Tests
==============================================================================

Tests for splitting virtual paths into category and product parts.

==============================================================================
"""

import pytest

from commerce_tree.catalog import PathResolver, build_snapshot

from conftest import ROOT, catalog_tree, category


@pytest.fixture
def resolver() -> PathResolver:
    return PathResolver(ROOT)


@pytest.fixture
def snapshot():
    return build_snapshot(catalog_tree())


class TestRelativePath:
    """Tests for root prefix handling."""

    def test_root_maps_to_empty_path(self, resolver: PathResolver):
        assert resolver.relative_path(ROOT) == ""

    def test_path_below_root(self, resolver: PathResolver):
        assert resolver.relative_path(f"{ROOT}/Men/Coats") == "Men/Coats"

    def test_path_outside_root(self, resolver: PathResolver):
        """Test paths not below the root are rejected."""
        assert resolver.relative_path("/content/site") is None
        assert resolver.relative_path(ROOT + "x/Men") is None

    def test_absolute_path(self, resolver: PathResolver):
        assert resolver.absolute_path("Men/Coats") == f"{ROOT}/Men/Coats"
        assert resolver.absolute_path("") == ROOT


class TestResolveCategory:
    """Tests for exact category lookup."""

    def test_exact_match(self, resolver: PathResolver, snapshot):
        """Test a category path resolves to its node."""
        node = resolver.resolve_category(f"{ROOT}/Men/Coats", snapshot)
        assert node.id == 11

    def test_root(self, resolver: PathResolver, snapshot):
        assert resolver.resolve_category(ROOT, snapshot).id == 2

    def test_no_prefix_matching(self, resolver: PathResolver, snapshot):
        """Test a path below a category is not that category."""
        assert resolver.resolve_category(f"{ROOT}/Men/Coats/meskwielt.1-s", snapshot) is None

    def test_without_snapshot(self, resolver: PathResolver):
        assert resolver.resolve_category(f"{ROOT}/Men", None) is None


class TestResolveProductSegments:
    """Tests for the category/product boundary search."""

    def test_direct_child_of_root(self, resolver: PathResolver, snapshot):
        """Test a single segment is a SKU below the root."""
        assert resolver.resolve_product_segments(f"{ROOT}/sku1", snapshot) == ["sku1"]

    def test_product_in_category(self, resolver: PathResolver, snapshot):
        assert resolver.resolve_product_segments(f"{ROOT}/Men/Coats/sku1", snapshot) == ["sku1"]

    def test_variant_in_category(self, resolver: PathResolver, snapshot):
        """Test two trailing segments are product and variant."""
        parts = resolver.resolve_product_segments(f"{ROOT}/Men/Coats/sku1/sku2", snapshot)
        assert parts == ["sku1", "sku2"]

    def test_longest_category_prefix_wins(self, resolver: PathResolver, snapshot):
        """Test 'Men' is not taken as the category when 'Men/Coats' exists."""
        parts = resolver.resolve_product_segments(f"{ROOT}/Men/Coats/sku1", snapshot)
        assert parts == ["sku1"]

    def test_no_category_prefix_returns_all_segments(self, resolver: PathResolver, snapshot):
        """Test the walk ends at the root when nothing else matches."""
        parts = resolver.resolve_product_segments(f"{ROOT}/Kids/Shoes/sku1", snapshot)
        assert parts == ["Kids", "Shoes", "sku1"]

    def test_sku_containing_dots(self, resolver: PathResolver, snapshot):
        """Test SKUs are opaque and kept whole."""
        parts = resolver.resolve_product_segments(
            f"{ROOT}/Men/Coats/meskwielt.1-s/meskwielt.2-l", snapshot
        )
        assert parts == ["meskwielt.1-s", "meskwielt.2-l"]

    def test_root_itself_has_no_product_parts(self, resolver: PathResolver, snapshot):
        assert resolver.resolve_product_segments(ROOT, snapshot) == []

    def test_without_snapshot_terminates(self, resolver: PathResolver):
        """Test an empty category set still ends the walk."""
        assert resolver.resolve_product_segments(f"{ROOT}/Men/sku1", None) == ["Men", "sku1"]

    def test_path_map_is_taken_once(self, resolver: PathResolver):
        """Test the resolver reads the snapshot's path map a single time."""
        calls = []

        class CountingSnapshot:
            @property
            def path_to_node(self):
                calls.append(1)
                return {"": None, "Men": None}

        parts = resolver.resolve_product_segments(f"{ROOT}/Men/a/b/c", CountingSnapshot())

        assert parts == ["a", "b", "c"]
        assert len(calls) == 1

    def test_deep_category(self, resolver: PathResolver):
        tree = category(2, "", [
            category(10, "Men", [category(11, "Men/Coats", [category(12, "Men/Coats/Winter", [])])]),
        ])
        parts = resolver.resolve_product_segments(
            f"{ROOT}/Men/Coats/Winter/parka/parka-xl", build_snapshot(tree)
        )
        assert parts == ["parka", "parka-xl"]
