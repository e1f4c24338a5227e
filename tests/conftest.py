"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides an in-memory catalog gateway, catalog components and an API
test client.

Catalog used by most tests (root category id 2):

    ""                 (2)
    ├── Men            (10)
    │   └── Men/Coats  (11)   products: meskwielt.1-s, plain-tee
    └── Women          (20)   no sub-categories, products: wjcoat

==============================================================================
"""

import threading
from typing import Callable, Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from commerce_tree.catalog import (
    CatalogCache,
    CatalogMapper,
    CategoryNode,
    ConfigurableProduct,
    ConfigurableVariant,
    ProductImage,
    SimpleProduct,
    VariantAttribute,
)
from commerce_tree.config import Settings
from commerce_tree.gateway import GatewayError


ROOT = "/var/commerce/products/cloud"


# ============================================================================
# BUILDERS
# ============================================================================

def category(category_id: int, url_path: str, children: Optional[List[CategoryNode]] = None) -> CategoryNode:
    """Build a category node named after its last path segment."""
    name = url_path.rsplit("/", 1)[-1] or "Root"
    return CategoryNode(id=category_id, url_path=url_path, name=name, children=children)


def simple(sku: str, image_url: Optional[str] = None, product_id: Optional[int] = 1) -> SimpleProduct:
    return SimpleProduct(id=product_id, sku=sku, name=sku.title(), image=ProductImage(url=image_url))


def configurable(
    sku: str,
    variants: Optional[List[SimpleProduct]],
    image_url: Optional[str] = None,
) -> ConfigurableProduct:
    return ConfigurableProduct(
        id=100,
        sku=sku,
        name=sku.title(),
        image=ProductImage(url=image_url),
        variants=None if variants is None else [
            ConfigurableVariant(
                product=variant,
                attributes=[VariantAttribute(code="size", label=variant.sku[-1].upper())],
            )
            for variant in variants
        ],
    )


def catalog_tree() -> CategoryNode:
    return category(2, "", [
        category(10, "Men", [category(11, "Men/Coats", [])]),
        category(20, "Women", []),
    ])


# ============================================================================
# FAKE GATEWAY
# ============================================================================

class FakeGateway:
    """
    In-memory CatalogGateway recording every call.

    Attributes:
        tree: Category tree returned (deep copied) by get_category_tree
        products: SKU -> product
        category_products: Category id -> products
        failing_skus: SKUs raising GatewayError
        failing_categories: Category ids raising GatewayError
        on_tree_fetch: Hook run inside get_category_tree
    """

    def __init__(self, tree: Optional[CategoryNode] = None) -> None:
        self.tree = tree
        self.products: Dict[str, object] = {}
        self.category_products: Dict[int, list] = {}
        self.failing_skus: set = set()
        self.failing_categories: set = set()
        self.on_tree_fetch: Optional[Callable[[], None]] = None
        self.tree_calls: List[int] = []
        self.product_calls: List[str] = []
        self.category_product_calls: List[int] = []
        self._calls_lock = threading.Lock()

    def get_category_tree(self, root_id: int) -> Optional[CategoryNode]:
        with self._calls_lock:
            self.tree_calls.append(root_id)
        if self.on_tree_fetch is not None:
            self.on_tree_fetch()
        return self.tree.model_copy(deep=True) if self.tree is not None else None

    def get_product_by_sku(self, sku: str):
        with self._calls_lock:
            self.product_calls.append(sku)
        if sku in self.failing_skus:
            raise GatewayError(f"Timeout while fetching {sku}")
        return self.products.get(sku)

    def get_category_products(self, category_id: int) -> list:
        with self._calls_lock:
            self.category_product_calls.append(category_id)
        if category_id in self.failing_categories:
            raise GatewayError(f"Timeout while fetching category {category_id}")
        return self.category_products.get(category_id, [])


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def gateway() -> FakeGateway:
    """Gateway serving the standard test catalog."""
    fake = FakeGateway(catalog_tree())

    fake.products["meskwielt.1-s"] = configurable(
        "meskwielt.1-s",
        [
            simple("meskwielt.2-l", "https://cdn.example/meskwielt-l.jpg"),
            simple("meskwielt.2-m", "https://cdn.example/meskwielt-m.jpg"),
        ],
        image_url="https://cdn.example/meskwielt.jpg",
    )
    fake.products["plain-tee"] = simple("plain-tee", "https://cdn.example/plain-tee.jpg")
    fake.products["wjcoat"] = simple("wjcoat")
    fake.category_products[11] = [fake.products["meskwielt.1-s"], fake.products["plain-tee"]]
    fake.category_products[20] = [fake.products["wjcoat"]]
    return fake


@pytest.fixture
def cache(gateway: FakeGateway) -> CatalogCache:
    return CatalogCache(gateway, root_category_id=2)


@pytest.fixture
def mapper(gateway: FakeGateway, cache: CatalogCache) -> CatalogMapper:
    return CatalogMapper(ROOT, gateway, cache)


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings for tests, independent of the environment's .env file."""
    return Settings(
        _env_file=None,
        catalog_root_path=ROOT,
        root_category_id=2,
        catalog_caching_scheduler_enabled=False,
    )


@pytest.fixture
def client(settings: Settings, gateway: FakeGateway) -> Generator[TestClient, None, None]:
    """Create a test client backed by the fake gateway."""
    from commerce_tree.main import Application

    application = Application(settings=settings, gateway=gateway)

    with TestClient(application.app) as test_client:
        yield test_client
