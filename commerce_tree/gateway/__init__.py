"""
==============================================================================
Gateway Package - Remote Catalog Access
==============================================================================

GraphQL client for the remote commerce catalog.

Classes:
--------
- CatalogGateway: Protocol consumed by the cache and the mapper
- GraphqlCatalogGateway: httpx based implementation
- GatewayError: Raised for any remote failure

==============================================================================
"""

from .client import CatalogGateway, GatewayError, GraphqlCatalogGateway, parse_product

__all__ = [
    "CatalogGateway",
    "GatewayError",
    "GraphqlCatalogGateway",
    "parse_product",
]
