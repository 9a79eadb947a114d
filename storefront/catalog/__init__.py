"""Product catalog for the storefront page.

Fetches the product list from the backend and prepares grid tiles.
"""

from storefront.catalog.config import CatalogConfig, get_catalog_config
from storefront.catalog.products import ProductCatalog, ProductTile, format_price, product_tiles

__all__ = [
    "CatalogConfig",
    "ProductCatalog",
    "ProductTile",
    "format_price",
    "get_catalog_config",
    "product_tiles",
]
