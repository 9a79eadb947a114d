"""Product list fetch for the storefront grid.

Reads the product list once per page mount. Any failure leaves the list
empty so the page shows its "No products found" placeholder.
"""

import logging
from decimal import Decimal

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from storefront.catalog.config import CatalogConfig, get_catalog_config
from storefront.models.schemas import Product

logger = logging.getLogger(__name__)

_PRODUCT_LIST = TypeAdapter(list[Product])


class ProductTile(BaseModel):
    """Display data for one grid tile."""

    name: str
    description: str
    price_text: str
    image_url: str


def format_price(price: Decimal, symbol: str = "$") -> str:
    """Format a price with a currency prefix and two decimals."""
    return f"{symbol}{price:,.2f}"


def product_tiles(products: list[Product], symbol: str = "$") -> list[ProductTile]:
    """Build one tile per product, in server order."""
    return [
        ProductTile(
            name=product.name,
            description=product.description,
            price_text=format_price(product.price, symbol),
            image_url=product.image_url,
        )
        for product in products
    ]


class ProductCatalog:
    """Holds the product list shown on the page."""

    def __init__(
        self,
        config: CatalogConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_catalog_config()
        self._client = client
        self._products: list[Product] = []

    @property
    def config(self) -> CatalogConfig:
        return self._config

    @property
    def url(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/api/products/"

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    def tiles(self) -> list[ProductTile]:
        return product_tiles(self._products, self._config.currency_symbol)

    async def _fetch(self, client: httpx.AsyncClient) -> list[Product]:
        response = await client.get(self.url)
        response.raise_for_status()
        return _PRODUCT_LIST.validate_python(response.json())

    async def load(self) -> list[Product]:
        """Fetch the product list, replacing the held one.

        Returns:
            The products now held (empty on failure).
        """
        try:
            if self._client is not None:
                products = await self._fetch(self._client)
            else:
                async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                    products = await self._fetch(client)
        except httpx.HTTPStatusError as e:
            logger.error(f"Product list request returned HTTP {e.response.status_code}")
            products = []
        except httpx.RequestError as e:
            logger.error(f"Product list request failed: {e}")
            products = []
        except ValidationError as e:
            logger.error(f"Product list has an unexpected shape: {e.error_count()} errors")
            products = []
        except ValueError as e:
            logger.error(f"Product list response is not JSON: {e}")
            products = []

        self._products = products
        logger.info(f"Loaded {len(products)} products from {self.url}")
        return self.products
