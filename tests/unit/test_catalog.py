"""Unit tests for the product catalog fetch and tiles."""

from decimal import Decimal

import httpx
import pytest
import pytest_check as check
from pydantic import ValidationError

from storefront.catalog.config import CatalogConfig
from storefront.catalog.products import ProductCatalog, format_price, product_tiles
from storefront.models.schemas import Product

BASE_URL = "http://shop.test"


def catalog_with(handler) -> tuple[ProductCatalog, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ProductCatalog(CatalogConfig(base_url=BASE_URL), client=client), client


class TestFormatPrice:
    """Tests for price display."""

    def test_two_decimals_with_prefix(self) -> None:
        check.equal(format_price(Decimal("19.9")), "$19.90")
        check.equal(format_price(Decimal("0")), "$0.00")

    def test_thousands_separator(self) -> None:
        assert format_price(Decimal("1234.5")) == "$1,234.50"

    def test_custom_symbol(self) -> None:
        assert format_price(Decimal("5"), symbol="€") == "€5.00"


class TestProductCatalogLoad:
    """Tests for ProductCatalog.load."""

    async def test_requests_product_list_endpoint(self, sample_products) -> None:
        """One GET to /api/products/ on the configured base URL."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=sample_products)

        catalog, client = catalog_with(handler)
        async with client:
            await catalog.load()

        check.equal(len(requests), 1)
        check.equal(requests[0].method, "GET")
        check.equal(str(requests[0].url), f"{BASE_URL}/api/products/")

    async def test_success_yields_one_tile_per_product(self, sample_products) -> None:
        """N products decode to N tiles in server order."""
        catalog, client = catalog_with(lambda request: httpx.Response(200, json=sample_products))
        async with client:
            products = await catalog.load()

        tiles = catalog.tiles()
        check.equal(len(products), 3)
        check.equal(len(tiles), 3)
        check.equal([tile.name for tile in tiles], ["Trail Backpack", "Steel Bottle", "Camp Mug"])
        check.equal(tiles[0].description, "30L water-resistant pack")
        check.equal(tiles[0].price_text, "$79.90")
        check.equal(tiles[1].price_text, "$19.50")
        check.equal(tiles[2].price_text, "$0.00")
        check.equal(tiles[0].image_url, "https://cdn.example.com/backpack.jpg")

    async def test_load_replaces_list_wholesale(self, sample_products) -> None:
        """A second load replaces, not extends, the held products."""
        responses = [sample_products, sample_products[:1]]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=responses.pop(0))

        catalog, client = catalog_with(handler)
        async with client:
            await catalog.load()
            await catalog.load()

        assert [product.id for product in catalog.products] == [1]

    async def test_empty_list(self) -> None:
        """An empty response gives no tiles."""
        catalog, client = catalog_with(lambda request: httpx.Response(200, json=[]))
        async with client:
            products = await catalog.load()

        check.equal(products, [])
        check.equal(catalog.tiles(), [])

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, json={"detail": "boom"}),
            httpx.Response(404),
            httpx.Response(200, text="<html>not json</html>"),
            httpx.Response(200, json={"products": []}),
            httpx.Response(200, json=[{"id": 1, "name": "Broken"}]),
            httpx.Response(200, json=[{"id": 1, "name": "Refund", "price": -5}]),
        ],
        ids=["server-error", "not-found", "non-json", "object", "missing-price", "negative-price"],
    )
    async def test_bad_response_leaves_list_empty(self, response, sample_products) -> None:
        """Failed or malformed responses are logged and masked as empty."""
        catalog, client = catalog_with(lambda request: response)
        catalog._products = [Product.model_validate(sample_products[0])]
        async with client:
            products = await catalog.load()

        check.equal(products, [])
        check.equal(catalog.products, [])

    async def test_connection_error_leaves_list_empty(self) -> None:
        """Transport failures do not propagate."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        catalog, client = catalog_with(handler)
        async with client:
            products = await catalog.load()

        assert products == []


class TestProductTiles:
    """Tests for the product_tiles helper."""

    def test_uses_currency_symbol(self, sample_products) -> None:
        products = [Product.model_validate(item) for item in sample_products]

        tiles = product_tiles(products, symbol="£")

        assert [tile.price_text for tile in tiles] == ["£79.90", "£19.50", "£0.00"]

    def test_product_is_frozen(self, sample_products) -> None:
        product = Product.model_validate(sample_products[0])

        with pytest.raises(ValidationError):
            product.name = "Changed"
