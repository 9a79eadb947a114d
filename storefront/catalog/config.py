"""Catalog configuration loaded from the environment."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class CatalogConfig(BaseModel):
    """Where the product list lives and how it is displayed.

    Attributes:
        base_url: Base URL of the product backend.
        timeout: Request timeout in seconds.
        currency_symbol: Prefix shown before prices.
        columns: Number of columns in the product grid.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:8000"),
        description="Base URL of the product backend",
    )
    timeout: float = Field(default=10.0, gt=0)
    currency_symbol: str = Field(default="$")
    columns: int = Field(default=4, ge=1, le=12)


def get_catalog_config() -> CatalogConfig:
    return CatalogConfig()
