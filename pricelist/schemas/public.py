"""
Schemas for the public, unauthenticated catalog.
"""

from typing import List

from pydantic import Field

from pricelist.schemas.base import CamelModel


class PublicProduct(CamelModel):
    name: str
    price_usd: float
    price_syp: int = Field(..., description="Whole SYP, rounded half-up")


class PublicCategory(CamelModel):
    category: str
    products: List[PublicProduct]


class PublicCatalog(CamelModel):
    """Flattened view of the most recent snapshot."""
    success: bool = True
    shop_name: str
    phone: str
    location: str
    working_hours: str
    last_updated: str
    exchange_rate: float
    categories: List[PublicCategory]
    total_products: int
