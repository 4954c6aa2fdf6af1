"""
Pydantic schemas for pricing snapshots.

Request models trim strings and normalize prices before anything reaches the
repository. Response models mirror the persisted hierarchy in camelCase.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, Field, field_serializer, field_validator

from pricelist.schemas.base import CamelModel, to_iso8601
from pricelist.utils.currency import InvalidAmount, parse_currency


MIN_RATE = Decimal("0.01")
# Upper bounds keep rate * price within Decimal precision and rates within Numeric(18, 4)
MAX_RATE = Decimal("1000000000")
MAX_PRICE_USD = Decimal("1000000000")


# ============================================================================
# Request Schemas
# ============================================================================

class DeviceEntryCreate(CamelModel):
    """One device row as submitted. Any client ``order`` key is ignored."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., max_length=255, description="Device name")
    price_usd: Decimal = Field(..., ge=0, le=MAX_PRICE_USD, description="Price in USD")

    @field_validator("price_usd", mode="before")
    @classmethod
    def normalize_price(cls, value):
        if value is None or isinstance(value, bool):
            return value
        try:
            return parse_currency(value)
        except InvalidAmount as exc:
            raise ValueError(str(exc)) from exc


class SnapshotTableCreate(CamelModel):
    """A titled table; entry order is taken from list position."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255, description="Table title")
    entries: List[DeviceEntryCreate] = Field(..., description="Device rows in display order")


class SnapshotCreate(CamelModel):
    """Body of ``POST /snapshots``."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=255, description="Snapshot title")
    rate: Decimal = Field(..., ge=MIN_RATE, le=MAX_RATE, description="USD to SYP exchange rate")
    tables: List[SnapshotTableCreate] = Field(..., description="Tables in display order")


class SnapshotDuplicate(CamelModel):
    """Optional overrides when copying an existing snapshot."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    rate: Optional[Decimal] = Field(None, ge=MIN_RATE, le=MAX_RATE)


class PaginationParams(CamelModel):
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


# ============================================================================
# Response Schemas
# ============================================================================

class DeviceEntryResponse(CamelModel):
    name: str
    price_usd: float
    order: int


class SnapshotTableResponse(CamelModel):
    id: str
    snapshot_id: str
    title: str
    order: int
    created_at: datetime
    updated_at: datetime
    entries: List[DeviceEntryResponse]

    @field_validator("entries", mode="before")
    @classmethod
    def entries_as_list(cls, value):
        return value if isinstance(value, list) else []

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return to_iso8601(value)


class SnapshotResponse(CamelModel):
    id: str
    user_id: str
    title: Optional[str] = None
    rate: float
    created_at: datetime
    updated_at: datetime
    tables: List[SnapshotTableResponse]

    @field_validator("rate", mode="before")
    @classmethod
    def rate_as_float(cls, value):
        return float(value) if isinstance(value, Decimal) else value

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return to_iso8601(value)


class PaginationMeta(CamelModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class SnapshotListResponse(CamelModel):
    """Paginated history of the caller's snapshots."""
    data: List[SnapshotResponse]
    pagination: PaginationMeta
