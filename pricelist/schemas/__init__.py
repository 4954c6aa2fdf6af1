"""
Schemas for the application.

This module exports all Pydantic models used for request/response validation.
"""

from pricelist.schemas.error import ApiError

from pricelist.schemas.snapshot import (
    # Request schemas
    DeviceEntryCreate,
    SnapshotTableCreate,
    SnapshotCreate,
    SnapshotDuplicate,
    PaginationParams,
    # Response schemas
    DeviceEntryResponse,
    SnapshotTableResponse,
    SnapshotResponse,
    PaginationMeta,
    SnapshotListResponse,
)

from pricelist.schemas.public import (
    PublicProduct,
    PublicCategory,
    PublicCatalog,
)

from pricelist.schemas.auth import (
    SignUpRequest,
    SignInRequest,
    UserOut,
    SessionResponse,
    CurrentSession,
    SignOutResponse,
)

__all__ = [
    "ApiError",

    # Snapshot schemas
    "DeviceEntryCreate",
    "SnapshotTableCreate",
    "SnapshotCreate",
    "SnapshotDuplicate",
    "PaginationParams",
    "DeviceEntryResponse",
    "SnapshotTableResponse",
    "SnapshotResponse",
    "PaginationMeta",
    "SnapshotListResponse",

    # Public catalog schemas
    "PublicProduct",
    "PublicCategory",
    "PublicCatalog",

    # Session schemas
    "SignUpRequest",
    "SignInRequest",
    "UserOut",
    "SessionResponse",
    "CurrentSession",
    "SignOutResponse",
]
