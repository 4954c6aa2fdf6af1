"""
API Router for pricing snapshot endpoints.
Create, list, fetch and duplicate the caller's snapshots.
"""

import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from pricelist.core.auth import get_current_user_id
from pricelist.core.database import get_db
from pricelist.core.errors import MethodNotAllowedError, NotFoundError
from pricelist.services.snapshot_repository import SnapshotRepository
from pricelist.schemas.snapshot import (
    SnapshotCreate,
    SnapshotDuplicate,
    SnapshotResponse,
    SnapshotListResponse,
    PaginationMeta,
    PaginationParams,
)

router = APIRouter(prefix="/snapshots", tags=["Pricing Snapshots"])

SNAPSHOT_NOT_FOUND = "Snapshot not found"


def get_pagination(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize", description="Snapshots per page"),
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)


def reject_method(request: Request, _: str = Depends(get_current_user_id)):
    # Runs after authentication so anonymous callers still get UNAUTHORIZED
    raise MethodNotAllowedError(f"Method {request.method} not allowed")


# ============================================================================
# COLLECTION ENDPOINTS
# ============================================================================

@router.get("", response_model=SnapshotListResponse)
def list_snapshots(
    user_id: str = Depends(get_current_user_id),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
):
    """
    Get the caller's snapshots, newest first.

    **Query Parameters:**
    - page: Page number (default: 1)
    - pageSize: Snapshots per page (default: 10, max: 100)
    """
    snapshots, total = SnapshotRepository.list_paged(db, user_id, pagination)

    return SnapshotListResponse(
        data=[SnapshotResponse.model_validate(s) for s in snapshots],
        pagination=PaginationMeta(
            page=pagination.page,
            page_size=pagination.page_size,
            total=total,
            total_pages=math.ceil(total / pagination.page_size),
        ),
    )


@router.post("", response_model=SnapshotResponse, status_code=status.HTTP_201_CREATED)
def create_snapshot(
    payload: SnapshotCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Save a new snapshot with its tables and entries.

    **Required fields:**
    - rate: USD to SYP exchange rate (at least 0.01)
    - tables: list of `{title, entries: [{name, priceUsd}]}`

    Table and entry order follow the order of the submitted lists.
    """
    db_snapshot = SnapshotRepository.create(db, user_id, payload)
    return SnapshotResponse.model_validate(db_snapshot)


router.add_api_route(
    "",
    reject_method,
    methods=["PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)


# ============================================================================
# SINGLE SNAPSHOT ENDPOINTS
# ============================================================================

@router.get("/{snapshot_id}", response_model=SnapshotResponse)
def get_snapshot(
    snapshot_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Get one of the caller's snapshots by ID.
    """
    snapshot = SnapshotRepository.get_by_id(db, user_id, snapshot_id)
    if not snapshot:
        raise NotFoundError(SNAPSHOT_NOT_FOUND)
    return SnapshotResponse.model_validate(snapshot)


@router.post("/{snapshot_id}/duplicate", response_model=SnapshotResponse, status_code=status.HTTP_201_CREATED)
def duplicate_snapshot(
    snapshot_id: str,
    overrides: Optional[SnapshotDuplicate] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Save a copy of one of the caller's snapshots.

    The body is optional; `title` and `rate` override the copied values.
    """
    duplicate = SnapshotRepository.duplicate(db, user_id, snapshot_id, overrides)
    if not duplicate:
        raise NotFoundError(SNAPSHOT_NOT_FOUND)
    return SnapshotResponse.model_validate(duplicate)


router.add_api_route(
    "/{snapshot_id}",
    reject_method,
    methods=["POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
