"""
Repository layer for pricing snapshots.
Handles all database queries and writes for snapshots and their tables.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from pricelist.core.errors import InternalServerError
from pricelist.models.snapshot import PricingSnapshot, SnapshotTable
from pricelist.schemas.snapshot import (
    DeviceEntryCreate,
    PaginationParams,
    SnapshotCreate,
    SnapshotDuplicate,
    SnapshotTableCreate,
)

logger = logging.getLogger(__name__)

# id breaks ties between snapshots saved in the same instant
NEWEST_FIRST = (PricingSnapshot.created_at.desc(), PricingSnapshot.id.desc())


def default_title(now: Optional[datetime] = None) -> str:
    """Timestamp label used when a snapshot is saved without a title, e.g. ``Oct 19, 2026 14:05``."""
    now = now or datetime.now(timezone.utc)
    return f"{now:%b} {now.day}, {now:%Y %H:%M}"


def serialize_entries(entries: List[DeviceEntryCreate]) -> List[dict]:
    """Entry rows as stored in the table's JSON column, ordered by list position."""
    return [
        {
            "name": entry.name.strip(),
            "priceUsd": float(entry.price_usd),
            "order": index,
        }
        for index, entry in enumerate(entries)
    ]


class SnapshotRepository:
    """Repository for pricing snapshot operations, always scoped to the owning user"""

    @staticmethod
    def _query(db: Session):
        return db.query(PricingSnapshot).options(selectinload(PricingSnapshot.tables))

    @staticmethod
    def create(db: Session, user_id: str, payload: SnapshotCreate) -> PricingSnapshot:
        """
        Create a snapshot with all of its tables and entries in one transaction.

        Table and entry ``order`` values are the positions in the submitted
        lists. Nothing is persisted if any insert fails.
        """
        title = payload.title.strip() if payload.title else default_title()

        db_snapshot = PricingSnapshot(
            user_id=user_id,
            title=title,
            rate=payload.rate,
        )
        for table_index, table in enumerate(payload.tables):
            db_snapshot.tables.append(
                SnapshotTable(
                    title=table.title.strip(),
                    order=table_index,
                    entries=serialize_entries(table.entries),
                )
            )

        try:
            db.add(db_snapshot)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create snapshot for user {user_id}: {str(e)}", exc_info=True)
            raise InternalServerError("Failed to create snapshot")

        db.refresh(db_snapshot)
        logger.info(
            f"Created snapshot {db_snapshot.id} for user {user_id} "
            f"({len(db_snapshot.tables)} tables, rate {db_snapshot.rate})"
        )
        return db_snapshot

    @staticmethod
    def get_by_id(db: Session, user_id: str, snapshot_id: str) -> Optional[PricingSnapshot]:
        """Get a snapshot by ID; another user's snapshot is reported as missing"""
        return SnapshotRepository._query(db).filter(
            PricingSnapshot.id == snapshot_id,
            PricingSnapshot.user_id == user_id,
        ).first()

    @staticmethod
    def list_paged(
        db: Session,
        user_id: str,
        pagination: Optional[PaginationParams] = None,
    ) -> Tuple[List[PricingSnapshot], int]:
        """Get the user's snapshots, newest first, one page at a time"""
        pagination = pagination or PaginationParams()
        query = db.query(PricingSnapshot).filter(PricingSnapshot.user_id == user_id)

        total = query.count()

        snapshots = query.options(selectinload(PricingSnapshot.tables))\
            .order_by(*NEWEST_FIRST)\
            .offset(pagination.offset).limit(pagination.page_size).all()

        return snapshots, total

    @staticmethod
    def get_latest(db: Session) -> Optional[PricingSnapshot]:
        """Most recently created snapshot across all users"""
        return SnapshotRepository._query(db)\
            .order_by(*NEWEST_FIRST).first()

    @staticmethod
    def duplicate(
        db: Session,
        user_id: str,
        snapshot_id: str,
        overrides: Optional[SnapshotDuplicate] = None,
    ) -> Optional[PricingSnapshot]:
        """
        Save a copy of one of the user's snapshots as a new snapshot.

        Tables and entries are copied in their stored order. The copy gets a
        fresh timestamp title unless one is given; the rate is kept unless
        overridden. Returns None if the source is not found.
        """
        source = SnapshotRepository.get_by_id(db, user_id, snapshot_id)
        if not source:
            return None

        overrides = overrides or SnapshotDuplicate()
        payload = SnapshotCreate(
            title=overrides.title,
            rate=overrides.rate if overrides.rate is not None else Decimal(str(source.rate)),
            tables=[
                SnapshotTableCreate(
                    title=table.title,
                    entries=[
                        DeviceEntryCreate(name=entry["name"], price_usd=entry["priceUsd"])
                        for entry in sorted(table.entries or [], key=lambda e: e.get("order", 0))
                    ],
                )
                for table in source.tables
            ],
        )

        duplicate = SnapshotRepository.create(db, user_id, payload)
        logger.info(f"Duplicated snapshot {snapshot_id} as {duplicate.id} for user {user_id}")
        return duplicate
