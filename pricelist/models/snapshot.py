"""
Pricing snapshot models.

A snapshot owns its tables; a table owns its device entries, which are stored
as a JSON array of ``{"name", "priceUsd", "order"}`` objects on the table row.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from pricelist.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class PricingSnapshot(Base):
    """
    A saved set of pricing tables at one exchange rate.

    Table: pricing_snapshots
    """
    __tablename__ = "pricing_snapshots"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    rate = Column(Numeric(18, 4), nullable=False)  # USD -> SYP multiplier
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="snapshots")
    tables = relationship(
        "SnapshotTable",
        back_populates="snapshot",
        cascade="all, delete-orphan",
        order_by="SnapshotTable.order",
    )

    def __repr__(self):
        return f"<PricingSnapshot(id='{self.id}', title='{self.title}', rate={self.rate})>"


class SnapshotTable(Base):
    """
    One titled table of device entries inside a snapshot.

    Table: snapshot_tables
    """
    __tablename__ = "snapshot_tables"

    id = Column(String(36), primary_key=True, default=new_id)
    snapshot_id = Column(String(36), ForeignKey("pricing_snapshots.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    order = Column(Integer, nullable=False)
    entries = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    snapshot = relationship("PricingSnapshot", back_populates="tables")

    __table_args__ = (
        UniqueConstraint('snapshot_id', 'order', name='uq_snapshot_table_order'),
    )

    def __repr__(self):
        return f"<SnapshotTable(id='{self.id}', title='{self.title}', order={self.order})>"
