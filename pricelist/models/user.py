"""
User model backing the session service.
"""

import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from pricelist.core.database import Base
from pricelist.models.snapshot import utcnow


class User(Base):
    """
    Account that owns pricing snapshots.

    Table: users
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    snapshots = relationship("PricingSnapshot", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}')>"
