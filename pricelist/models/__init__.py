"""
Database models for the application.
"""

from pricelist.core.database import Base
from pricelist.models.user import User
from pricelist.models.snapshot import PricingSnapshot, SnapshotTable

__all__ = [
    "Base",
    "User",
    "PricingSnapshot",
    "SnapshotTable",
]
