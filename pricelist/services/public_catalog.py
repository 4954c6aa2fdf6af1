"""
Public catalog projection of the latest snapshot.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from pricelist.core.config import Settings
from pricelist.schemas.base import to_iso8601
from pricelist.schemas.public import PublicCatalog, PublicCategory, PublicProduct
from pricelist.services.snapshot_repository import SnapshotRepository
from pricelist.utils.currency import usd_to_syr_whole


def build_public_catalog(db: Session, settings: Settings) -> PublicCatalog:
    """
    Flatten the most recent snapshot (any user) into categories of products.

    SYP prices are rounded to whole pounds here, unlike the two-decimal
    conversion used in the authenticated views. With no snapshot saved yet the
    shop metadata is returned with an empty catalog at rate 1.
    """
    shop = dict(
        shop_name=settings.SHOP_NAME,
        phone=settings.SHOP_PHONE,
        location=settings.SHOP_LOCATION,
        working_hours=settings.SHOP_WORKING_HOURS,
    )

    latest = SnapshotRepository.get_latest(db)
    if latest is None:
        return PublicCatalog(
            **shop,
            last_updated=to_iso8601(datetime.now(timezone.utc)),
            exchange_rate=1,
            categories=[],
            total_products=0,
        )

    categories = []
    for table in latest.tables:
        entries = table.entries if isinstance(table.entries, list) else []
        categories.append(
            PublicCategory(
                category=table.title,
                products=[
                    PublicProduct(
                        name=entry["name"],
                        price_usd=entry["priceUsd"],
                        price_syp=usd_to_syr_whole(entry["priceUsd"], latest.rate),
                    )
                    for entry in entries
                ],
            )
        )

    return PublicCatalog(
        **shop,
        last_updated=to_iso8601(latest.updated_at),
        exchange_rate=float(latest.rate),
        categories=categories,
        total_products=sum(len(category.products) for category in categories),
    )
