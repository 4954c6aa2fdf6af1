"""
Public, unauthenticated catalog endpoint.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from pricelist.core.config import settings
from pricelist.core.database import get_db
from pricelist.services.public_catalog import build_public_catalog
from pricelist.schemas.public import PublicCatalog

router = APIRouter(prefix="/public", tags=["Public Catalog"])


@router.get("/products", response_model=PublicCatalog)
def get_public_products(response: Response, db: Session = Depends(get_db)):
    """
    Latest price list for external consumers.

    Returns the shop details and the most recent snapshot flattened into
    categories, with SYP prices in whole pounds. Readable from any origin and
    cacheable by shared caches for a short interval.
    """
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Cache-Control"] = settings.public_cache_control

    return build_public_catalog(db, settings)
