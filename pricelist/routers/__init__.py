"""
API routers for the application.
"""

from fastapi import APIRouter
from pricelist.routers import auth, snapshots, public

api_router = APIRouter()

# Include routers
api_router.include_router(auth.router)  # Session service
api_router.include_router(snapshots.router)  # Pricing snapshots (owner-scoped)
api_router.include_router(public.router)  # Public catalog, no auth

__all__ = ["api_router", "auth", "snapshots", "public"]
