"""
API router aggregator.

All feature routes are registered here and mounted under /api.
"""

from fastapi import APIRouter

from app.features.auth.router import router as auth_router
from app.features.notes.router import router as notes_router
from app.features.tenants.router import router as tenants_router
from app.features.users.router import router as users_router

api_router = APIRouter()

# Register all feature routers
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(notes_router)
api_router.include_router(tenants_router)
