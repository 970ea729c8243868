"""API routes."""
from fastapi import APIRouter
from catalog.api import admin, artwork, auth, catalog, health

api_router = APIRouter()

# Auth
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Public catalog
api_router.include_router(catalog.router, tags=["catalog"])

# Admin
api_router.include_router(admin.router, tags=["admin"])
api_router.include_router(artwork.router, tags=["artwork"])

# Health
api_router.include_router(health.router, tags=["health"])
