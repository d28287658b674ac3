"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from storefront.api.v1.dependencies.
"""

from fastapi import APIRouter

from storefront.api.v1.endpoints import (
    admin,
    auth,
    catalog,
    health,
    public,
    websocket as ws_endpoint,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(public.router, tags=["public"])
api_router.include_router(catalog.router, tags=["catalog"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(ws_endpoint.router, prefix="/ws", tags=["websocket"])
