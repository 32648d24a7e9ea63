"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from talklink.api.v1.dependencies.
"""

from fastapi import APIRouter

from talklink.api.v1.endpoints import health, links, settings

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(links.router, tags=["links"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
