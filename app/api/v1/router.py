"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import sessions, targets

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    sessions.router, prefix="/sessions", tags=["Sessions"]
)
api_router.include_router(
    targets.router, prefix="/targets", tags=["Targets"]
)
