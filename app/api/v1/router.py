"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import planning, weather

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    planning.router, prefix="/planning", tags=["Planning"]
)
api_router.include_router(
    weather.router, prefix="/weather", tags=["Weather"]
)
