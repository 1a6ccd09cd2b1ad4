"""API v1 router configuration."""

from fastapi import APIRouter

from los.api.v1.endpoints import agents, health, loans, processing

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health.router,
    tags=["health"],
)

api_router.include_router(
    loans.router,
    prefix="/loans",
    tags=["loans"],
)

api_router.include_router(
    agents.router,
    prefix="/agents",
    tags=["agents"],
)

api_router.include_router(
    processing.router,
    prefix="/processing",
    tags=["processing"],
)
