"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from los.deps import get_session

router = APIRouter()


@router.get("/health")
async def health_check(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> dict:
    """
    Health check endpoint.

    Reports database connectivity along with the state of the background
    processing components.

    Returns:
        dict: Health status with API, database and processing status
    """
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    state = request.app.state
    engine = getattr(state, "processing_engine", None)
    scheduler = getattr(state, "scheduler", None)
    dispatcher = getattr(state, "notification_dispatcher", None)

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "api": "healthy",
        "database": db_status,
        "processing": {
            "engine": "running" if engine is not None and engine.pool.running else "stopped",
            "scheduler": "running" if scheduler is not None and scheduler.running else "stopped",
            "in_flight": len(engine.ledger) if engine is not None else 0,
            "pending_notifications": dispatcher.pending if dispatcher is not None else 0,
        },
    }
