"""Dependency injection for FastAPI endpoints."""

from typing import AsyncGenerator

from fastapi import HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from los.db.session import get_db
from los.services.loan_processing_engine import LoanProcessingEngine
from los.services.notifications import NotificationDispatcher

__all__ = ["get_db", "get_session", "get_processing_engine", "get_notification_dispatcher"]


# Re-export get_db for convenience
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    This is an alias for get_db for clarity in endpoint signatures.
    """
    async for session in get_db():
        yield session


def get_processing_engine(request: Request) -> LoanProcessingEngine:
    """Processing engine created by the application lifespan."""
    engine = getattr(request.app.state, "processing_engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Loan processing is not running",
        )
    return engine


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    """Notification dispatcher created by the application lifespan."""
    dispatcher = getattr(request.app.state, "notification_dispatcher", None)
    if dispatcher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notifications are not running",
        )
    return dispatcher
