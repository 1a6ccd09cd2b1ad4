"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from los.api.v1.router import api_router
from los.config import settings
from los.db.session import SessionLocal
from los.services.loan_processing_engine import LoanProcessingEngine
from los.services.notifications import NotificationDispatcher, NotificationService
from los.services.processing_ledger import ProcessingLedger
from los.services.scheduler import LoanProcessingScheduler
from los.services.seed import seed_sample_agents
from los.services.worker_pool import BoundedWorkerPool

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Seed agents and run the background processing components.

    The schema is managed by Alembic (`alembic upgrade head`).
    """
    if settings.SEED_SAMPLE_DATA:
        async with SessionLocal() as session:
            await seed_sample_agents(session)

    dispatcher = NotificationDispatcher(
        NotificationService.from_settings(settings),
        workers=settings.NOTIFICATION_WORKERS,
        queue_capacity=settings.NOTIFICATION_QUEUE_CAPACITY,
    )
    pool = BoundedWorkerPool(
        name="loan-processing",
        workers=settings.PROCESSING_WORKERS,
        queue_capacity=settings.PROCESSING_QUEUE_CAPACITY,
    )
    await dispatcher.start()
    await pool.start()

    engine = LoanProcessingEngine(
        session_factory=SessionLocal,
        notifier=dispatcher,
        pool=pool,
        ledger=ProcessingLedger(),
        processing_delay=settings.processing_delay_range,
        retry_unassigned_reviews=settings.RETRY_UNASSIGNED_REVIEWS,
    )
    scheduler = LoanProcessingScheduler(
        engine,
        SessionLocal,
        processing_interval=settings.PROCESSING_INTERVAL_SECONDS,
        report_interval=settings.STATUS_REPORT_INTERVAL_SECONDS,
    )
    if settings.SCHEDULER_ENABLED:
        scheduler.start()

    app.state.notification_dispatcher = dispatcher
    app.state.processing_engine = engine
    app.state.scheduler = scheduler
    logger.info("Loan origination service started")

    try:
        yield
    finally:
        timeout = settings.SHUTDOWN_TIMEOUT_SECONDS
        await scheduler.stop(timeout)
        await pool.shutdown(timeout)
        await dispatcher.shutdown(timeout)
        logger.info("Loan origination service stopped")


# Create FastAPI application
app = FastAPI(
    title="Loan Origination Service API",
    description="API for submitting loan applications, automated adjudication and agent review",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router with v1 prefix
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "message": "Loan Origination Service API",
        "version": "1.0.0",
        "docs": "/api/docs",
    }
