"""Processing control endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from los.deps import get_processing_engine
from los.models.schemas.loan import PassSummaryResponse
from los.services.loan_processing_engine import LoanProcessingEngine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/run",
    response_model=PassSummaryResponse,
    summary="Run a processing pass now",
    description="Adjudicate every loan waiting in APPLIED status and return the pass counters",
)
async def run_processing_pass(
    engine: Annotated[LoanProcessingEngine, Depends(get_processing_engine)],
) -> PassSummaryResponse:
    """
    Run one processing pass outside the schedule.

    Safe to call while a scheduled pass is running; loans already in
    flight are skipped.
    """
    try:
        summary = await engine.run_pass()
        return PassSummaryResponse.model_validate(summary)
    except Exception as e:
        logger.error(f"Error running processing pass: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to run processing pass",
        )
