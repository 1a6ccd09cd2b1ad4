"""Loan application endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from los.core.enums import LoanStatus
from los.deps import get_session
from los.models.schemas.loan import (
    LoanApplicationCreate,
    LoanListResponse,
    LoanResponse,
    StatusCountResponse,
    TopCustomerResponse,
)
from los.services.loan_service import LoanService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=LoanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a loan application",
    description="Create a loan in APPLIED status for the processing engine to pick up",
)
async def submit_loan(
    loan_data: LoanApplicationCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanResponse:
    """
    Submit a new loan application.

    The loan is adjudicated on the next processing pass.
    """
    try:
        service = LoanService(db)
        loan = await service.submit_application(
            customer_name=loan_data.customer_name,
            customer_phone=loan_data.customer_phone,
            loan_amount=loan_data.loan_amount,
            loan_type=loan_data.loan_type,
        )
        return LoanResponse.model_validate(loan)

    except ValueError as e:
        logger.error(f"Validation error submitting loan: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logger.error(f"Error submitting loan: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit loan application",
        )


@router.get(
    "",
    response_model=LoanListResponse,
    summary="List loans by status",
    description="Retrieve loans with a given status with pagination",
)
async def list_loans(
    db: Annotated[AsyncSession, Depends(get_session)],
    loan_status: Annotated[
        LoanStatus, Query(alias="status", description="Loan status to filter by")
    ] = LoanStatus.APPLIED,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    page_size: Annotated[
        int, Query(ge=1, le=100, description="Number of items per page")
    ] = 10,
) -> LoanListResponse:
    """
    List loans in a status, newest first.
    """
    service = LoanService(db)

    skip = (page - 1) * page_size
    loans, total = await service.get_loans_by_status(loan_status, skip=skip, limit=page_size)

    total_pages = (total + page_size - 1) // page_size if total > 0 else 1

    return LoanListResponse(
        items=[LoanResponse.model_validate(loan) for loan in loans],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


@router.get(
    "/status-count",
    response_model=StatusCountResponse,
    summary="Count loans per status",
)
async def get_status_count(
    db: Annotated[AsyncSession, Depends(get_session)],
) -> StatusCountResponse:
    """
    Count loans in every status, including statuses with no loans.
    """
    service = LoanService(db)
    counts = await service.get_status_count()
    return StatusCountResponse(counts=counts, total=sum(counts.values()))


@router.get(
    "/customers/top",
    response_model=list[TopCustomerResponse],
    summary="Top customers by approved loans",
)
async def get_top_customers(
    db: Annotated[AsyncSession, Depends(get_session)],
    limit: Annotated[int, Query(ge=1, le=100, description="Number of customers")] = 3,
) -> list[TopCustomerResponse]:
    """
    Rank customers by number of approved loans (system or agent).
    """
    service = LoanService(db)
    ranking = await service.get_top_customers(limit=limit)
    return [
        TopCustomerResponse(customer_name=name, approved_loans=count)
        for name, count in ranking
    ]


@router.get(
    "/by-loan-id/{loan_id}",
    response_model=LoanResponse,
    summary="Get loan by loan ID",
)
async def get_loan_by_loan_id(
    loan_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanResponse:
    """
    Retrieve a loan by its external loan ID.
    """
    service = LoanService(db)
    loan = await service.get_loan_by_loan_id(loan_id)

    if not loan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Loan {loan_id} not found",
        )

    return LoanResponse.model_validate(loan)


@router.get(
    "/{id}",
    response_model=LoanResponse,
    summary="Get loan by ID",
)
async def get_loan(
    id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LoanResponse:
    """
    Retrieve a loan by surrogate ID.
    """
    service = LoanService(db)
    loan = await service.get_loan(id)

    if not loan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Loan with ID {id} not found",
        )

    return LoanResponse.model_validate(loan)
