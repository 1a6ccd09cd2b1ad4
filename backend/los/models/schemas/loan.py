"""Pydantic schemas for loan applications, decisions and processing."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from los.core.enums import AgentDecision, LoanStatus, LoanType


# ==================== Loan Schemas ====================


class LoanApplicationCreate(BaseModel):
    """Schema for submitting a loan application."""

    customer_name: str = Field(..., min_length=1, max_length=100)
    customer_phone: str = Field(
        ...,
        pattern=r"^\+?[1-9]\d{1,14}$",
        description="Phone number in E.164-like format (e.g., '+1234567890')",
    )
    loan_amount: Decimal = Field(
        ..., ge=Decimal("0.01"), le=Decimal("999999999.99"), decimal_places=2
    )
    loan_type: LoanType


class LoanResponse(BaseModel):
    """Schema for loan response."""

    id: UUID
    loan_id: str
    customer_name: str
    customer_phone: str
    loan_amount: Decimal
    loan_type: LoanType
    status: LoanStatus
    assigned_agent_id: Optional[UUID] = None
    decision_reason: Optional[str] = None
    processing_started_at: Optional[datetime] = None
    processing_completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LoanListResponse(BaseModel):
    """Schema for paginated list of loans."""

    items: list[LoanResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class StatusCountResponse(BaseModel):
    """Schema for the per-status loan histogram."""

    counts: dict[LoanStatus, int]
    total: int


class TopCustomerResponse(BaseModel):
    """Schema for a customer ranked by approved loans."""

    customer_name: str
    approved_loans: int


# ==================== Decision Schemas ====================


class AgentDecisionRequest(BaseModel):
    """Schema for an agent's decision on a loan under review."""

    decision: AgentDecision
    reason: Optional[str] = Field(None, max_length=500)


class DecisionResponse(BaseModel):
    """Schema for the result of an agent decision."""

    loan: LoanResponse
    message: str


# ==================== Processing Schemas ====================


class PassSummaryResponse(BaseModel):
    """Schema for the counters of one processing pass."""

    fetched: int
    processed: int
    skipped: int
    failed: int
    reassigned: int
    approved: int
    rejected: int
    under_review: int
    unassigned: int

    model_config = ConfigDict(from_attributes=True)
