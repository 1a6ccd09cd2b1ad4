"""Pydantic schemas for API validation and serialization."""

from los.models.schemas.agent import AgentCreate, AgentResponse
from los.models.schemas.loan import (
    AgentDecisionRequest,
    DecisionResponse,
    LoanApplicationCreate,
    LoanListResponse,
    LoanResponse,
    PassSummaryResponse,
    StatusCountResponse,
    TopCustomerResponse,
)

__all__ = [
    "AgentCreate",
    "AgentDecisionRequest",
    "AgentResponse",
    "DecisionResponse",
    "LoanApplicationCreate",
    "LoanListResponse",
    "LoanResponse",
    "PassSummaryResponse",
    "StatusCountResponse",
    "TopCustomerResponse",
]
