"""Pydantic schemas for loan agents."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from los.core.enums import AgentStatus, LoanType


class AgentBase(BaseModel):
    """Base schema for agent with common fields."""

    agent_id: str = Field(..., min_length=1, max_length=50, description="External ID (e.g., 'AGENT-007')")
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=100)
    phone: Optional[str] = Field(None, pattern=r"^\+?[1-9]\d{1,14}$")
    max_loan_amount: Optional[Decimal] = Field(None, gt=0, description="Largest loan the agent may review")


class AgentCreate(AgentBase):
    """Schema for creating an agent."""

    specializations: list[LoanType] = Field(default_factory=list)
    manager_id: Optional[UUID] = None


class AgentResponse(AgentBase):
    """Schema for agent response."""

    id: UUID
    status: AgentStatus
    specializations: Optional[str] = None
    manager_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
