"""Loan domain model for applications moving through adjudication."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from los.core.enums import LoanStatus, LoanType
from los.db.base import BaseModel


class Loan(BaseModel):
    """Loan application with its adjudication state."""

    __tablename__ = "loans"

    # Application Identification
    loan_id: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )

    # Customer
    customer_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    customer_phone: Mapped[str] = mapped_column(String(20), nullable=False)

    # Loan Details
    loan_amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    loan_type: Mapped[LoanType] = mapped_column(
        SQLEnum(LoanType, name="loan_type", native_enum=False, length=20),
        nullable=False,
    )

    # Status
    status: Mapped[LoanStatus] = mapped_column(
        SQLEnum(LoanStatus, name="loan_status", native_enum=False, length=30),
        default=LoanStatus.APPLIED,
        nullable=False,
        index=True,
    )

    # Assignment (surrogate id of the reviewing agent)
    assigned_agent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("agents.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Decision
    decision_reason: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Processing Timestamps
    processing_started_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    processing_completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def is_ready_for_processing(self) -> bool:
        """Whether an engine pass may adjudicate this loan."""
        return self.status == LoanStatus.APPLIED and self.assigned_agent_id is None

    def __repr__(self) -> str:
        return (
            f"<Loan(id={self.id}, loan_id={self.loan_id!r}, "
            f"status={self.status.value}, amount={self.loan_amount})>"
        )
