"""Agent domain model for human reviewers."""

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Enum as SQLEnum,
    ForeignKey,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from los.core.enums import AgentStatus
from los.db.base import BaseModel


class Agent(BaseModel):
    """Loan agent with handling limits and category specializations."""

    __tablename__ = "agents"

    # Identification
    agent_id: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Contact
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Availability
    status: Mapped[AgentStatus] = mapped_column(
        SQLEnum(AgentStatus, name="agent_status", native_enum=False, length=20),
        default=AgentStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    # Handling limits
    max_loan_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2), nullable=True
    )  # None = any amount
    specializations: Mapped[Optional[str]] = mapped_column(
        String(500), nullable=True
    )  # e.g., "PERSONAL,AUTO"

    # Hierarchy, resolved by lookup rather than by relationship loading
    manager_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("agents.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    @property
    def specialization_list(self) -> list[str]:
        """Specialization tokens, upper-cased and stripped."""
        if not self.specializations:
            return []
        return [
            token.strip().upper()
            for token in self.specializations.split(",")
            if token.strip()
        ]

    def __repr__(self) -> str:
        return (
            f"<Agent(id={self.id}, agent_id={self.agent_id!r}, "
            f"name={self.name!r}, status={self.status.value})>"
        )
