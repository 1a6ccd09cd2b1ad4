"""Notification intents emitted by the processing engine and decision intake."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from los.core.enums import LoanStatus, LoanType
from los.models.domain.agent import Agent
from los.models.domain.loan import Loan

if TYPE_CHECKING:
    from los.services.notifications.service import NotificationService


@dataclass(frozen=True)
class LoanSnapshot:
    """Immutable copy of the loan fields a notice needs."""

    loan_id: str
    customer_name: str
    customer_phone: str
    loan_amount: Decimal
    loan_type: LoanType
    status: LoanStatus
    decision_reason: Optional[str] = None

    @classmethod
    def from_loan(cls, loan: Loan) -> "LoanSnapshot":
        return cls(
            loan_id=loan.loan_id,
            customer_name=loan.customer_name,
            customer_phone=loan.customer_phone,
            loan_amount=loan.loan_amount,
            loan_type=loan.loan_type,
            status=loan.status,
            decision_reason=loan.decision_reason,
        )


@dataclass(frozen=True)
class AgentSnapshot:
    """Immutable copy of the agent fields a notice needs."""

    agent_id: str
    name: str
    email: str

    @classmethod
    def from_agent(cls, agent: Agent) -> "AgentSnapshot":
        return cls(agent_id=agent.agent_id, name=agent.name, email=agent.email)


class Notice(ABC):
    """Base class for notices; each knows which service method delivers it."""

    @abstractmethod
    async def deliver(self, service: "NotificationService") -> None:
        """Hand this notice to the matching service method."""


@dataclass(frozen=True)
class ProcessingStartedNotice(Notice):
    loan: LoanSnapshot

    async def deliver(self, service: "NotificationService") -> None:
        await service.send_processing_started(self.loan)


@dataclass(frozen=True)
class ProcessingCompletedNotice(Notice):
    loan: LoanSnapshot

    async def deliver(self, service: "NotificationService") -> None:
        await service.send_processing_completed(self.loan)


@dataclass(frozen=True)
class LoanAssignmentNotice(Notice):
    agent: AgentSnapshot
    loan: LoanSnapshot

    async def deliver(self, service: "NotificationService") -> None:
        await service.send_loan_assignment(self.agent, self.loan)


@dataclass(frozen=True)
class ManagerNotice(Notice):
    manager: AgentSnapshot
    agent: AgentSnapshot
    loan: LoanSnapshot

    async def deliver(self, service: "NotificationService") -> None:
        await service.send_manager_notification(self.manager, self.agent, self.loan)


@dataclass(frozen=True)
class LoanApprovalNotice(Notice):
    loan: LoanSnapshot

    async def deliver(self, service: "NotificationService") -> None:
        await service.send_loan_approval(self.loan)


@dataclass(frozen=True)
class LoanRejectionNotice(Notice):
    loan: LoanSnapshot
    reason: Optional[str] = None

    async def deliver(self, service: "NotificationService") -> None:
        await service.send_loan_rejection(self.loan, self.reason)


def decision_notice(loan: Loan) -> Optional[Notice]:
    """
    Build the customer notice for a terminal loan.

    Returns:
        An approval or rejection notice, or None when the loan is not terminal
    """
    snapshot = LoanSnapshot.from_loan(loan)
    if loan.status.is_approved:
        return LoanApprovalNotice(loan=snapshot)
    if loan.status.is_rejected:
        return LoanRejectionNotice(loan=snapshot, reason=loan.decision_reason)
    return None
