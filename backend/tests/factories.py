"""Shared test factory functions and a recording notification service."""

import itertools
from decimal import Decimal
from typing import List, Optional, Tuple

from los.core.enums import AgentStatus, LoanStatus, LoanType
from los.models.domain.agent import Agent
from los.models.domain.loan import Loan
from los.services.notifications import NotificationService
from los.services.notifications.notices import AgentSnapshot, LoanSnapshot

_loan_numbers = itertools.count(1)


class RecordingNotificationService(NotificationService):
    """Notification service that records every delivery instead of logging it."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.sent: List[Tuple] = []

    def kinds(self) -> List[str]:
        return [entry[0] for entry in self.sent]

    def for_loan(self, loan_id: str) -> List[str]:
        """Kinds of notice sent about a loan, in delivery order."""
        return [entry[0] for entry in self.sent if entry[-1].loan_id == loan_id]

    async def send_loan_assignment(self, agent: AgentSnapshot, loan: LoanSnapshot) -> None:
        self.sent.append(("assignment", agent, loan))

    async def send_manager_notification(
        self, manager: AgentSnapshot, agent: AgentSnapshot, loan: LoanSnapshot
    ) -> None:
        self.sent.append(("manager", manager, agent, loan))

    async def send_loan_approval(self, loan: LoanSnapshot) -> None:
        self.sent.append(("approval", loan))

    async def send_loan_rejection(self, loan: LoanSnapshot, reason: Optional[str]) -> None:
        self.sent.append(("rejection", reason, loan))

    async def send_processing_started(self, loan: LoanSnapshot) -> None:
        self.sent.append(("started", loan))

    async def send_processing_completed(self, loan: LoanSnapshot) -> None:
        self.sent.append(("completed", loan))


async def make_loan(
    session,
    amount="10000",
    loan_type=LoanType.PERSONAL,
    customer_name="Jane Doe",
    status=LoanStatus.APPLIED,
    assigned_agent_id=None,
    loan_id=None,
) -> Loan:
    """Insert and commit a loan.

    Args:
        session: Async session to write through.
        amount: Requested amount as a string.
        loan_type: Loan category.
        customer_name: Applicant name.
        status: Initial status.
        assigned_agent_id: Surrogate id of the assigned agent.
        loan_id: External id; generated when omitted.

    Returns:
        The committed Loan.
    """
    loan = Loan(
        loan_id=loan_id or f"LOAN-T{next(_loan_numbers):07d}",
        customer_name=customer_name,
        customer_phone="+15550001234",
        loan_amount=Decimal(amount),
        loan_type=loan_type,
        status=status,
        assigned_agent_id=assigned_agent_id,
    )
    session.add(loan)
    await session.commit()
    return loan


async def make_agent(
    session,
    agent_id="AGENT-101",
    name="Test Agent",
    specializations="PERSONAL",
    max_loan_amount="100000",
    status=AgentStatus.ACTIVE,
    manager_id=None,
) -> Agent:
    """Insert and commit an agent whose email is derived from its agent id."""
    agent = Agent(
        agent_id=agent_id,
        name=name,
        email=f"{agent_id.lower()}@example.com",
        phone="+15550009999",
        status=status,
        max_loan_amount=Decimal(max_loan_amount) if max_loan_amount is not None else None,
        specializations=specializations,
        manager_id=manager_id,
    )
    session.add(agent)
    await session.commit()
    return agent
