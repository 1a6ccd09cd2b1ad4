"""Decision service applying an agent's final decision to a reviewed loan."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from los.core.enums import AgentDecision, LoanStatus
from los.core.exceptions import InvalidStateError, NotAuthorizedError, NotFoundError
from los.models.domain.loan import Loan
from los.repositories.loan_repository import LoanRepository
from los.services.notifications import NotificationDispatcher, decision_notice

logger = logging.getLogger(__name__)


class DecisionService:
    """
    Decision service for the agent-facing end of the review workflow.

    Only the agent assigned to a loan may decide it, and only while the loan
    is UNDER_REVIEW. The status check is what keeps a late decision from
    overwriting a loan that has already reached a terminal state.
    """

    def __init__(self, db: AsyncSession, notifier: NotificationDispatcher):
        """
        Initialize the decision service.

        Args:
            db: Async database session
            notifier: Dispatcher receiving the customer notice
        """
        self.db = db
        self.notifier = notifier
        self.loan_repo = LoanRepository(db)

    @staticmethod
    def default_reason(decision: AgentDecision) -> str:
        return f"Decision made by agent: {decision.display_name}"

    async def apply_decision(
        self,
        agent_id: UUID,
        loan_id: str,
        decision: AgentDecision,
        reason: Optional[str] = None,
    ) -> Loan:
        """
        Apply an agent's decision to a loan under review.

        Args:
            agent_id: Surrogate UUID of the deciding agent
            loan_id: External loan identifier
            decision: APPROVE or REJECT
            reason: Optional free-text reason; blank means use the default

        Returns:
            The updated loan, after the change is committed

        Raises:
            NotFoundError: If the loan does not exist
            NotAuthorizedError: If the loan is not assigned to this agent
            InvalidStateError: If the loan is not UNDER_REVIEW, including when a
                concurrent decision lands first
        """
        loan = await self.loan_repo.get_by_loan_id(loan_id)
        if loan is None:
            raise NotFoundError(f"Loan {loan_id} not found")

        if loan.assigned_agent_id != agent_id:
            raise NotAuthorizedError(f"Agent {agent_id} is not assigned to loan {loan_id}")

        if loan.status != LoanStatus.UNDER_REVIEW:
            raise InvalidStateError(
                f"Loan {loan_id} is {loan.status.value}; only loans under review can be decided"
            )

        decision = AgentDecision(decision)
        decision_reason = (
            reason.strip() if reason and reason.strip() else self.default_reason(decision)
        )

        # Guarded write: the row only changes if it is still under review by this agent
        applied = await self.loan_repo.transition_under_review(
            loan.id, agent_id, decision.to_loan_status(), decision_reason
        )
        if not applied:
            await self.db.rollback()
            raise InvalidStateError(f"Loan {loan_id} was decided or reassigned concurrently")

        await self.db.commit()
        await self.db.refresh(loan)

        logger.info(
            f"Agent {agent_id} decided loan {loan_id}: {loan.status.value} ({loan.decision_reason})"
        )

        notice = decision_notice(loan)
        if notice is not None:
            self.notifier.emit(notice)
        return loan
