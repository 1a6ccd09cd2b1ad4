"""Repository for loan data access with processing and reporting queries."""

from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from los.core.enums import LoanStatus
from los.db.base import utcnow
from los.models.domain.loan import Loan
from los.repositories.base import BaseRepository

APPROVED_STATUSES = (LoanStatus.APPROVED_BY_SYSTEM, LoanStatus.APPROVED_BY_AGENT)


class LoanRepository(BaseRepository[Loan]):
    """
    Repository for Loan with specialized queries.

    Provides the queue queries used by the processing engine as well as the
    read-only status and ranking queries behind the reporting endpoints.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the loan repository.

        Args:
            db: Async database session
        """
        super().__init__(Loan, db)

    async def get_by_loan_id(self, loan_id: str) -> Optional[Loan]:
        """
        Retrieve a loan by its external loan ID.

        Args:
            loan_id: Unique external identifier (e.g., LOAN-1A2B3C4D)

        Returns:
            The loan if found, None otherwise
        """
        stmt = select(Loan).where(Loan.loan_id == loan_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def transition_under_review(
        self,
        id: UUID,
        agent_id: UUID,
        status: LoanStatus,
        decision_reason: str,
    ) -> bool:
        """
        Move a loan out of UNDER_REVIEW only if it is still there and still
        assigned to the given agent.

        The status and owner are re-checked by the UPDATE itself, so of two
        racing decisions at most one changes the row.

        Args:
            id: Surrogate UUID of the loan
            agent_id: Surrogate UUID of the agent expected to own the loan
            status: Terminal status to store
            decision_reason: Reason to store alongside the status

        Returns:
            True if the row was updated, False if the guard no longer held
        """
        stmt = (
            update(Loan)
            .where(
                Loan.id == id,
                Loan.assigned_agent_id == agent_id,
                Loan.status == LoanStatus.UNDER_REVIEW,
            )
            .values(status=status, decision_reason=decision_reason, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def find_ready_for_processing(self) -> List[Loan]:
        """
        Retrieve loans waiting for automated adjudication.

        Returns:
            Loans in APPLIED status with no assigned agent, oldest first
        """
        stmt = (
            select(Loan)
            .where(
                Loan.status == LoanStatus.APPLIED,
                Loan.assigned_agent_id.is_(None),
            )
            .order_by(Loan.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def find_unassigned_reviews(self) -> List[Loan]:
        """
        Retrieve loans that need review but never got an agent.

        Returns:
            Loans in UNDER_REVIEW status with no assigned agent, oldest first
        """
        stmt = (
            select(Loan)
            .where(
                Loan.status == LoanStatus.UNDER_REVIEW,
                Loan.assigned_agent_id.is_(None),
            )
            .order_by(Loan.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_status(
        self,
        status: LoanStatus,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Loan]:
        """
        Retrieve loans filtered by status, newest first.

        Args:
            status: Loan status to filter by
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            List of loans matching the status
        """
        stmt = (
            select(Loan)
            .where(Loan.status == status)
            .order_by(Loan.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_assigned_agent(self, agent_id) -> List[Loan]:
        """
        Retrieve all loans assigned to an agent.

        Args:
            agent_id: Surrogate UUID of the agent

        Returns:
            List of loans assigned to the agent
        """
        stmt = (
            select(Loan)
            .where(Loan.assigned_agent_id == agent_id)
            .order_by(Loan.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self, status: LoanStatus) -> int:
        """
        Count loans with a specific status.

        Args:
            status: Loan status to count

        Returns:
            Number of loans with the given status
        """
        return await self.count(status=status)

    async def status_histogram(self) -> Dict[LoanStatus, int]:
        """
        Count loans per status.

        Returns:
            Mapping of every status to its count, including zero counts
        """
        stmt = select(Loan.status, func.count(Loan.id)).group_by(Loan.status)
        result = await self.db.execute(stmt)

        histogram = {status: 0 for status in LoanStatus}
        for status, count in result.all():
            histogram[LoanStatus(status)] = count
        return histogram

    async def top_customers_by_approved_loans(
        self, limit: int = 3
    ) -> List[Tuple[str, int]]:
        """
        Rank customers by their number of approved loans.

        Both system and agent approvals count. Ties are broken by name.

        Args:
            limit: Maximum number of customers to return

        Returns:
            List of (customer_name, approved_count) tuples
        """
        approved_count = func.count(Loan.id).label("approved_count")
        stmt = (
            select(Loan.customer_name, approved_count)
            .where(Loan.status.in_(APPROVED_STATUSES))
            .group_by(Loan.customer_name)
            .order_by(approved_count.desc(), Loan.customer_name)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [(name, count) for name, count in result.all()]
