"""Loan service for application intake and read-only queries."""

import logging
import uuid
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from los.core.enums import LoanStatus, LoanType
from los.models.domain.loan import Loan
from los.repositories.loan_repository import LoanRepository

logger = logging.getLogger(__name__)


class LoanService:
    """
    Loan service for managing loan applications.

    Creates applications in the APPLIED state for the processing engine to
    pick up, and answers the status and ranking queries used for reporting.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the loan service.

        Args:
            db: Async database session
        """
        self.db = db
        self.repo = LoanRepository(db)

    @staticmethod
    def generate_loan_id() -> str:
        """
        Generate a unique external loan identifier.

        Format: LOAN-XXXXXXXX
        Example: LOAN-A3F5B2C1

        Returns:
            A unique loan identifier string
        """
        return f"LOAN-{uuid.uuid4().hex[:8].upper()}"

    async def submit_application(
        self,
        customer_name: str,
        customer_phone: str,
        loan_amount: Decimal,
        loan_type: LoanType,
    ) -> Loan:
        """
        Create a new loan application waiting for processing.

        Args:
            customer_name: Applicant name
            customer_phone: Applicant phone number
            loan_amount: Requested amount
            loan_type: Loan category

        Returns:
            The created loan in APPLIED status

        Raises:
            ValueError: If the name is blank or the amount is not positive
        """
        if not customer_name or not customer_name.strip():
            raise ValueError("Customer name is required")

        amount = Decimal(str(loan_amount))
        if amount <= 0:
            raise ValueError("Loan amount must be positive")

        loan = Loan(
            loan_id=self.generate_loan_id(),
            customer_name=customer_name.strip(),
            customer_phone=customer_phone.strip(),
            loan_amount=amount,
            loan_type=LoanType(loan_type),
            status=LoanStatus.APPLIED,
        )
        await self.repo.save(loan)
        await self.db.commit()
        await self.db.refresh(loan)

        logger.info(
            f"Loan application {loan.loan_id} submitted for {loan.customer_name}: "
            f"{loan.loan_type.value} {loan.loan_amount}"
        )
        return loan

    async def get_loan(self, id: UUID) -> Optional[Loan]:
        """
        Get a loan by surrogate ID.

        Args:
            id: Loan UUID

        Returns:
            The loan if found, None otherwise
        """
        return await self.repo.get_by_id(id)

    async def get_loan_by_loan_id(self, loan_id: str) -> Optional[Loan]:
        """
        Get a loan by external loan ID.

        Args:
            loan_id: External identifier

        Returns:
            The loan if found, None otherwise
        """
        return await self.repo.get_by_loan_id(loan_id)

    async def get_loans_by_status(
        self,
        status: LoanStatus,
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Loan], int]:
        """
        Get a page of loans with the given status.

        Args:
            status: Loan status
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Tuple of (loans, total count for the status)
        """
        loans = await self.repo.get_by_status(status, skip=skip, limit=limit)
        total = await self.repo.count_by_status(status)
        return loans, total

    async def get_status_count(self) -> Dict[LoanStatus, int]:
        """Count loans per status, including statuses with no loans."""
        return await self.repo.status_histogram()

    async def get_top_customers(self, limit: int = 3) -> List[Tuple[str, int]]:
        """
        Rank customers by approved loans.

        Args:
            limit: Number of customers to return

        Returns:
            List of (customer_name, approved_count), best first
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        return await self.repo.top_customers_by_approved_loans(limit=limit)
