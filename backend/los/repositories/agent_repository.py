"""Repository for agent data access used by assignment and administration."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from los.core.enums import AgentStatus
from los.models.domain.agent import Agent
from los.repositories.base import BaseRepository


class AgentRepository(BaseRepository[Agent]):
    """
    Repository for Agent with specialized queries.

    The eligibility query is the only filter the assignment step relies on;
    specialization preference is applied later by the selector.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the agent repository.

        Args:
            db: Async database session
        """
        super().__init__(Agent, db)

    async def get_by_agent_id(self, agent_id: str) -> Optional[Agent]:
        """
        Retrieve an agent by external agent ID.

        Args:
            agent_id: Unique external identifier (e.g., AGENT-001)

        Returns:
            The agent if found, None otherwise
        """
        stmt = select(Agent).where(Agent.agent_id == agent_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Agent]:
        """
        Retrieve an agent by email address.

        Args:
            email: Agent email (case-sensitive)

        Returns:
            The agent if found, None otherwise
        """
        stmt = select(Agent).where(Agent.email == email)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_status(self, status: AgentStatus) -> List[Agent]:
        """
        Retrieve agents with the given status ordered by agent ID.

        Args:
            status: Agent status to filter by

        Returns:
            List of matching agents
        """
        stmt = select(Agent).where(Agent.status == status).order_by(Agent.agent_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def find_eligible_agents(self, loan_amount: Decimal) -> List[Agent]:
        """
        Retrieve agents allowed to handle a loan of the given amount.

        An agent is eligible when ACTIVE and its max_loan_amount is either
        unset or at least the loan amount.

        Args:
            loan_amount: Requested loan amount

        Returns:
            List of eligible agents ordered by agent ID
        """
        stmt = (
            select(Agent)
            .where(
                Agent.status == AgentStatus.ACTIVE,
                or_(
                    Agent.max_loan_amount.is_(None),
                    Agent.max_loan_amount >= loan_amount,
                ),
            )
            .order_by(Agent.agent_id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
