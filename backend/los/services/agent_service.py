"""Agent service for reviewer administration and lookups."""

from decimal import Decimal
from typing import List, Optional, Sequence, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from los.core.enums import AgentStatus, LoanType
from los.core.exceptions import ConflictError, NotFoundError
from los.models.domain.agent import Agent
from los.models.domain.loan import Loan
from los.repositories.agent_repository import AgentRepository
from los.repositories.loan_repository import LoanRepository


class AgentService:
    """
    Agent service for managing loan agents.

    Provides creation with uniqueness checks on agent ID and email, and the
    lookups used by the API and the seeder.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the agent service.

        Args:
            db: Async database session
        """
        self.db = db
        self.repo = AgentRepository(db)
        self.loan_repo = LoanRepository(db)

    async def create_agent(
        self,
        agent_id: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
        max_loan_amount: Optional[Decimal] = None,
        specializations: Union[str, Sequence[LoanType], None] = None,
        manager_id: Optional[UUID] = None,
        status: AgentStatus = AgentStatus.ACTIVE,
    ) -> Agent:
        """
        Create a new agent.

        Args:
            agent_id: External agent identifier (must be unique)
            name: Display name
            email: Contact email (must be unique)
            phone: Optional phone number
            max_loan_amount: Largest loan the agent may review; None means any
            specializations: Loan categories as a list or comma-separated string
            manager_id: Surrogate UUID of the agent's manager
            status: Initial availability

        Returns:
            Created agent

        Raises:
            ConflictError: If the agent ID or email is already taken
            NotFoundError: If the manager does not exist
            ValueError: If max_loan_amount is not positive
        """
        if await self.repo.get_by_agent_id(agent_id):
            raise ConflictError(f"Agent with ID '{agent_id}' already exists")
        if await self.repo.get_by_email(email):
            raise ConflictError(f"Agent with email '{email}' already exists")

        if max_loan_amount is not None and Decimal(str(max_loan_amount)) <= 0:
            raise ValueError("max_loan_amount must be positive")

        if manager_id is not None and not await self.repo.exists(manager_id):
            raise NotFoundError(f"Manager with ID {manager_id} not found")

        agent = Agent(
            agent_id=agent_id,
            name=name,
            email=email,
            phone=phone,
            status=status,
            max_loan_amount=Decimal(str(max_loan_amount)) if max_loan_amount is not None else None,
            specializations=self._join_specializations(specializations),
            manager_id=manager_id,
        )

        self.db.add(agent)
        await self.db.commit()
        await self.db.refresh(agent)

        return agent

    async def get_agent(self, id: UUID) -> Optional[Agent]:
        """
        Get an agent by surrogate ID.

        Args:
            id: Agent UUID

        Returns:
            The agent if found, None otherwise
        """
        return await self.repo.get_by_id(id)

    async def get_agent_by_agent_id(self, agent_id: str) -> Optional[Agent]:
        """
        Get an agent by external agent ID.

        Args:
            agent_id: External identifier (e.g., AGENT-001)

        Returns:
            The agent if found, None otherwise
        """
        return await self.repo.get_by_agent_id(agent_id)

    async def get_active_agents(self) -> List[Agent]:
        """Get all ACTIVE agents ordered by agent ID."""
        return await self.repo.get_by_status(AgentStatus.ACTIVE)

    async def get_assigned_loans(self, id: UUID) -> List[Loan]:
        """
        Get the loans assigned to an agent.

        Args:
            id: Agent UUID

        Returns:
            Loans assigned to the agent, newest first

        Raises:
            NotFoundError: If the agent does not exist
        """
        if not await self.repo.exists(id):
            raise NotFoundError(f"Agent with ID {id} not found")
        return await self.loan_repo.get_by_assigned_agent(id)

    async def count_agents(self) -> int:
        return await self.repo.count()

    @staticmethod
    def _join_specializations(
        specializations: Union[str, Sequence[LoanType], None],
    ) -> Optional[str]:
        if specializations is None:
            return None
        if isinstance(specializations, str):
            tokens = specializations.split(",")
        else:
            tokens = [LoanType(item).value for item in specializations]
        cleaned = [token.strip().upper() for token in tokens if token.strip()]
        return ",".join(cleaned) or None
