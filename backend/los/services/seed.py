"""Sample agents for an empty database."""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from los.models.domain.agent import Agent
from los.services.agent_service import AgentService

logger = logging.getLogger(__name__)

# (agent_id, name, email, phone, specializations, max_loan_amount, manager agent_id)
SAMPLE_AGENTS = [
    ("AGENT-001", "John Manager", "john.manager@turno.com", "+1234567890",
     "HOME,BUSINESS", "500000", None),
    ("AGENT-002", "Sarah Manager", "sarah.manager@turno.com", "+1234567891",
     "PERSONAL,AUTO", "300000", None),
    ("AGENT-003", "Mike Agent", "mike.agent@turno.com", "+1234567892",
     "PERSONAL", "100000", "AGENT-001"),
    ("AGENT-004", "Lisa Agent", "lisa.agent@turno.com", "+1234567893",
     "AUTO", "150000", "AGENT-001"),
    ("AGENT-005", "David Agent", "david.agent@turno.com", "+1234567894",
     "HOME", "200000", "AGENT-002"),
    ("AGENT-006", "Emma Agent", "emma.agent@turno.com", "+1234567895",
     "PERSONAL,AUTO", "75000", "AGENT-002"),
]


async def seed_sample_agents(db: AsyncSession) -> List[Agent]:
    """
    Create the sample agents when no agent exists yet.

    Managers are listed before their reports so manager ids can be resolved
    as the agents are created.

    Args:
        db: Async database session

    Returns:
        The created agents; empty when agents already exist
    """
    service = AgentService(db)
    if await service.count_agents() > 0:
        logger.info("Agents already present; skipping sample data")
        return []

    created = {}
    for agent_id, name, email, phone, specializations, max_amount, manager in SAMPLE_AGENTS:
        created[agent_id] = await service.create_agent(
            agent_id=agent_id,
            name=name,
            email=email,
            phone=phone,
            max_loan_amount=Decimal(max_amount),
            specializations=specializations,
            manager_id=created[manager].id if manager else None,
        )

    logger.info(f"Seeded {len(created)} sample agents")
    return list(created.values())
