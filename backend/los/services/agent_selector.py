"""Agent selection policy for loans that need human review."""

import logging
import random
from typing import Iterable, List, Optional

from los.core.enums import LoanType
from los.models.domain.agent import Agent
from los.models.domain.loan import Loan

logger = logging.getLogger(__name__)


class AgentSelector:
    """
    Pick one agent for a loan from an already-eligible candidate pool.

    Specialization is a soft preference: agents whose specializations mention
    the loan category are preferred, and the full pool is used when nobody
    specializes. The final pick is uniformly random, which spreads load
    without per-agent counters.

    Candidates must already be ACTIVE and allowed to handle the loan amount.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize the selector.

        Args:
            rng: Random source, injectable for deterministic tests
        """
        self._rng = rng or random.Random()

    @staticmethod
    def is_specialized(agent: Agent, loan_type: LoanType) -> bool:
        """Case-insensitive substring match of the category in the agent's specializations."""
        if not agent.specializations:
            return False
        return LoanType(loan_type).value.lower() in agent.specializations.lower()

    def specialists(self, candidates: Iterable[Agent], loan_type: LoanType) -> List[Agent]:
        return [agent for agent in candidates if self.is_specialized(agent, loan_type)]

    def select(self, candidates: Iterable[Agent], loan: Loan) -> Optional[Agent]:
        """
        Select an agent for the loan.

        Args:
            candidates: Eligible agents
            loan: The loan being assigned

        Returns:
            One of the candidates, or None when there are no candidates
        """
        pool = list(candidates)
        if not pool:
            return None

        specialized = self.specialists(pool, loan.loan_type)
        if specialized:
            pool = specialized
        else:
            logger.debug(
                f"No {loan.loan_type.value} specialist among {len(pool)} candidates "
                f"for loan {loan.loan_id}; falling back to all candidates"
            )

        return self._rng.choice(pool)
