"""Rule engine foundation with rule outcomes and the base rule."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from los.core.enums import LoanStatus, LoanType


def to_decimal(amount) -> Decimal:
    """Convert an amount to Decimal without going through binary floats."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


@dataclass(frozen=True)
class RuleOutcome:
    """
    Result of adjudicating a loan against the decision table.

    Attributes:
        status: Terminal system status, or UNDER_REVIEW when a human must decide
        reason: Human-readable explanation stored as the decision reason
    """

    status: LoanStatus
    reason: str

    @property
    def requires_review(self) -> bool:
        return self.status.requires_agent_review


class LoanRule(ABC):
    """
    Abstract base class for a single row of the decision table.

    Each concrete rule inspects the amount and category of a loan and either
    returns an outcome (the rule fires) or None (fall through to the next rule).
    Rules must be pure: no I/O and no dependence on mutable state.
    """

    @abstractmethod
    def evaluate(self, amount: Decimal, loan_type: LoanType) -> Optional[RuleOutcome]:
        """
        Evaluate the rule.

        Args:
            amount: Requested loan amount
            loan_type: Loan category

        Returns:
            RuleOutcome if the rule fires, None otherwise
        """
        pass
