"""Rule engine running the ordered loan decision table."""

from typing import List, Optional, Sequence

from los.core.enums import LoanStatus, LoanType
from los.services.rule_engine.base import LoanRule, RuleOutcome, to_decimal
from los.services.rule_engine.rules import (
    CategoryReviewRule,
    MaximumAmountRule,
    MinimumAmountRule,
)

APPROVAL_REASON = "Loan meets automatic approval criteria"


def default_rules() -> List[LoanRule]:
    """
    Build the standard decision table.

    Order matters: category review limits are checked before the global
    minimum and maximum, so a 60,000 AUTO loan goes to review even though
    it is within the global bounds.
    """
    return [
        CategoryReviewRule(LoanType.AUTO, "50000"),
        CategoryReviewRule(LoanType.BUSINESS, "100000"),
        CategoryReviewRule(LoanType.HOME, "200000"),
        CategoryReviewRule(LoanType.PERSONAL, "25000"),
        MinimumAmountRule("1000"),
        MaximumAmountRule("1000000"),
    ]


class RuleEngine:
    """
    Rule engine evaluating a fixed, ordered decision table.

    This class:
    - Holds the ordered list of rules
    - Returns the outcome of the first rule that fires
    - Falls back to system approval when no rule fires
    """

    def __init__(self, rules: Optional[Sequence[LoanRule]] = None):
        """
        Initialize the rule engine.

        Args:
            rules: Ordered rules to use instead of the default table
        """
        self._rules: List[LoanRule] = list(rules) if rules is not None else default_rules()

    @property
    def rules(self) -> List[LoanRule]:
        return list(self._rules)

    def evaluate(self, amount, loan_type: LoanType) -> RuleOutcome:
        """
        Adjudicate a loan by amount and category.

        Args:
            amount: Requested amount (Decimal, or anything convertible via str)
            loan_type: Loan category

        Returns:
            RuleOutcome of the first matching rule, or a system approval
        """
        amount = to_decimal(amount)
        loan_type = LoanType(loan_type)

        for rule in self._rules:
            outcome = rule.evaluate(amount, loan_type)
            if outcome is not None:
                return outcome

        return RuleOutcome(status=LoanStatus.APPROVED_BY_SYSTEM, reason=APPROVAL_REASON)


_default_engine = RuleEngine()


def evaluate(amount, loan_type: LoanType) -> RuleOutcome:
    """Evaluate a loan against the default decision table."""
    return _default_engine.evaluate(amount, loan_type)
