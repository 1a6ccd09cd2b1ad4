"""Concrete decision table rules for amount and category thresholds."""

from decimal import Decimal
from typing import Optional

from los.core.enums import LoanStatus, LoanType
from los.services.rule_engine.base import LoanRule, RuleOutcome, to_decimal


class CategoryReviewRule(LoanRule):
    """
    Route loans of one category above a limit to human review.

    Example: AUTO loans strictly above 50,000 require an agent.
    """

    def __init__(self, loan_type: LoanType, review_above):
        self.loan_type = loan_type
        self.review_above = to_decimal(review_above)

    def evaluate(self, amount: Decimal, loan_type: LoanType) -> Optional[RuleOutcome]:
        if loan_type == self.loan_type and amount > self.review_above:
            return RuleOutcome(
                status=LoanStatus.UNDER_REVIEW,
                reason=(
                    f"{self.loan_type.value.capitalize()} loan amount "
                    "exceeds automatic approval limit"
                ),
            )
        return None

    def __repr__(self) -> str:
        return f"<CategoryReviewRule({self.loan_type.value} > {self.review_above})>"


class MinimumAmountRule(LoanRule):
    """Reject loans strictly below the minimum amount."""

    def __init__(self, minimum):
        self.minimum = to_decimal(minimum)

    def evaluate(self, amount: Decimal, loan_type: LoanType) -> Optional[RuleOutcome]:
        if amount < self.minimum:
            return RuleOutcome(
                status=LoanStatus.REJECTED_BY_SYSTEM,
                reason="Loan amount too small for processing",
            )
        return None

    def __repr__(self) -> str:
        return f"<MinimumAmountRule(< {self.minimum})>"


class MaximumAmountRule(LoanRule):
    """Reject loans strictly above the maximum amount."""

    def __init__(self, maximum):
        self.maximum = to_decimal(maximum)

    def evaluate(self, amount: Decimal, loan_type: LoanType) -> Optional[RuleOutcome]:
        if amount > self.maximum:
            return RuleOutcome(
                status=LoanStatus.REJECTED_BY_SYSTEM,
                reason="Loan amount exceeds maximum limit",
            )
        return None

    def __repr__(self) -> str:
        return f"<MaximumAmountRule(> {self.maximum})>"
