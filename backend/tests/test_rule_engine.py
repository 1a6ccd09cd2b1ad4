"""Tests for the loan decision table."""

from decimal import Decimal

import pytest

from los.core.enums import LoanStatus, LoanType
from los.services.rule_engine import (
    CategoryReviewRule,
    MinimumAmountRule,
    RuleEngine,
    RuleOutcome,
    evaluate,
)


class TestCategoryReviewLimits:
    """Category limits send large loans to an agent; the limit itself does not."""

    @pytest.mark.parametrize(
        "loan_type,limit,label",
        [
            (LoanType.AUTO, "50000", "Auto"),
            (LoanType.BUSINESS, "100000", "Business"),
            (LoanType.HOME, "200000", "Home"),
            (LoanType.PERSONAL, "25000", "Personal"),
        ],
    )
    def test_limit_boundaries(self, loan_type, limit, label):
        at_limit = evaluate(Decimal(limit), loan_type)
        assert at_limit.status == LoanStatus.APPROVED_BY_SYSTEM

        above = evaluate(Decimal(limit) + Decimal("0.01"), loan_type)
        assert above.status == LoanStatus.UNDER_REVIEW
        assert above.reason == f"{label} loan amount exceeds automatic approval limit"
        assert above.requires_review

    def test_auto_loan_above_limit_goes_to_review(self):
        outcome = evaluate(Decimal("60000"), LoanType.AUTO)

        assert outcome.status == LoanStatus.UNDER_REVIEW
        assert outcome.reason == "Auto loan amount exceeds automatic approval limit"

    def test_category_rule_wins_over_maximum(self):
        """A 2,000,000 HOME loan is reviewed, not rejected, because category rules run first."""
        outcome = evaluate(Decimal("2000000"), LoanType.HOME)
        assert outcome.status == LoanStatus.UNDER_REVIEW


class TestGlobalBounds:
    def test_minimum_is_inclusive(self):
        assert evaluate(Decimal("1000"), LoanType.PERSONAL).status == LoanStatus.APPROVED_BY_SYSTEM

    def test_below_minimum_is_rejected(self):
        outcome = evaluate(Decimal("999.99"), LoanType.PERSONAL)

        assert outcome.status == LoanStatus.REJECTED_BY_SYSTEM
        assert outcome.reason == "Loan amount too small for processing"
        assert not outcome.requires_review

    def test_maximum_is_inclusive(self):
        engine = RuleEngine(rules=[rule for rule in RuleEngine().rules
                                   if not isinstance(rule, CategoryReviewRule)])
        assert engine.evaluate(Decimal("1000000"), LoanType.BUSINESS).status == (
            LoanStatus.APPROVED_BY_SYSTEM
        )

    def test_above_maximum_is_rejected(self):
        engine = RuleEngine(rules=[rule for rule in RuleEngine().rules
                                   if not isinstance(rule, CategoryReviewRule)])
        outcome = engine.evaluate(Decimal("1000000.01"), LoanType.BUSINESS)

        assert outcome.status == LoanStatus.REJECTED_BY_SYSTEM
        assert outcome.reason == "Loan amount exceeds maximum limit"


class TestRuleEngine:
    def test_default_approval(self):
        outcome = evaluate(Decimal("15000"), LoanType.PERSONAL)

        assert outcome == RuleOutcome(
            status=LoanStatus.APPROVED_BY_SYSTEM,
            reason="Loan meets automatic approval criteria",
        )

    def test_accepts_non_decimal_amounts(self):
        assert evaluate("50000.01", "AUTO").status == LoanStatus.UNDER_REVIEW
        assert evaluate(999, LoanType.HOME).status == LoanStatus.REJECTED_BY_SYSTEM

    def test_evaluation_is_deterministic(self):
        first = evaluate(Decimal("30000"), LoanType.PERSONAL)
        second = evaluate(Decimal("30000"), LoanType.PERSONAL)
        assert first == second

    def test_first_matching_rule_wins(self):
        engine = RuleEngine(rules=[MinimumAmountRule("5000"), MinimumAmountRule("10000")])
        outcome = engine.evaluate(Decimal("7000"), LoanType.AUTO)

        assert outcome.status == LoanStatus.APPROVED_BY_SYSTEM

        outcome = engine.evaluate(Decimal("4000"), LoanType.AUTO)
        assert outcome.status == LoanStatus.REJECTED_BY_SYSTEM

    def test_default_table_order(self):
        rules = RuleEngine().rules
        assert [type(rule).__name__ for rule in rules] == [
            "CategoryReviewRule",
            "CategoryReviewRule",
            "CategoryReviewRule",
            "CategoryReviewRule",
            "MinimumAmountRule",
            "MaximumAmountRule",
        ]
