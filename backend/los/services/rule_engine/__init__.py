"""Rule engine for adjudicating loan applications."""

from .base import LoanRule, RuleOutcome
from .engine import RuleEngine, default_rules, evaluate
from .rules import CategoryReviewRule, MaximumAmountRule, MinimumAmountRule

__all__ = [
    "CategoryReviewRule",
    "LoanRule",
    "MaximumAmountRule",
    "MinimumAmountRule",
    "RuleEngine",
    "RuleOutcome",
    "default_rules",
    "evaluate",
]
