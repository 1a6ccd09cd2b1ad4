"""Domain models for the application."""

from los.models.domain.agent import Agent
from los.models.domain.loan import Loan

__all__ = [
    "Agent",
    "Loan",
]
