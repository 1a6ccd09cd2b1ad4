from .base import BaseRepository
from .agent_repository import AgentRepository
from .loan_repository import LoanRepository

__all__ = [
    "BaseRepository",
    "AgentRepository",
    "LoanRepository",
]
