"""Service layer for business logic."""

from los.services.agent_selector import AgentSelector
from los.services.agent_service import AgentService
from los.services.decision_service import DecisionService
from los.services.loan_processing_engine import (
    JobOutcome,
    JobResult,
    LoanProcessingEngine,
    PassSummary,
)
from los.services.loan_service import LoanService
from los.services.processing_ledger import ProcessingLedger
from los.services.rule_engine import RuleEngine, RuleOutcome
from los.services.scheduler import LoanProcessingScheduler, PeriodicTask
from los.services.worker_pool import BoundedWorkerPool, PoolClosedError

__all__ = [
    "AgentSelector",
    "AgentService",
    "BoundedWorkerPool",
    "DecisionService",
    "JobOutcome",
    "JobResult",
    "LoanProcessingEngine",
    "LoanProcessingScheduler",
    "LoanService",
    "PassSummary",
    "PeriodicTask",
    "PoolClosedError",
    "ProcessingLedger",
    "RuleEngine",
    "RuleOutcome",
]
