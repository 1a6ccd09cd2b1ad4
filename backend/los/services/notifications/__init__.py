"""Notification intents, delivery service and asynchronous dispatcher."""

from .dispatcher import NotificationDispatcher
from .notices import (
    AgentSnapshot,
    LoanApprovalNotice,
    LoanAssignmentNotice,
    LoanRejectionNotice,
    LoanSnapshot,
    ManagerNotice,
    Notice,
    ProcessingCompletedNotice,
    ProcessingStartedNotice,
    decision_notice,
)
from .service import NotificationService

__all__ = [
    "AgentSnapshot",
    "LoanApprovalNotice",
    "LoanAssignmentNotice",
    "LoanRejectionNotice",
    "LoanSnapshot",
    "ManagerNotice",
    "Notice",
    "NotificationDispatcher",
    "NotificationService",
    "ProcessingCompletedNotice",
    "ProcessingStartedNotice",
    "decision_notice",
]
