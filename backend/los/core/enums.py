"""Core enums for type safety across the application."""

from enum import Enum


class LoanType(str, Enum):
    """Loan categories accepted at intake."""

    PERSONAL = "PERSONAL"
    HOME = "HOME"
    AUTO = "AUTO"
    BUSINESS = "BUSINESS"

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()} Loan"


class LoanStatus(str, Enum):
    """Loan application workflow states."""

    APPLIED = "APPLIED"
    APPROVED_BY_SYSTEM = "APPROVED_BY_SYSTEM"
    REJECTED_BY_SYSTEM = "REJECTED_BY_SYSTEM"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED_BY_AGENT = "APPROVED_BY_AGENT"
    REJECTED_BY_AGENT = "REJECTED_BY_AGENT"

    @property
    def display_name(self) -> str:
        return _LOAN_STATUS_DISPLAY[self]

    @property
    def is_approved(self) -> bool:
        return self in (LoanStatus.APPROVED_BY_SYSTEM, LoanStatus.APPROVED_BY_AGENT)

    @property
    def is_rejected(self) -> bool:
        return self in (LoanStatus.REJECTED_BY_SYSTEM, LoanStatus.REJECTED_BY_AGENT)

    @property
    def is_terminal(self) -> bool:
        """Terminal states are absorbing: no further transition is valid."""
        return self.is_approved or self.is_rejected

    @property
    def requires_agent_review(self) -> bool:
        return self is LoanStatus.UNDER_REVIEW


_LOAN_STATUS_DISPLAY = {
    LoanStatus.APPLIED: "Applied",
    LoanStatus.APPROVED_BY_SYSTEM: "Approved by System",
    LoanStatus.REJECTED_BY_SYSTEM: "Rejected by System",
    LoanStatus.UNDER_REVIEW: "Under Review",
    LoanStatus.APPROVED_BY_AGENT: "Approved by Agent",
    LoanStatus.REJECTED_BY_AGENT: "Rejected by Agent",
}


class AgentStatus(str, Enum):
    """Agent availability states."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class AgentDecision(str, Enum):
    """Terminal decisions an agent can make on a loan under review."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def to_loan_status(self) -> LoanStatus:
        if self is AgentDecision.APPROVE:
            return LoanStatus.APPROVED_BY_AGENT
        return LoanStatus.REJECTED_BY_AGENT
