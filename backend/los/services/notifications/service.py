"""Logging-backed notification service for agents, managers and customers."""

import logging
from datetime import datetime
from typing import Optional

from los.services.notifications.notices import AgentSnapshot, LoanSnapshot

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class NotificationService:
    """
    Notification service that formats each message and writes it to the log.

    Push notices go to agents and managers, SMS notices go to customers, and
    system notices track processing progress. Delivery can be switched off
    per channel through the configuration flags.
    """

    def __init__(
        self,
        enabled: bool = True,
        push_enabled: bool = True,
        sms_enabled: bool = True,
    ):
        """
        Initialize the notification service.

        Args:
            enabled: Master switch for all notices
            push_enabled: Agent and manager push notices
            sms_enabled: Customer SMS notices
        """
        self.enabled = enabled
        self.push_enabled = push_enabled
        self.sms_enabled = sms_enabled

    @classmethod
    def from_settings(cls, settings) -> "NotificationService":
        return cls(
            enabled=settings.NOTIFICATIONS_ENABLED,
            push_enabled=settings.PUSH_NOTIFICATIONS_ENABLED,
            sms_enabled=settings.SMS_ENABLED,
        )

    @property
    def push_active(self) -> bool:
        return self.enabled and self.push_enabled

    @property
    def sms_active(self) -> bool:
        return self.enabled and self.sms_enabled

    @staticmethod
    def _now() -> str:
        return datetime.now().strftime(TIMESTAMP_FORMAT)

    async def send_loan_assignment(self, agent: AgentSnapshot, loan: LoanSnapshot) -> None:
        if not self.push_active:
            return
        self._publish(
            f"[PUSH NOTIFICATION] Loan assignment notification sent to Agent "
            f"{agent.name} ({agent.email}) at {self._now()}\n"
            f"Loan ID: {loan.loan_id}\n"
            f"Customer: {loan.customer_name}\n"
            f"Amount: ${loan.loan_amount:,.2f}\n"
            f"Type: {loan.loan_type.display_name}"
        )

    async def send_manager_notification(
        self, manager: AgentSnapshot, agent: AgentSnapshot, loan: LoanSnapshot
    ) -> None:
        if not self.push_active:
            return
        self._publish(
            f"[PUSH NOTIFICATION] Manager notification sent to {manager.name} "
            f"({manager.email}) at {self._now()}\n"
            f"Agent {agent.name} has been assigned loan {loan.loan_id}\n"
            f"Customer: {loan.customer_name}\n"
            f"Amount: ${loan.loan_amount:,.2f}"
        )

    async def send_loan_approval(self, loan: LoanSnapshot) -> None:
        if not self.sms_active:
            return
        self._publish(
            f"[SMS] Loan approval notification sent to {loan.customer_name} "
            f"({loan.customer_phone}) at {self._now()}\n"
            f"Loan ID: {loan.loan_id}\n"
            f"Status: {loan.status.display_name}\n"
            f"Amount: ${loan.loan_amount:,.2f}\n"
            "Message: Congratulations! Your loan application has been approved."
        )

    async def send_loan_rejection(self, loan: LoanSnapshot, reason: Optional[str]) -> None:
        if not self.sms_active:
            return
        self._publish(
            f"[SMS] Loan rejection notification sent to {loan.customer_name} "
            f"({loan.customer_phone}) at {self._now()}\n"
            f"Loan ID: {loan.loan_id}\n"
            f"Status: {loan.status.display_name}\n"
            f"Amount: ${loan.loan_amount:,.2f}\n"
            f"Reason: {reason or 'No specific reason provided'}\n"
            "Message: We regret to inform you that your loan application has been rejected."
        )

    async def send_processing_started(self, loan: LoanSnapshot) -> None:
        if not self.enabled:
            return
        self._publish(
            f"[SYSTEM] Loan processing started at {self._now()}\n"
            f"Loan ID: {loan.loan_id}\n"
            f"Customer: {loan.customer_name}\n"
            f"Amount: ${loan.loan_amount:,.2f}"
        )

    async def send_processing_completed(self, loan: LoanSnapshot) -> None:
        if not self.enabled:
            return
        self._publish(
            f"[SYSTEM] Loan processing completed at {self._now()}\n"
            f"Loan ID: {loan.loan_id}\n"
            f"Customer: {loan.customer_name}\n"
            f"Final Status: {loan.status.display_name}\n"
            f"Amount: ${loan.loan_amount:,.2f}"
        )

    def _publish(self, message: str) -> None:
        """Transport hook; this implementation only logs."""
        logger.info(message)
