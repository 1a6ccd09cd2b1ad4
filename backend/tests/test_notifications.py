"""Tests for notification formatting, flags and asynchronous dispatch."""

import asyncio
import logging
from decimal import Decimal

import pytest

from factories import RecordingNotificationService
from los.core.enums import LoanStatus, LoanType
from los.services.notifications import (
    AgentSnapshot,
    LoanApprovalNotice,
    LoanAssignmentNotice,
    LoanRejectionNotice,
    LoanSnapshot,
    ManagerNotice,
    Notice,
    NotificationDispatcher,
    NotificationService,
    ProcessingStartedNotice,
)

LOAN = LoanSnapshot(
    loan_id="LOAN-NOTIFY01",
    customer_name="Jane Doe",
    customer_phone="+15550001234",
    loan_amount=Decimal("60000.00"),
    loan_type=LoanType.AUTO,
    status=LoanStatus.REJECTED_BY_AGENT,
)
AGENT = AgentSnapshot(agent_id="AGENT-004", name="Lisa Agent", email="lisa.agent@turno.com")
MANAGER = AgentSnapshot(agent_id="AGENT-001", name="John Manager", email="john.manager@turno.com")


class FailingNotificationService(RecordingNotificationService):
    async def send_processing_started(self, loan):
        raise ConnectionError("sms gateway down")


# ---------------------------------------------------------------------------
# NotificationService
# ---------------------------------------------------------------------------


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_rejection_without_reason_uses_placeholder(self, caplog):
        service = NotificationService()

        with caplog.at_level(logging.INFO, logger="los.services.notifications.service"):
            await service.send_loan_rejection(LOAN, None)

        assert "Reason: No specific reason provided" in caplog.text
        assert "Rejected by Agent" in caplog.text
        assert "$60,000.00" in caplog.text

    @pytest.mark.asyncio
    async def test_assignment_message_names_agent_and_loan(self, caplog):
        service = NotificationService()

        with caplog.at_level(logging.INFO, logger="los.services.notifications.service"):
            await service.send_loan_assignment(AGENT, LOAN)

        assert "Lisa Agent (lisa.agent@turno.com)" in caplog.text
        assert "LOAN-NOTIFY01" in caplog.text
        assert "Auto Loan" in caplog.text

    @pytest.mark.asyncio
    async def test_push_flag_silences_agent_and_manager_notices(self, caplog):
        service = NotificationService(push_enabled=False)

        with caplog.at_level(logging.INFO, logger="los.services.notifications.service"):
            await service.send_loan_assignment(AGENT, LOAN)
            await service.send_manager_notification(MANAGER, AGENT, LOAN)
            await service.send_loan_approval(LOAN)

        assert "PUSH NOTIFICATION" not in caplog.text
        assert "[SMS]" in caplog.text

    @pytest.mark.asyncio
    async def test_master_flag_silences_everything(self, caplog):
        service = NotificationService(enabled=False)

        with caplog.at_level(logging.INFO, logger="los.services.notifications.service"):
            await service.send_processing_started(LOAN)
            await service.send_loan_rejection(LOAN, "too risky")

        assert caplog.text == ""


# ---------------------------------------------------------------------------
# NotificationDispatcher
# ---------------------------------------------------------------------------


class TestNotificationDispatcher:
    @pytest.mark.asyncio
    async def test_notices_are_delivered_through_the_service(self):
        service = RecordingNotificationService()
        dispatcher = NotificationDispatcher(service, workers=2, queue_capacity=10)
        await dispatcher.start()

        assert dispatcher.emit(LoanAssignmentNotice(agent=AGENT, loan=LOAN))
        assert dispatcher.emit(ManagerNotice(manager=MANAGER, agent=AGENT, loan=LOAN))
        assert dispatcher.emit(LoanRejectionNotice(loan=LOAN, reason="Too risky"))
        await dispatcher.drain()

        assert sorted(service.kinds()) == ["assignment", "manager", "rejection"]
        rejection = next(entry for entry in service.sent if entry[0] == "rejection")
        assert rejection[1] == "Too risky"
        await dispatcher.shutdown(timeout=1)

    @pytest.mark.asyncio
    async def test_delivery_failure_is_contained(self):
        service = FailingNotificationService()
        dispatcher = NotificationDispatcher(service, workers=1, queue_capacity=10)
        await dispatcher.start()

        dispatcher.emit(ProcessingStartedNotice(loan=LOAN))
        dispatcher.emit(LoanApprovalNotice(loan=LOAN))
        await dispatcher.drain()

        assert service.kinds() == ["approval"]
        assert dispatcher.failed == 1
        assert dispatcher.delivered == 1
        await dispatcher.shutdown(timeout=1)

    @pytest.mark.asyncio
    async def test_emit_drops_when_queue_is_full(self):
        gate = asyncio.Event()

        class SlowService(RecordingNotificationService):
            async def send_loan_approval(self, loan):
                await gate.wait()
                await super().send_loan_approval(loan)

        dispatcher = NotificationDispatcher(SlowService(), workers=1, queue_capacity=1)
        await dispatcher.start()

        assert dispatcher.emit(LoanApprovalNotice(loan=LOAN))
        await asyncio.sleep(0)  # worker takes the first notice
        assert dispatcher.emit(LoanApprovalNotice(loan=LOAN))
        assert not dispatcher.emit(LoanApprovalNotice(loan=LOAN))
        assert dispatcher.dropped == 1

        gate.set()
        await dispatcher.shutdown(timeout=1)
        assert dispatcher.delivered == 2

    def test_emit_before_start_is_dropped(self):
        dispatcher = NotificationDispatcher(RecordingNotificationService())

        assert not dispatcher.emit(LoanApprovalNotice(loan=LOAN))
        assert dispatcher.dropped == 1

    @pytest.mark.asyncio
    async def test_emit_after_shutdown_is_dropped(self):
        dispatcher = NotificationDispatcher(RecordingNotificationService())
        await dispatcher.start()
        await dispatcher.shutdown(timeout=1)

        assert not dispatcher.running
        assert not dispatcher.emit(LoanApprovalNotice(loan=LOAN))


def test_notice_without_delivery_cannot_be_built():
    class Unroutable(Notice):
        pass

    with pytest.raises(TypeError):
        Notice()
    with pytest.raises(TypeError):
        Unroutable()
