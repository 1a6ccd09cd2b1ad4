"""Loan processing engine that adjudicates the backlog of new applications."""

import asyncio
import logging
import random
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from los.core.enums import LoanStatus
from los.core.exceptions import AgentUnavailableError, TransientFailureError
from los.db.base import utcnow
from los.models.domain.agent import Agent
from los.models.domain.loan import Loan
from los.repositories.agent_repository import AgentRepository
from los.repositories.loan_repository import LoanRepository
from los.services.agent_selector import AgentSelector
from los.services.notifications import (
    AgentSnapshot,
    LoanAssignmentNotice,
    LoanSnapshot,
    ManagerNotice,
    NotificationDispatcher,
    ProcessingCompletedNotice,
    ProcessingStartedNotice,
    decision_notice,
)
from los.services.processing_ledger import ProcessingLedger
from los.services.rule_engine import RuleEngine
from los.services.worker_pool import BoundedWorkerPool

logger = logging.getLogger(__name__)


class JobOutcome(str, Enum):
    """How a single loan job ended."""

    PROCESSED = "PROCESSED"
    REASSIGNED = "REASSIGNED"
    UNCHANGED = "UNCHANGED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class JobResult:
    loan_id: str
    outcome: JobOutcome
    status: Optional[LoanStatus] = None
    assigned: bool = False


@dataclass
class PassSummary:
    """Counters for one engine pass."""

    fetched: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    reassigned: int = 0
    approved: int = 0
    rejected: int = 0
    under_review: int = 0
    unassigned: int = 0

    def record(self, result: JobResult) -> None:
        if result.outcome is JobOutcome.SKIPPED:
            self.skipped += 1
        elif result.outcome is JobOutcome.FAILED:
            self.failed += 1
        elif result.outcome is JobOutcome.REASSIGNED:
            self.reassigned += 1
        elif result.outcome is JobOutcome.UNCHANGED:
            self.unassigned += 1
        elif result.outcome is JobOutcome.PROCESSED:
            self.processed += 1
            if result.status is not None and result.status.is_approved:
                self.approved += 1
            elif result.status is not None and result.status.is_rejected:
                self.rejected += 1
            elif result.status is LoanStatus.UNDER_REVIEW:
                self.under_review += 1
                if not result.assigned:
                    self.unassigned += 1

    def as_dict(self) -> dict:
        return asdict(self)


class LoanProcessingEngine:
    """
    Engine that adjudicates every loan waiting in the APPLIED state.

    This engine:
    - Fans a pass out onto a bounded worker pool, one job per loan
    - Guards each loan with the processing ledger so overlapping passes
      never process the same loan twice
    - Evaluates the decision table and assigns an agent for reviews
    - Commits the outcome once per loan and emits notices afterwards
    - Isolates failures so one bad loan never stops the batch
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        notifier: NotificationDispatcher,
        pool: BoundedWorkerPool,
        ledger: Optional[ProcessingLedger] = None,
        rule_engine: Optional[RuleEngine] = None,
        selector: Optional[AgentSelector] = None,
        processing_delay: Tuple[float, float] = (0.0, 0.0),
        retry_unassigned_reviews: bool = True,
    ):
        """
        Initialize the processing engine.

        Args:
            session_factory: Factory creating one database session per job
            notifier: Dispatcher receiving notices
            pool: Worker pool running the per-loan jobs
            ledger: In-flight loan ledger, shared by every pass of this engine
            rule_engine: Decision table evaluator
            selector: Agent selection policy
            processing_delay: (min, max) simulated latency per loan in seconds
            retry_unassigned_reviews: Retry assignment for reviews left without an agent
        """
        self.session_factory = session_factory
        self.notifier = notifier
        self.pool = pool
        self.ledger = ledger or ProcessingLedger()
        self.rule_engine = rule_engine or RuleEngine()
        self.selector = selector or AgentSelector()
        self.processing_delay = processing_delay
        self.retry_unassigned_reviews = retry_unassigned_reviews

    async def run_pass(self) -> PassSummary:
        """
        Adjudicate every loan that is ready for processing.

        Safe to call while another pass is still running: loans already owned
        by a job are skipped.

        Returns:
            PassSummary with the counters for this pass
        """
        summary = PassSummary()

        async with self.session_factory() as session:
            ready = await LoanRepository(session).find_ready_for_processing()
        loan_ids = [loan.loan_id for loan in ready]
        summary.fetched = len(loan_ids)

        if loan_ids:
            logger.info(f"Processing {len(loan_ids)} loans")
            for result in await self._run_jobs(self._process_loan, loan_ids):
                summary.record(result)

        if self.retry_unassigned_reviews:
            async with self.session_factory() as session:
                reviews = await LoanRepository(session).find_unassigned_reviews()
            attempted = set(loan_ids)
            review_ids = [loan.loan_id for loan in reviews if loan.loan_id not in attempted]
            if review_ids:
                logger.info(f"Retrying assignment for {len(review_ids)} unassigned reviews")
                for result in await self._run_jobs(self._retry_assignment, review_ids):
                    summary.record(result)

        if summary.fetched or summary.reassigned or summary.failed:
            logger.info(f"Processing pass finished: {summary.as_dict()}")
        return summary

    async def _run_jobs(
        self,
        job: Callable[[str], Awaitable[JobResult]],
        loan_ids: Iterable[str],
    ) -> List[JobResult]:
        futures = []
        for loan_id in loan_ids:
            futures.append((loan_id, await self.pool.submit(job, loan_id)))

        outcomes = await asyncio.gather(
            *(future for _, future in futures), return_exceptions=True
        )

        results = []
        for (loan_id, _), outcome in zip(futures, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Job for loan {loan_id} did not complete: {outcome!r}")
                results.append(JobResult(loan_id, JobOutcome.FAILED))
            else:
                results.append(outcome)
        return results

    async def _process_loan(self, loan_id: str) -> JobResult:
        """Run one loan through adjudication under the ledger."""
        if not self.ledger.try_acquire(loan_id):
            logger.debug(f"Loan {loan_id} is already being processed; skipping")
            return JobResult(loan_id, JobOutcome.SKIPPED)

        try:
            return await self._adjudicate(loan_id)
        except TransientFailureError as e:
            logger.error(str(e), exc_info=True)
            return JobResult(loan_id, JobOutcome.FAILED)
        finally:
            self.ledger.release(loan_id)

    async def _adjudicate(self, loan_id: str) -> JobResult:
        """
        Evaluate one loan and persist its outcome.

        Raises:
            TransientFailureError: If the store or a collaborator fails mid-job
        """
        try:
            async with self.session_factory() as session:
                loans = LoanRepository(session)
                loan = await loans.get_by_loan_id(loan_id)
                if loan is None or not loan.is_ready_for_processing:
                    logger.debug(f"Loan {loan_id} is no longer ready for processing; skipping")
                    return JobResult(loan_id, JobOutcome.SKIPPED)

                loan.processing_started_at = utcnow()
                await session.commit()
                self.notifier.emit(ProcessingStartedNotice(loan=LoanSnapshot.from_loan(loan)))

                await self._simulate_latency()

                outcome = self.rule_engine.evaluate(loan.loan_amount, loan.loan_type)
                loan.status = outcome.status
                loan.decision_reason = outcome.reason

                agent = manager = None
                if outcome.status.requires_agent_review:
                    agent, manager = await self._try_assign(session, loan)

                loan.processing_completed_at = utcnow()
                await session.commit()
        except Exception as e:
            raise TransientFailureError(f"Processing failed for loan {loan_id}: {e}") from e

        logger.info(
            f"Loan {loan.loan_id} adjudicated as {loan.status.value}: {loan.decision_reason}"
        )
        self._emit_outcome(loan, agent, manager)
        return JobResult(loan_id, JobOutcome.PROCESSED, loan.status, agent is not None)

    async def _retry_assignment(self, loan_id: str) -> JobResult:
        """Assign an agent to a review that has none, without re-evaluating it."""
        if not self.ledger.try_acquire(loan_id):
            return JobResult(loan_id, JobOutcome.SKIPPED)

        try:
            return await self._assign_unassigned(loan_id)
        except TransientFailureError as e:
            logger.error(str(e), exc_info=True)
            return JobResult(loan_id, JobOutcome.FAILED)
        finally:
            self.ledger.release(loan_id)

    async def _assign_unassigned(self, loan_id: str) -> JobResult:
        try:
            async with self.session_factory() as session:
                loan = await LoanRepository(session).get_by_loan_id(loan_id)
                if (
                    loan is None
                    or loan.status != LoanStatus.UNDER_REVIEW
                    or loan.assigned_agent_id is not None
                ):
                    return JobResult(loan_id, JobOutcome.SKIPPED)

                agent, manager = await self._try_assign(session, loan)
                if agent is None:
                    return JobResult(loan_id, JobOutcome.UNCHANGED, loan.status)

                await session.commit()
        except Exception as e:
            raise TransientFailureError(f"Assignment retry failed for loan {loan_id}: {e}") from e

        logger.info(f"Loan {loan.loan_id} assigned to agent {agent.agent_id} on retry")
        self._emit_assignment(loan, agent, manager)
        return JobResult(loan_id, JobOutcome.REASSIGNED, loan.status, True)

    async def _try_assign(
        self, session: AsyncSession, loan: Loan
    ) -> Tuple[Optional[Agent], Optional[Agent]]:
        """
        Assign an eligible agent to the loan, leaving it unassigned on failure.

        Returns:
            (agent, manager); both None when no agent could be assigned
        """
        try:
            agent, manager = await self._select_agent(session, loan)
        except AgentUnavailableError as e:
            logger.warning(f"Loan {loan.loan_id} left unassigned: {e}")
            return None, None

        loan.assigned_agent_id = agent.id
        logger.info(f"Loan {loan.loan_id} assigned to agent {agent.agent_id} ({agent.name})")
        return agent, manager

    async def _select_agent(
        self, session: AsyncSession, loan: Loan
    ) -> Tuple[Agent, Optional[Agent]]:
        agents = AgentRepository(session)
        try:
            candidates = await agents.find_eligible_agents(loan.loan_amount)
        except Exception as e:
            raise AgentUnavailableError(f"agent lookup failed: {e}") from e

        agent = self.selector.select(candidates, loan)
        if agent is None:
            raise AgentUnavailableError(
                f"no active agent can handle {loan.loan_type.value} loan of {loan.loan_amount}"
            )

        manager = None
        if agent.manager_id is not None:
            try:
                manager = await agents.get_by_id(agent.manager_id)
            except Exception as e:
                logger.warning(f"Manager lookup failed for agent {agent.agent_id}: {e}")
        return agent, manager

    async def _simulate_latency(self) -> None:
        low, high = self.processing_delay
        if high <= 0:
            return
        await asyncio.sleep(random.uniform(low, high))

    def _emit_outcome(self, loan: Loan, agent: Optional[Agent], manager: Optional[Agent]) -> None:
        self.notifier.emit(ProcessingCompletedNotice(loan=LoanSnapshot.from_loan(loan)))
        if agent is not None:
            self._emit_assignment(loan, agent, manager)
        notice = decision_notice(loan)
        if notice is not None:
            self.notifier.emit(notice)

    def _emit_assignment(self, loan: Loan, agent: Agent, manager: Optional[Agent]) -> None:
        loan_snapshot = LoanSnapshot.from_loan(loan)
        agent_snapshot = AgentSnapshot.from_agent(agent)
        self.notifier.emit(LoanAssignmentNotice(agent=agent_snapshot, loan=loan_snapshot))
        if manager is not None:
            self.notifier.emit(
                ManagerNotice(
                    manager=AgentSnapshot.from_agent(manager),
                    agent=agent_snapshot,
                    loan=loan_snapshot,
                )
            )
