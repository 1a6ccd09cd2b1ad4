"""Background scheduling for processing passes and status reports."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from los.repositories.loan_repository import LoanRepository
from los.services.loan_processing_engine import LoanProcessingEngine

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Run an async action repeatedly with a fixed delay between runs.

    The first run starts immediately. The delay is measured from the end of
    one run to the start of the next, so runs of the same task never overlap.
    An exception raised by the action is logged and the loop keeps going.
    """

    def __init__(self, name: str, interval: float, action: Callable[[], Awaitable[object]]):
        """
        Initialize the task.

        Args:
            name: Name used in logs and for the asyncio task
            interval: Seconds to wait between runs
            action: Coroutine function to run
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.action = action
        self.runs = 0
        self._stopping = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stopping = asyncio.Event()
        self._task = asyncio.create_task(self._loop(), name=self.name)
        logger.info(f"Periodic task '{self.name}' started (every {self.interval}s)")

    async def stop(self, timeout: float = 30.0) -> None:
        """
        Stop the loop, letting a run in progress finish within the timeout.

        Args:
            timeout: Seconds to wait before cancelling the current run
        """
        if self._task is None:
            return
        self._stopping.set()
        try:
            await asyncio.wait_for(asyncio.shield(self._task), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Periodic task '{self.name}' did not stop within {timeout}s; cancelling")
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info(f"Periodic task '{self.name}' stopped")

    async def _loop(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.action()
            except Exception as e:
                logger.error(f"Periodic task '{self.name}' failed: {e}", exc_info=True)
            self.runs += 1

            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                continue


class LoanProcessingScheduler:
    """
    Scheduler owning the periodic processing pass and the status report.

    The processing pass runs the engine's backlog; the status report logs
    the loan count per status.
    """

    def __init__(
        self,
        engine: LoanProcessingEngine,
        session_factory: async_sessionmaker[AsyncSession],
        processing_interval: float = 30.0,
        report_interval: float = 300.0,
    ):
        """
        Initialize the scheduler.

        Args:
            engine: Processing engine whose pass is scheduled
            session_factory: Factory used by the status report
            processing_interval: Seconds between processing passes
            report_interval: Seconds between status reports
        """
        self.engine = engine
        self.session_factory = session_factory
        self.processing_task = PeriodicTask(
            "loan-processing", processing_interval, self.engine.run_pass
        )
        self.report_task = PeriodicTask("status-report", report_interval, self.report_status)

    @property
    def running(self) -> bool:
        return self.processing_task.running or self.report_task.running

    def start(self) -> None:
        self.processing_task.start()
        self.report_task.start()

    async def stop(self, timeout: float = 30.0) -> None:
        await self.processing_task.stop(timeout)
        await self.report_task.stop(timeout)

    async def report_status(self) -> None:
        """Log the number of loans in each status."""
        async with self.session_factory() as session:
            histogram = await LoanRepository(session).status_histogram()

        counts = ", ".join(f"{status.value}={count}" for status, count in histogram.items())
        logger.info(f"Loan status report: {counts}")
