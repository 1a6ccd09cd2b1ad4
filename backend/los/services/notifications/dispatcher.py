"""Asynchronous, bounded delivery of notices off the processing path."""

import asyncio
import logging
from typing import List, Optional

from los.services.notifications.notices import Notice
from los.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Deliver notices on background workers through a bounded queue.

    emit() never blocks the caller. When the queue is full, or the dispatcher
    is not running, the notice is dropped with a warning. Delivery failures
    are logged and never reach the code that emitted the notice.
    """

    def __init__(
        self,
        service: NotificationService,
        workers: int = 2,
        queue_capacity: int = 50,
    ):
        """
        Initialize the dispatcher.

        Args:
            service: Notification service that performs delivery
            workers: Number of delivery tasks
            queue_capacity: Maximum number of queued notices
        """
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if queue_capacity < 1:
            raise ValueError("queue_capacity must be at least 1")

        self.service = service
        self._workers = workers
        self._capacity = queue_capacity
        self._queue: Optional[asyncio.Queue] = None
        self._tasks: List[asyncio.Task] = []
        self._accepting = False
        self.delivered = 0
        self.dropped = 0
        self.failed = 0

    @property
    def running(self) -> bool:
        return self._accepting

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    async def start(self) -> None:
        """Start the delivery workers. Calling start twice is a no-op."""
        if self._accepting:
            return
        self._queue = asyncio.Queue(maxsize=self._capacity)
        self._tasks = [
            asyncio.create_task(self._worker(index), name=f"notification-worker-{index}")
            for index in range(self._workers)
        ]
        self._accepting = True
        logger.info(f"Notification dispatcher started with {self._workers} workers")

    def emit(self, notice: Notice) -> bool:
        """
        Queue a notice for delivery without waiting.

        Args:
            notice: The notice to deliver

        Returns:
            True if the notice was queued, False if it was dropped
        """
        if not self._accepting or self._queue is None:
            self.dropped += 1
            logger.warning(
                f"Notification dispatcher not running; dropped {type(notice).__name__}"
            )
            return False

        try:
            self._queue.put_nowait(notice)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                f"Notification queue full ({self._capacity}); dropped {type(notice).__name__}"
            )
            return False
        return True

    async def drain(self) -> None:
        """Wait until every queued notice has been handled."""
        if self._queue is not None:
            await self._queue.join()

    async def shutdown(self, timeout: float = 30.0) -> None:
        """
        Stop accepting notices, deliver what is queued, then stop the workers.

        Args:
            timeout: Seconds to wait for queued notices before cancelling
        """
        if self._queue is None:
            return
        self._accepting = False

        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Notification dispatcher did not drain within {timeout}s; "
                f"abandoning {self._queue.qsize()} notices"
            )

        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        self._queue = None
        logger.info("Notification dispatcher stopped")

    async def _worker(self, index: int) -> None:
        assert self._queue is not None
        queue = self._queue
        while True:
            notice = await queue.get()
            try:
                await notice.deliver(self.service)
                self.delivered += 1
            except Exception as e:
                self.failed += 1
                logger.error(
                    f"Failed to deliver {type(notice).__name__} on worker {index}: {e}",
                    exc_info=True,
                )
            finally:
                queue.task_done()
