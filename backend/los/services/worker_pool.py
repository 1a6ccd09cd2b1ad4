"""Bounded pool of asyncio workers for loan processing jobs."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

logger = logging.getLogger(__name__)


class PoolClosedError(RuntimeError):
    """Raised when submitting to a pool that is not accepting work."""


class BoundedWorkerPool:
    """
    Fixed number of workers pulling jobs from a bounded queue.

    submit() waits while the queue is full, so a large backlog applies
    backpressure to the submitter instead of growing without bound. Each
    job's result or exception is delivered through the future returned by
    submit(); a failing job never stops its worker.
    """

    def __init__(self, name: str = "processing", workers: int = 5, queue_capacity: int = 100):
        """
        Initialize the pool.

        Args:
            name: Prefix for worker task names
            workers: Number of concurrent workers
            queue_capacity: Maximum number of queued jobs
        """
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if queue_capacity < 1:
            raise ValueError("queue_capacity must be at least 1")

        self.name = name
        self._workers = workers
        self._capacity = queue_capacity
        self._queue: Optional[asyncio.Queue] = None
        self._tasks: List[asyncio.Task] = []
        self._accepting = False

    @property
    def running(self) -> bool:
        return self._accepting

    @property
    def workers(self) -> int:
        return self._workers

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    async def start(self) -> None:
        """Start the workers. Calling start twice is a no-op."""
        if self._accepting:
            return
        self._queue = asyncio.Queue(maxsize=self._capacity)
        self._tasks = [
            asyncio.create_task(self._worker(), name=f"{self.name}-worker-{index}")
            for index in range(self._workers)
        ]
        self._accepting = True
        logger.info(
            f"Worker pool '{self.name}' started with {self._workers} workers "
            f"(capacity {self._capacity})"
        )

    async def submit(self, fn: Callable[..., Awaitable[Any]], *args) -> asyncio.Future:
        """
        Queue a coroutine function for execution.

        Args:
            fn: Coroutine function to run on a worker
            *args: Positional arguments for fn

        Returns:
            Future resolved with the job's result or exception

        Raises:
            PoolClosedError: If the pool is not accepting work
        """
        if not self._accepting or self._queue is None:
            raise PoolClosedError(f"Worker pool '{self.name}' is not accepting work")

        future = asyncio.get_running_loop().create_future()
        await self._queue.put((fn, args, future))
        return future

    async def shutdown(self, timeout: float = 30.0) -> None:
        """
        Stop accepting work, wait for queued jobs, then cancel the workers.

        Jobs still pending after the timeout are abandoned and their futures
        cancelled.

        Args:
            timeout: Seconds to wait for outstanding jobs
        """
        if self._queue is None:
            return
        self._accepting = False
        queue = self._queue

        try:
            await asyncio.wait_for(queue.join(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Worker pool '{self.name}' did not finish within {timeout}s; "
                f"cancelling outstanding work"
            )

        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)

        while not queue.empty():
            _, _, future = queue.get_nowait()
            future.cancel()
            queue.task_done()

        self._tasks = []
        self._queue = None
        logger.info(f"Worker pool '{self.name}' stopped")

    async def __aenter__(self) -> "BoundedWorkerPool":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    async def _worker(self) -> None:
        assert self._queue is not None
        queue = self._queue
        while True:
            fn, args, future = await queue.get()
            try:
                if future.cancelled():
                    continue
                try:
                    result = await fn(*args)
                except asyncio.CancelledError:
                    future.cancel()
                    raise
                except Exception as e:
                    if not future.cancelled():
                        future.set_exception(e)
                else:
                    if not future.cancelled():
                        future.set_result(result)
            finally:
                queue.task_done()
