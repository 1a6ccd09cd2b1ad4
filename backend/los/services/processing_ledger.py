"""In-memory admission control for loans being processed."""

import threading
from typing import FrozenSet, Set


class ProcessingLedger:
    """
    Track which loans are currently being processed in this process.

    try_acquire is an atomic test-and-set: for a given identifier at most one
    successful acquisition is outstanding until it is released. This guards
    against double processing across overlapping passes of one engine; it is
    not a distributed lock.
    """

    def __init__(self):
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    def try_acquire(self, loan_id: str) -> bool:
        """
        Claim a loan for processing.

        Args:
            loan_id: External loan identifier

        Returns:
            True if the caller now owns processing of the loan
        """
        with self._lock:
            if loan_id in self._in_flight:
                return False
            self._in_flight.add(loan_id)
            return True

    def release(self, loan_id: str) -> None:
        """Give up ownership of a loan. Releasing an unowned loan is a no-op."""
        with self._lock:
            self._in_flight.discard(loan_id)

    @property
    def in_flight(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._in_flight)

    def __contains__(self, loan_id: object) -> bool:
        with self._lock:
            return loan_id in self._in_flight

    def __len__(self) -> int:
        with self._lock:
            return len(self._in_flight)
