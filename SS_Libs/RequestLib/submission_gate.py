"""
Single-flight guard for submissions.

Only one call chain may be in flight. Each submission gets a ticket; a
result is only applied if its ticket is still current, so a result that
arrives after the user abandoned the request (new upload, reset, window
closed) is dropped.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class SubmissionGate:
    """
    Tracks the in-flight submission.

    Example:
        >>> gate = SubmissionGate()
        >>> ticket = gate.begin()
        >>> ...  # issue the request
        >>> if gate.finish(ticket):
        ...     show(result)
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    def begin(self) -> int:
        """
        Start a submission.

        Returns:
            Ticket identifying this submission

        Raises:
            RuntimeError: If a submission is already in flight
        """
        with self._lock:
            if self._in_flight:
                raise RuntimeError("A submission is already in progress")
            self._generation += 1
            self._in_flight = True
            return self._generation

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return self._in_flight and ticket == self._generation

    def finish(self, ticket: int) -> bool:
        """
        Complete a submission.

        Returns:
            True if the result should be applied, False if it was abandoned
        """
        with self._lock:
            if not self._in_flight or ticket != self._generation:
                logger.debug(f"Discarding result of abandoned submission {ticket}")
                return False
            self._in_flight = False
            return True

    def abandon(self) -> None:
        """Forget the in-flight submission; its eventual result will be discarded."""
        with self._lock:
            if self._in_flight:
                logger.info(f"Abandoning submission {self._generation}")
            self._generation += 1
            self._in_flight = False
