"""
Request-scoped deadline and cancellation signal
"""

import threading
import time


class Deadline:
    """
    A monotonic deadline that can also be cancelled explicitly.

    One instance is created per request and handed to every blocking call in
    the upload pipeline (subprocesses, the storage transfer) so a timed out or
    abandoned request stops work instead of running to completion.
    """

    def __init__(self, timeout=None, clock=time.monotonic):
        self._clock = clock
        self._expires_at = None if timeout is None else clock() + timeout
        self._cancelled = threading.Event()

    def cancel(self):
        """
        Expire the deadline immediately.

        The upload view never calls this; under WSGI a request only stops
        early through its timeout. It is for in-process callers that drive
        the pipeline directly and want to abort it from another thread.
        """
        self._cancelled.set()

    @property
    def cancelled(self):
        return self._cancelled.is_set()

    def remaining(self):
        """Seconds left, or ``None`` for an unbounded deadline"""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self):
        if self.cancelled:
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0
