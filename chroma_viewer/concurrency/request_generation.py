# chroma_viewer/concurrency/request_generation.py
import threading


class RequestGeneration:
    """
    Monotonic request counter for last-intent-wins updates.
    - issue() hands out a ticket for a request that is about to start.
    - is_current(ticket) tells whether that request is still the latest one;
      a response carrying an older ticket is discarded.
    """
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0

    def issue(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def invalidate(self) -> None:
        """Make every outstanding ticket stale (e.g. the user navigated away)."""
        self.issue()

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._current
