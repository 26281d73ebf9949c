"""Time-limited cache for the most recent question batch."""

from __future__ import annotations

from threading import Lock
import time
from typing import Callable

from trivia_quiz.core.models import QuestionBatch


class QuestionCache:
    """Holds one question batch and reports it fresh until the TTL elapses."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds < 0:
            raise ValueError("Cache TTL must not be negative.")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = Lock()
        self._batch: QuestionBatch | None = None
        self._stored_at: float | None = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self) -> QuestionBatch | None:
        """Return the cached batch if it is still fresh."""
        with self._lock:
            if self._batch is None or self._stored_at is None:
                return None
            if self._clock() - self._stored_at >= self._ttl_seconds:
                return None
            return self._batch

    def get_stale(self) -> QuestionBatch | None:
        """Return the cached batch regardless of its age."""
        with self._lock:
            return self._batch

    def put(self, batch: QuestionBatch) -> None:
        with self._lock:
            self._batch = batch
            self._stored_at = self._clock()

    def invalidate(self) -> None:
        with self._lock:
            self._batch = None
            self._stored_at = None

    def has_entry(self) -> bool:
        with self._lock:
            return self._batch is not None

    def age_seconds(self) -> float | None:
        with self._lock:
            if self._stored_at is None:
                return None
            return self._clock() - self._stored_at
