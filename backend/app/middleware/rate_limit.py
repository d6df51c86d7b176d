"""In-memory sliding-window rate limiter, used to throttle login attempts.

State is per process; multiple workers each keep their own window.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class InMemoryRateLimiter:
    """Sliding-window rate limiter keyed by client IP (or any string).

    Keys whose attempts have all left the window are forgotten, so the table
    only holds clients seen within the last ``window_seconds``.
    """

    def __init__(
        self,
        window_seconds: int = 60,
        max_attempts: int = 5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._max = max_attempts
        self._clock = clock
        self._attempts: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._attempts)

    def check(self, key: str) -> None:
        """Raise HTTP 429 if *key* has exceeded *max_attempts* in the window."""
        with self._lock:
            now = self._clock()
            self._prune(now)
            recent = self._attempts.get(key, [])
            if len(recent) >= self._max:
                logger.warning("Login rate limit exceeded for %s", key)
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail=f"Too many attempts. Try again in {self._window} seconds.",
                )
            self._attempts[key] = [*recent, now]

    def _prune(self, now: float) -> None:
        for key in list(self._attempts):
            recent = [t for t in self._attempts[key] if now - t < self._window]
            if recent:
                self._attempts[key] = recent
            else:
                del self._attempts[key]

    def reset(self, key: str | None = None) -> None:
        """Forget recorded attempts for *key*, or for every key."""
        with self._lock:
            if key is None:
                self._attempts.clear()
            else:
                self._attempts.pop(key, None)
