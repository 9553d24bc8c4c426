"""In-process fixed-window limiter for failed authentication attempts.

Only failures are counted: a client may log in successfully any number
of times, but after ``max_attempts`` failed register/login calls within
one window every further attempt is refused until the window ends.
State is per process and is lost on restart.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from shopfront.domain.shared.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: float
    failures: int = 0


class AuthRateLimiter:
    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        self._max_attempts = max_attempts
        self._window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._windows)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def _current(self, key: str, now: float) -> _Window | None:
        window = self._windows.get(key)
        if window is not None and now - window.started_at >= self._window_seconds:
            del self._windows[key]
            return None
        return window

    def check(self, key: str) -> None:
        """Raise RateLimitExceededError if ``key`` has used up its window."""
        with self._lock:
            now = self._clock()
            window = self._current(key, now)
            if window is None or window.failures < self._max_attempts:
                return
            retry_after = int(window.started_at + self._window_seconds - now) + 1

        logger.warning("Rate limit hit for client %s", key)
        raise RateLimitExceededError(
            details={
                "retry_after": retry_after,
                "max_attempts": self._max_attempts,
            },
        )

    def _sweep(self, now: float) -> None:
        expired = [
            key
            for key, window in self._windows.items()
            if now - window.started_at >= self._window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now
        if expired:
            logger.debug("Dropped %d expired rate limit windows", len(expired))

    def record_failure(self, key: str) -> None:
        with self._lock:
            now = self._clock()
            # At most one full sweep per window length
            if now - self._last_sweep >= self._window_seconds:
                self._sweep(now)
            window = self._current(key, now)
            if window is None:
                window = _Window(started_at=now)
                self._windows[key] = window
            window.failures += 1


class ClientAttempts:
    """Limiter bound to one client, handed to auth endpoints."""

    def __init__(self, limiter: AuthRateLimiter | None, key: str):
        self._limiter = limiter
        self._key = key

    def check(self) -> None:
        if self._limiter is not None:
            self._limiter.check(self._key)

    def record_failure(self) -> None:
        if self._limiter is not None:
            self._limiter.record_failure(self._key)
