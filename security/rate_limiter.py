"""
security/rate_limiter.py
-------------------------
Limits failed sign-in attempts per email within a time window.
"""

import time
from typing import Callable

from config import SIGNIN_MAX_ATTEMPTS, SIGNIN_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)


class SignInLimiter:
    """
    In-memory tracker of failed sign-ins: {email: [timestamp1, timestamp2, ...]}.

    Configuration (via .env):
        SIGNIN_MAX_ATTEMPTS: Failures allowed per window (default: 5).
        SIGNIN_WINDOW_SECONDS: Window duration in seconds (default: 300).
    """

    def __init__(
        self,
        max_attempts: int = SIGNIN_MAX_ATTEMPTS,
        window_seconds: int = SIGNIN_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._failures: dict[str, list[float]] = {}

    def _cleanup(self, key: str) -> list[float]:
        """Remove expired timestamps for an email; drop the entry once empty."""
        cutoff = self._clock() - self.window_seconds
        recent = [t for t in self._failures.get(key, []) if t > cutoff]
        if recent:
            self._failures[key] = recent
        else:
            self._failures.pop(key, None)
        return recent

    def is_blocked(self, email: str) -> bool:
        return len(self._cleanup(email.lower())) >= self.max_attempts

    def record_failure(self, email: str) -> None:
        key = email.lower()
        recent = self._cleanup(key)
        recent.append(self._clock())
        self._failures[key] = recent
        if len(recent) >= self.max_attempts:
            logger.warning(f"Sign-in blocked for {email} after {self.max_attempts} failures")

    def reset(self, email: str) -> None:
        self._failures.pop(email.lower(), None)
