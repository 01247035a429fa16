"""
In-memory fixed-window rate limiter.

Tracks a per-minute and a per-day counter for each client key. State lives
in process memory and resets on restart, which is acceptable for the
parse-query endpoint (the limit exists to cap LLM spend, not for billing).
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from core.logging import get_logger

logger = get_logger(__name__)

MINUTE_SECONDS = 60.0
DAY_SECONDS = 86400.0
CLEANUP_INTERVAL_SECONDS = 3600.0


@dataclass
class RateLimitDecision:
    allowed: bool
    reason: Optional[str] = None
    retry_after_seconds: int = 0


@dataclass
class _ClientWindow:
    minute_count: int
    minute_reset_at: float
    day_count: int
    day_reset_at: float


class RateLimiter:
    """
    Fixed-window limiter keyed by client identifier.

    Thread-safe; callers may be on the event loop or in the thread pool.
    Clients whose day window has lapsed are dropped at most once per
    ``cleanup_interval`` seconds.
    """

    def __init__(
        self,
        per_minute: int,
        per_day: int,
        clock: Callable[[], float] = time.monotonic,
        cleanup_interval: float = CLEANUP_INTERVAL_SECONDS,
    ) -> None:
        self._per_minute = per_minute
        self._per_day = per_day
        self._clock = clock
        self._windows: Dict[str, _ClientWindow] = {}
        self._lock = threading.Lock()
        self._cleanup_interval = cleanup_interval
        self._last_cleanup = clock()

    def _maybe_cleanup(self, now: float) -> None:
        """Remove expired clients if the cleanup interval has passed. Caller holds the lock."""
        if now - self._last_cleanup < self._cleanup_interval:
            return
        expired = [key for key, window in self._windows.items() if now > window.day_reset_at]
        for key in expired:
            del self._windows[key]
        self._last_cleanup = now
        if expired:
            logger.debug("Evicted expired rate limit windows", count=len(expired))

    def check(self, key: str) -> RateLimitDecision:
        """Check the limits for ``key`` and count the request when allowed."""
        now = self._clock()
        with self._lock:
            self._maybe_cleanup(now)

            window = self._windows.get(key)
            if window is None:
                window = _ClientWindow(
                    minute_count=0,
                    minute_reset_at=now + MINUTE_SECONDS,
                    day_count=0,
                    day_reset_at=now + DAY_SECONDS,
                )
                self._windows[key] = window

            if now > window.minute_reset_at:
                window.minute_count = 0
                window.minute_reset_at = now + MINUTE_SECONDS

            if now > window.day_reset_at:
                window.day_count = 0
                window.day_reset_at = now + DAY_SECONDS

            if window.minute_count >= self._per_minute:
                logger.info("Rate limit hit", client=key, window="minute")
                return RateLimitDecision(
                    allowed=False,
                    reason="Rate limit exceeded: too many requests per minute",
                    retry_after_seconds=int(MINUTE_SECONDS),
                )
            if window.day_count >= self._per_day:
                logger.info("Rate limit hit", client=key, window="day")
                return RateLimitDecision(
                    allowed=False,
                    reason="Rate limit exceeded: daily limit reached",
                    retry_after_seconds=max(1, int(window.day_reset_at - now)),
                )

            window.minute_count += 1
            window.day_count += 1
            return RateLimitDecision(allowed=True)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


# =============================================================================
# Singleton
# =============================================================================

_parse_limiter: Optional[RateLimiter] = None
_parse_limiter_lock = threading.Lock()


def get_parse_rate_limiter() -> RateLimiter:
    """Get or create the parse-query RateLimiter singleton (thread-safe)."""
    global _parse_limiter
    if _parse_limiter is None:
        with _parse_limiter_lock:
            if _parse_limiter is None:
                from config.settings import get_settings
                settings = get_settings()
                _parse_limiter = RateLimiter(
                    per_minute=settings.parse_rate_limit_per_minute,
                    per_day=settings.parse_rate_limit_per_day,
                )
    return _parse_limiter
