"""Per-IP sliding-window rate limiting for the public form endpoints.

State lives in process memory, so limits are per worker process.
"""

import logging
import time
from collections import defaultdict

from fastapi import HTTPException, Request, status

from villa_booking.config import settings

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Client IP, honouring ``X-Forwarded-For`` / ``X-Real-IP`` from the proxy."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or "unknown"
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


class RateLimiter:
    """Allow at most ``max_attempts`` calls per client within ``window_seconds``."""

    def __init__(self, scope: str, max_attempts: int | None = None, window_seconds: int | None = None) -> None:
        self.scope = scope
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._attempts: dict[str, list[float]] = defaultdict(list)

    @property
    def limit(self) -> int:
        return self.max_attempts if self.max_attempts is not None else settings.rate_limit_max_attempts

    @property
    def window(self) -> int:
        return self.window_seconds if self.window_seconds is not None else settings.rate_limit_window_seconds

    def hit(self, key: str, now: float | None = None) -> bool:
        """Record an attempt for ``key``; ``False`` when the limit is exceeded."""
        now = time.monotonic() if now is None else now
        recent = [ts for ts in self._attempts[key] if now - ts < self.window]
        if len(recent) >= self.limit:
            self._attempts[key] = recent
            return False
        recent.append(now)
        self._attempts[key] = recent
        return True

    def reset(self) -> None:
        self._attempts.clear()

    async def __call__(self, request: Request) -> None:
        ip = get_client_ip(request)
        if not self.hit(ip):
            logger.warning("Rate limit exceeded for %s on %s", ip, self.scope)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many attempts. Try again later.",
            )


booking_rate_limit = RateLimiter("booking_requests")
login_rate_limit = RateLimiter("admin_login")
