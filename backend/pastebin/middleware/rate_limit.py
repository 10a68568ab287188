"""
Pastebin Backend — Rate Limiting Middleware
=============================================

What:  Per-client fixed window rate limiter.
Why:   Keeps one client from flooding the paste table.
How:   Counts requests per client address in memory; the count resets when
       the client's window (started by its first request) elapses.
Who:   Applied to every request via Starlette middleware.
When:  First in the middleware chain (rejects abuse before any processing).

Algorithm: Fixed Window Counter
    1. A client's first request opens a window of `window_seconds`
    2. Each request inside the window increments the counter
    3. Once the counter reaches `max_requests`, further requests get 429
       with Retry-After = seconds left in the window
    4. When the window elapses the next request opens a fresh one

    State is per process; restarting the server or running several workers
    gives each its own counters.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from pastebin.config import settings
from pastebin.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    """
    Fixed window counters keyed by client.

    hit() records a request and returns (allowed, retry_after_seconds).
    Clock values are passed in so the limiter can be driven deterministically.
    """

    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._windows: Dict[str, _Window] = {}
        self._hits_since_cleanup = 0

    def hit(self, key: str, now: float) -> Tuple[bool, int]:
        window = self._windows.get(key)
        if window is None or now - window.started_at >= self.window_seconds:
            window = _Window(started_at=now)
            self._windows[key] = window

        if window.count >= self.max_requests:
            retry_after = int(window.started_at + self.window_seconds - now) + 1
            return False, retry_after

        window.count += 1
        self._hits_since_cleanup += 1
        if self._hits_since_cleanup >= 1000:
            self.cleanup(now)
        return True, 0

    def remaining(self, key: str, now: float) -> int:
        window = self._windows.get(key)
        if window is None or now - window.started_at >= self.window_seconds:
            return self.max_requests
        return max(self.max_requests - window.count, 0)

    def cleanup(self, now: float) -> None:
        """Drop windows that have elapsed, so idle clients don't accumulate."""
        stale = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in stale:
            del self._windows[key]
        self._hits_since_cleanup = 0
        if stale:
            logger.debug("Cleaned up %d expired rate limit windows", len(stale))


def client_address(request: Request, trusted_proxies: Iterable[str] = ()) -> str:
    """
    The socket peer, or the first X-Forwarded-For hop when the peer is one
    of `trusted_proxies`. Anyone else's X-Forwarded-For is ignored.
    """
    peer = request.client.host if request.client else "unknown"
    if peer in trusted_proxies:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return peer


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Applies one FixedWindowRateLimiter to all API routes.

    Configuration (from settings unless given explicitly):
        rate_limit_requests: Max requests per window (default: 100)
        rate_limit_window: Window duration in seconds (default: 900)
        trusted_proxies: Peers allowed to name the client via X-Forwarded-For

    Every limited response carries X-RateLimit-Limit and X-RateLimit-Remaining.
    Excluded paths: /health and the OpenAPI docs.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        trusted_proxies: Optional[Iterable[str]] = None,
    ):
        super().__init__(app)
        self.limiter = FixedWindowRateLimiter(
            max_requests=max_requests or settings.rate_limit_requests,
            window_seconds=window_seconds or settings.rate_limit_window,
        )
        if trusted_proxies is None:
            trusted_proxies = settings.trusted_proxies_list
        self.trusted_proxies = frozenset(trusted_proxies)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = client_address(request, self.trusted_proxies)
        now = time.monotonic()
        allowed, retry_after = self.limiter.hit(client_ip, now)
        quota_headers = {
            "X-RateLimit-Limit": str(self.limiter.max_requests),
            "X-RateLimit-Remaining": str(self.limiter.remaining(client_ip, now)),
        }

        if not allowed:
            exc = RateLimitExceededError(retry_after=retry_after, context={"client_ip": client_ip})
            logger.warning(
                "Rate limit exceeded for %s: %d requests in %ds window",
                client_ip,
                self.limiter.max_requests,
                self.limiter.window_seconds,
            )
            # Runs ahead of RequestIDMiddleware, so there is no request ID yet
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": {"retry_after": exc.retry_after},
                },
                headers={"Retry-After": str(exc.retry_after), **quota_headers},
            )

        response = await call_next(request)
        response.headers.update(quota_headers)
        return response
