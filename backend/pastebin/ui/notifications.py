"""
Pastebin UI — Notification Banner
===================================

A single transient message. Showing a message replaces the current one and
restarts its lifetime, so an older message's expiry can never clear a newer
message early.
"""

import time
from typing import Callable, Optional

NOTIFICATION_TTL = 3.0  # seconds


class NotificationBanner:
    """Holds at most one message; it disappears `ttl` seconds after being shown."""

    def __init__(self, ttl: float = NOTIFICATION_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._message: Optional[str] = None
        self._expires_at = 0.0

    def show(self, message: str) -> None:
        self._message = message
        self._expires_at = self._clock() + self.ttl

    def clear(self) -> None:
        self._message = None

    @property
    def message(self) -> Optional[str]:
        if self._message is not None and self._clock() >= self._expires_at:
            self._message = None
        return self._message
