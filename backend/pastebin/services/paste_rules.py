"""
Pastebin — Paste Rules
========================

What:  The small pure rules shared by the database-backed PasteService and
       the client-local LocalPasteBackend.
Why:   Both backends must agree on identifiers, expiry, burning and previews;
       keeping the rules here means the mock UI behaves exactly like the API.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from pastebin.exceptions import ValidationError

ID_BYTES = 4
ELLIPSIS = "..."

# UI expiration choices → lifetime in milliseconds (None = never)
EXPIRATION_CHOICES = {
    "never": None,
    "5min": 5 * 60 * 1000,
    "10min": 10 * 60 * 1000,
    "1hour": 60 * 60 * 1000,
    "1day": 24 * 60 * 60 * 1000,
    "1week": 7 * 24 * 60 * 60 * 1000,
}


def generate_paste_id() -> str:
    """4 random bytes, hex-encoded: 8 lowercase hex characters."""
    return secrets.token_hex(ID_BYTES)


def expiration_to_millis(choice: Optional[str]) -> Optional[int]:
    """Map a UI expiration choice to expiresIn; unknown choices mean never."""
    if choice is None:
        return None
    return EXPIRATION_CHOICES.get(choice)


def compute_expires_at(now: datetime, expires_in_ms: Optional[int]) -> Optional[datetime]:
    """
    Absolute expiry for a new paste.

    0 is a real lifetime (expires immediately), only None means never.

    Raises:
        ValidationError: the lifetime does not fit in a datetime
    """
    if expires_in_ms is None:
        return None
    try:
        return now + timedelta(milliseconds=expires_in_ms)
    except OverflowError:
        raise ValidationError(message="expiresIn is out of range", field="expiresIn")


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (SQLite round-trips) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    """A paste is readable while now < expires_at."""
    if expires_at is None:
        return False
    return as_utc(expires_at) <= as_utc(now)


def should_burn(burn_after_read: bool, views_after_read: int, burn_threshold: int) -> bool:
    """Whether a read that brought the counter to views_after_read burns the paste."""
    return burn_after_read and views_after_read >= burn_threshold


def format_preview(head: str, full_length: int, limit: int = 100) -> str:
    """
    Listing preview: the first `limit` characters, plus "..." when the stored
    content is longer than that.

    `head` may already be cut (the SQL listing selects substr(content, 1, limit))
    so the decision uses full_length, never len(head).
    """
    head = head[:limit]
    if full_length > limit:
        return head + ELLIPSIS
    return head
