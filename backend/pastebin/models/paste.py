"""
Pastebin Backend — Paste SQLAlchemy Model
===========================================

What:  ORM model representing the `pastes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by PasteService for all reads and writes.

Table Design Rationale:
    - id: 8 hex characters generated in Python (short, shareable)
    - content: full text, never truncated in storage (previews are cut in SQL)
    - expires_at: NULL means the paste never expires
    - deleted: soft-delete marker; rows are never removed
    - created_at: UTC with timezone; drives "most recent first" listings
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column

from pastebin.database import Base

DEFAULT_LANGUAGE = "plain"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Paste(Base):
    """
    A stored text artifact identified by a short opaque token.

    Lifecycle:
        1. Inserted by create with views=0, deleted=false
        2. Each successful read increments views; a burn-after-read paste is
           marked deleted once it reaches the configured number of reads
        3. Delete sets deleted=true
        content, language, expires_at and created_at never change
    """

    __tablename__ = "pastes"

    id: Mapped[str] = mapped_column(
        String(16),
        primary_key=True,
        comment="Short opaque identifier (hex)",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Full paste text",
    )

    language: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=DEFAULT_LANGUAGE,
        server_default=text(f"'{DEFAULT_LANGUAGE}'"),
        comment="Syntax tag, e.g. plain, python, json",
    )

    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Unreadable once now >= expires_at; NULL = never expires",
    )

    burn_after_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    # Display hint only; nothing server-side restricts access on it
    is_private: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    views: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Soft-delete marker; deleted rows are excluded from reads and listings",
    )

    __table_args__ = (
        Index("idx_pastes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Paste(id={self.id!r}, views={self.views}, deleted={self.deleted}, "
            f"created_at='{self.created_at}')>"
        )
