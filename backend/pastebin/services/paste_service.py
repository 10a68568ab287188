"""
Pastebin Backend — Paste Service (Business Logic)
===================================================

What:  Create, read, list and soft-delete pastes.
Why:   Keeps every paste rule out of the HTTP layer so it can be tested with
       a bare session.
How:   Each operation is one or two statements against the `pastes` table.
Who:   Called by the /api/pastes route handlers.

Read Path (GET /api/pastes/{id}):
    A single conditional UPDATE ... RETURNING does the whole job:

        UPDATE pastes
           SET views   = views + 1,
               deleted = CASE WHEN burn_after_read AND views + 1 >= :threshold
                              THEN true ELSE deleted END
         WHERE id = :id AND NOT deleted
           AND (expires_at IS NULL OR expires_at > :now)
        RETURNING ...

    Two concurrent readers can therefore never both observe "not yet burned"
    for the same final read; the database serializes the row update.

Design Decision:
    PasteService is stateless: it receives the db session for each call and
    only reads tunables (burn threshold, list size) from settings.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, case, func, or_, select, true, update
from sqlalchemy.ext.asyncio import AsyncSession

from pastebin.config import settings
from pastebin.exceptions import (
    DatabaseError,
    NotFoundError,
    PastebinError,
    ValidationError,
)
from pastebin.models.paste import DEFAULT_LANGUAGE, Paste, utcnow
from pastebin.schemas.paste import (
    MessageResponse,
    PasteCreate,
    PasteCreated,
    PasteResponse,
    PasteSummary,
)
from pastebin.services.paste_rules import (
    compute_expires_at,
    format_preview,
    generate_paste_id,
)

logger = logging.getLogger(__name__)

_PASTE_COLUMNS = (
    Paste.id,
    Paste.content,
    Paste.language,
    Paste.expires_at,
    Paste.burn_after_read,
    Paste.is_private,
    Paste.views,
    Paste.created_at,
    Paste.deleted,
)


def _readable(now: datetime):
    """WHERE clause shared by read and list: not deleted and not expired."""
    return and_(
        Paste.deleted.is_(False),
        or_(Paste.expires_at.is_(None), Paste.expires_at > now),
    )


class PasteService:
    """
    Business logic layer for paste operations.

    Error Handling Strategy:
        NotFoundError and ValidationError propagate as-is. Anything else raised
        while talking to the database is logged and wrapped in DatabaseError,
        which the API turns into a generic 500.
    """

    def __init__(
        self,
        burn_threshold: Optional[int] = None,
        list_limit: Optional[int] = None,
        preview_length: Optional[int] = None,
        id_attempts: Optional[int] = None,
    ):
        self._burn_threshold = burn_threshold
        self._list_limit = list_limit
        self._preview_length = preview_length
        self._id_attempts = id_attempts

    @property
    def burn_threshold(self) -> int:
        return self._burn_threshold or settings.burn_after_read_views

    @property
    def list_limit(self) -> int:
        return self._list_limit or settings.list_limit

    @property
    def preview_length(self) -> int:
        return self._preview_length or settings.preview_length

    @property
    def id_attempts(self) -> int:
        return self._id_attempts or settings.id_generation_attempts

    async def create_paste(
        self,
        db: AsyncSession,
        payload: PasteCreate,
        now: Optional[datetime] = None,
    ) -> PasteCreated:
        """
        Store a new paste and return its identifier.

        Steps:
            1. Reject empty content (400)
            2. Resolve language default and absolute expiry
            3. Draw an identifier not yet present in the table
            4. Insert with views=0, deleted=false

        Raises:
            ValidationError: content empty, or expiresIn outside datetime range
            DatabaseError: insert failed or no free identifier was found
        """
        if not payload.content or not payload.content.strip():
            raise ValidationError(message="Paste content must not be empty", field="content")

        now = now or utcnow()
        expires_at = compute_expires_at(now, payload.expires_in)

        try:
            paste_id = await self._unused_id(db)
            paste = Paste(
                id=paste_id,
                content=payload.content,
                language=payload.language or DEFAULT_LANGUAGE,
                expires_at=expires_at,
                burn_after_read=payload.burn_after_read,
                is_private=payload.is_private,
                views=0,
                deleted=False,
                created_at=now,
            )
            db.add(paste)
            await db.flush()
            logger.info(
                "Paste %s created (%d chars, burn_after_read=%s, expires_at=%s)",
                paste_id,
                len(payload.content),
                payload.burn_after_read,
                expires_at.isoformat() if expires_at else None,
            )
            return PasteCreated(id=paste_id)

        except PastebinError:
            raise
        except Exception as e:
            logger.error("Database error creating paste: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the paste. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def _unused_id(self, db: AsyncSession) -> str:
        """Draw identifiers until one is not taken (soft-deleted rows count as taken)."""
        for attempt in range(1, self.id_attempts + 1):
            candidate = generate_paste_id()
            result = await db.execute(select(Paste.id).where(Paste.id == candidate))
            if result.scalar_one_or_none() is None:
                return candidate
            logger.warning("Paste id collision on %s (attempt %d)", candidate, attempt)
        raise DatabaseError(
            message="Could not allocate a paste identifier. Please try again.",
            context={"attempts": self.id_attempts},
        )

    async def read_paste(
        self,
        db: AsyncSession,
        paste_id: str,
        now: Optional[datetime] = None,
    ) -> PasteResponse:
        """
        Return the full paste, counting the read and burning it when due.

        Every successful call increments views by exactly one. The returned
        object carries the post-increment count. With the default threshold
        of 2, a burn-after-read paste is returned on its first and second
        read and is gone from the third on.

        Raises:
            NotFoundError: missing, expired or deleted (indistinguishable)
            DatabaseError: statement failed
        """
        now = now or utcnow()
        views_after = Paste.views + 1
        stmt = (
            update(Paste)
            .where(Paste.id == paste_id, _readable(now))
            .values(
                views=views_after,
                deleted=case(
                    (
                        and_(Paste.burn_after_read.is_(True), views_after >= self.burn_threshold),
                        true(),
                    ),
                    else_=Paste.deleted,
                ),
            )
            .returning(*_PASTE_COLUMNS)
            .execution_options(synchronize_session=False)
        )

        try:
            result = await db.execute(stmt)
            row = result.one_or_none()
        except Exception as e:
            logger.error("Database error reading paste %s: %s", paste_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the paste. Please try again.",
                context={"paste_id": paste_id},
            )

        if row is None:
            raise NotFoundError(resource="paste", resource_id=paste_id)

        if row.deleted:
            logger.info("Paste %s burned after %d reads", paste_id, row.views)

        return PasteResponse.model_validate(row)

    async def list_pastes(
        self,
        db: AsyncSession,
        now: Optional[datetime] = None,
    ) -> List[PasteSummary]:
        """
        Most recent readable pastes with content previews.

        Query plan:
            SELECT id, substr(content, 1, 100), length(content), ...
              FROM pastes
             WHERE NOT deleted AND (expires_at IS NULL OR expires_at > :now)
             ORDER BY created_at DESC LIMIT 100
            → idx_pastes_created_at serves the ordering

        Private pastes are listed like any other; is_private is only carried
        for the UI to render.
        """
        now = now or utcnow()
        limit = self.preview_length
        stmt = (
            select(
                Paste.id,
                func.substr(Paste.content, 1, limit).label("head"),
                func.length(Paste.content).label("content_length"),
                Paste.language,
                Paste.created_at,
                Paste.views,
                Paste.is_private,
                Paste.burn_after_read,
                Paste.expires_at,
            )
            .where(_readable(now))
            .order_by(Paste.created_at.desc(), Paste.id)
            .limit(self.list_limit)
        )

        try:
            result = await db.execute(stmt)
            rows = result.all()
        except Exception as e:
            logger.error("Database error listing pastes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve pastes. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [
            PasteSummary(
                id=row.id,
                content=format_preview(row.head or "", row.content_length or 0, limit),
                language=row.language,
                created_at=row.created_at,
                views=row.views,
                is_private=row.is_private,
                burn_after_read=row.burn_after_read,
                expires_at=row.expires_at,
            )
            for row in rows
        ]

    async def delete_paste(self, db: AsyncSession, paste_id: str) -> MessageResponse:
        """
        Soft-delete a paste. Anyone who knows the identifier may do this.

        Raises:
            NotFoundError: no such paste, or it is already deleted
            DatabaseError: statement failed
        """
        stmt = (
            update(Paste)
            .where(Paste.id == paste_id, Paste.deleted.is_(False))
            .values(deleted=True)
            .returning(Paste.id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            deleted_id = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error deleting paste %s: %s", paste_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the paste. Please try again.",
                context={"paste_id": paste_id},
            )

        if deleted_id is None:
            raise NotFoundError(resource="paste", resource_id=paste_id)

        logger.info("Paste %s deleted", paste_id)
        return MessageResponse(message="Paste deleted successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
paste_service = PasteService()
