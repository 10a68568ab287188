"""
Pastebin UI — Client-Local Backend
====================================

What:  An in-memory stand-in for the paste API, for running the UI with no
       server at all (demos, offline use, UI tests).
How:   Same four coroutine methods as PasteApiClient, same rules as
       PasteService (via pastebin.services.paste_rules), same exceptions.
       Nothing is persisted; a new instance starts empty or with samples.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from pastebin.exceptions import NotFoundError, ValidationError
from pastebin.models.paste import DEFAULT_LANGUAGE, utcnow
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
    is_expired,
    should_burn,
)

logger = logging.getLogger(__name__)


@dataclass
class _LocalPaste:
    id: str
    content: str
    language: str
    expires_at: Optional[datetime]
    burn_after_read: bool
    is_private: bool
    views: int
    created_at: datetime
    deleted: bool = False


class LocalPasteBackend:
    """
    In-memory paste store with PasteService semantics.

    Args:
        burn_threshold: reads after which a burn-after-read paste is deleted
        clock: returns the current UTC datetime (injectable for tests)
        seed_samples: start with two example pastes
    """

    def __init__(
        self,
        burn_threshold: int = 2,
        list_limit: int = 100,
        preview_length: int = 100,
        clock: Callable[[], datetime] = utcnow,
        seed_samples: bool = False,
    ):
        self.burn_threshold = burn_threshold
        self.list_limit = list_limit
        self.preview_length = preview_length
        self._clock = clock
        self._pastes: Dict[str, _LocalPaste] = {}
        if seed_samples:
            self._seed()

    def _seed(self) -> None:
        now = self._clock()
        samples = [
            _LocalPaste(
                id=generate_paste_id(),
                content='console.log("Hello World!");',
                language="javascript",
                expires_at=None,
                burn_after_read=False,
                is_private=False,
                views=5,
                created_at=now - timedelta(days=1),
            ),
            _LocalPaste(
                id=generate_paste_id(),
                content="This is a private note",
                language="plain",
                expires_at=None,
                burn_after_read=True,
                is_private=True,
                views=0,
                created_at=now - timedelta(hours=1),
            ),
        ]
        for paste in samples:
            self._pastes[paste.id] = paste

    def _readable(self, paste_id: str) -> _LocalPaste:
        paste = self._pastes.get(paste_id)
        if paste is None or paste.deleted or is_expired(paste.expires_at, self._clock()):
            raise NotFoundError(resource="paste", resource_id=paste_id)
        return paste

    async def create_paste(self, payload: PasteCreate) -> PasteCreated:
        if not payload.content or not payload.content.strip():
            raise ValidationError(message="Paste content must not be empty", field="content")

        now = self._clock()
        paste_id = generate_paste_id()
        while paste_id in self._pastes:
            paste_id = generate_paste_id()

        self._pastes[paste_id] = _LocalPaste(
            id=paste_id,
            content=payload.content,
            language=payload.language or DEFAULT_LANGUAGE,
            expires_at=compute_expires_at(now, payload.expires_in),
            burn_after_read=payload.burn_after_read,
            is_private=payload.is_private,
            views=0,
            created_at=now,
        )
        logger.debug("Local paste %s created", paste_id)
        return PasteCreated(id=paste_id)

    async def get_paste(self, paste_id: str) -> PasteResponse:
        paste = self._readable(paste_id)
        paste.views += 1
        if should_burn(paste.burn_after_read, paste.views, self.burn_threshold):
            paste.deleted = True
        return PasteResponse.model_validate(paste)

    async def list_pastes(self) -> List[PasteSummary]:
        now = self._clock()
        visible = [
            p for p in self._pastes.values()
            if not p.deleted and not is_expired(p.expires_at, now)
        ]
        visible.sort(key=lambda p: p.created_at, reverse=True)
        return [
            PasteSummary(
                id=p.id,
                content=format_preview(p.content, len(p.content), self.preview_length),
                language=p.language,
                created_at=p.created_at,
                views=p.views,
                is_private=p.is_private,
                burn_after_read=p.burn_after_read,
                expires_at=p.expires_at,
            )
            for p in visible[: self.list_limit]
        ]

    async def delete_paste(self, paste_id: str) -> MessageResponse:
        paste = self._pastes.get(paste_id)
        if paste is None or paste.deleted:
            raise NotFoundError(resource="paste", resource_id=paste_id)
        paste.deleted = True
        return MessageResponse(message="Paste deleted successfully")
