"""
Pastebin UI — View State Container
====================================

What:  Everything the pastebin UI keeps in memory: the active view, the
       create-form draft, the cached paste list, the selected paste, the
       notification banner and the mock session.
Why:   A rendering layer (web page, terminal UI) only has to draw this state
       and forward user actions to the coroutine methods below.
How:   Works against any PasteBackend: PasteApiClient for the real service,
       LocalPasteBackend for the client-local mock variant.

View transitions:
    create  ──create_paste() ok──▶  history
    history ──view_paste() ok────▶  view
    view    ──back()─────────────▶  history
    show(create|history) is always allowed.

Stale results:
    Every navigation bumps a generation counter. A read that finishes after
    the user navigated elsewhere is dropped instead of yanking them into the
    view of an old selection.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Protocol

from pastebin.exceptions import NotFoundError, PastebinError
from pastebin.models.paste import DEFAULT_LANGUAGE, utcnow
from pastebin.schemas.paste import (
    MessageResponse,
    PasteCreate,
    PasteCreated,
    PasteResponse,
    PasteSummary,
)
from pastebin.services.paste_rules import expiration_to_millis, is_expired
from pastebin.ui.notifications import NotificationBanner
from pastebin.ui.session import Session

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


class View(str, enum.Enum):
    CREATE = "create"
    HISTORY = "history"
    VIEW = "view"


class PasteBackend(Protocol):
    async def create_paste(self, payload: PasteCreate) -> PasteCreated: ...

    async def get_paste(self, paste_id: str) -> PasteResponse: ...

    async def list_pastes(self) -> List[PasteSummary]: ...

    async def delete_paste(self, paste_id: str) -> MessageResponse: ...


@dataclass
class PasteDraft:
    """
    Contents of the create form.

    title stays in the UI: the API has no column for it.
    """
    content: str = ""
    title: str = ""
    language: str = DEFAULT_LANGUAGE
    expiration: str = "never"
    burn_after_read: bool = False
    is_private: bool = False

    def to_payload(self) -> PasteCreate:
        return PasteCreate(
            content=self.content,
            language=self.language,
            expires_in=expiration_to_millis(self.expiration),
            burn_after_read=self.burn_after_read,
            is_private=self.is_private,
        )


class PastebinUI:
    """
    UI state container.

    Every user-facing outcome goes through notify(); failures never raise out
    of the action methods, they leave the current view in place and set the
    banner instead.
    """

    def __init__(
        self,
        backend: PasteBackend,
        origin: str = "http://localhost:3000",
        banner: Optional[NotificationBanner] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.backend = backend
        self.origin = origin.rstrip("/")
        self.banner = banner or NotificationBanner()
        self._clock = clock

        self.view = View.CREATE
        self.draft = PasteDraft()
        self.pastes: List[PasteSummary] = []
        self.selected: Optional[PasteResponse] = None
        self.session = Session()
        self.loading = False
        self.error: Optional[str] = None
        self.titles: Dict[str, str] = {}
        self.shared_url: Optional[str] = None
        self._generation = 0

    # ── Derived state ─────────────────────────────────────────────────────

    @property
    def notification(self) -> Optional[str]:
        return self.banner.message

    @property
    def author(self) -> str:
        return self.session.author

    def is_expired(self, paste: PasteSummary) -> bool:
        return is_expired(paste.expires_at, self._clock())

    def share_url(self, paste_id: str) -> str:
        return f"{self.origin}/paste/{paste_id}"

    def title_of(self, paste_id: str) -> str:
        """Title typed when this session created the paste, else the placeholder."""
        return self.titles.get(paste_id, UNTITLED)

    # ── Navigation ────────────────────────────────────────────────────────

    def notify(self, message: str) -> None:
        self.banner.show(message)

    def _navigate(self, view: View) -> None:
        self._generation += 1
        self.view = view

    def show(self, view: View) -> None:
        """Switch to create or history; the paste view is only reachable by reading one."""
        view = View(view)
        if view is View.VIEW:
            raise ValueError("The paste view is entered through view_paste()")
        self.selected = None
        self._navigate(view)

    def back(self) -> None:
        self.selected = None
        self._navigate(View.HISTORY)

    # ── Actions ───────────────────────────────────────────────────────────

    async def load_pastes(self) -> None:
        self.loading = True
        try:
            self.pastes = await self.backend.list_pastes()
            self.error = None
        except PastebinError as e:
            self.error = e.message
            logger.warning("Loading pastes failed: %s", e.message)
            self.notify("Failed to load pastes")
        finally:
            self.loading = False

    async def create_paste(self) -> Optional[str]:
        """Submit the draft. Returns the new id, or None when nothing was created."""
        if not self.draft.content.strip():
            self.notify("Please enter some content")
            return None

        try:
            created = await self.backend.create_paste(self.draft.to_payload())
        except PastebinError as e:
            logger.warning("Creating paste failed: %s", e.message)
            self.notify("Failed to create paste")
            return None

        self.titles[created.id] = self.draft.title.strip() or UNTITLED
        self.draft = PasteDraft()
        self.notify("Paste created successfully!")
        self.selected = None
        self._navigate(View.HISTORY)

        # Refresh from the listing; reading the new paste would count a view
        await self.load_pastes()
        return created.id

    async def view_paste(self, paste: PasteSummary) -> None:
        if self.is_expired(paste):
            self.notify("This paste has expired")
            return

        self._generation += 1
        generation = self._generation
        try:
            data = await self.backend.get_paste(paste.id)
        except NotFoundError:
            self._forget(paste.id)
            self.notify("This paste has been burned or expired")
            return
        except PastebinError as e:
            logger.warning("Fetching paste %s failed: %s", paste.id, e.message)
            self.notify("Failed to fetch paste")
            return

        if generation != self._generation:
            logger.debug("Dropping stale read of paste %s", paste.id)
            return

        self.selected = data
        self._navigate(View.VIEW)

    async def delete_paste(self, paste_id: str) -> None:
        """Remove locally right away, then tell the backend."""
        self._forget(paste_id)
        if self.selected is not None and self.selected.id == paste_id:
            self.back()
        self.notify("Paste deleted")

        try:
            await self.backend.delete_paste(paste_id)
        except NotFoundError:
            self.notify("Paste was already deleted or expired")
        except PastebinError as e:
            logger.warning("Deleting paste %s failed: %s", paste_id, e.message)
            self.notify("Failed to delete paste")

    def share_paste(self, paste: PasteSummary) -> Optional[str]:
        """Hand out the share link of a public, unexpired paste."""
        if paste.is_private:
            self.notify("Private pastes cannot be shared")
            return None
        if self.is_expired(paste):
            self.notify("This paste has expired")
            return None

        self.shared_url = self.share_url(paste.id)
        self.notify("Share link ready")
        return self.shared_url

    def toggle_auth(self) -> None:
        if self.session.is_authenticated:
            self.session = self.session.logout()
            self.notify("Logged out successfully")
        else:
            self.session = self.session.login()
            self.notify("Logged in successfully")

    def _forget(self, paste_id: str) -> None:
        self.pastes = [p for p in self.pastes if p.id != paste_id]
