"""
Pastebin UI — State Container Tests
=====================================

What:  PastebinUI driven against LocalPasteBackend with fake clocks.
Why:   The UI rules (notifications, view switching, stale reads, optimistic
       delete) are plain state transitions and can be checked without a server.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from pastebin.exceptions import ApiRequestError, NotFoundError, ValidationError
from pastebin.schemas.paste import PasteCreate
from pastebin.ui import (
    LocalPasteBackend,
    NotificationBanner,
    PasteDraft,
    PastebinUI,
    Session,
    View,
)
from pastebin.ui.session import MOCK_USER


class FakeClock:
    """Wall clock for expiry checks."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeTimer:
    """Monotonic seconds for the notification banner."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 5, 4, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def backend(clock):
    return LocalPasteBackend(clock=clock)


@pytest.fixture
def ui(backend, clock, timer):
    return PastebinUI(backend, banner=NotificationBanner(clock=timer), clock=clock)


class TestNotificationBanner:

    def test_message_disappears_after_ttl(self, timer):
        banner = NotificationBanner(clock=timer)
        banner.show("hello")

        timer.now = 2.9
        assert banner.message == "hello"
        timer.now = 3.0
        assert banner.message is None

    def test_newer_message_is_not_cleared_by_older_timer(self, timer):
        banner = NotificationBanner(clock=timer)
        banner.show("first")
        timer.now = 2.0
        banner.show("second")

        timer.now = 3.5
        assert banner.message == "second"
        timer.now = 5.0
        assert banner.message is None

    def test_clear(self, timer):
        banner = NotificationBanner(clock=timer)
        banner.show("x")
        banner.clear()
        assert banner.message is None


class TestSession:

    def test_anonymous_by_default(self):
        session = Session()
        assert not session.is_authenticated
        assert session.author == "anonymous"

    def test_login_and_logout_return_new_sessions(self):
        session = Session()
        logged_in = session.login()

        assert logged_in.user == MOCK_USER
        assert logged_in.author == "john@example.com"
        assert not session.is_authenticated
        assert not logged_in.logout().is_authenticated

    def test_toggle_auth(self, ui):
        ui.toggle_auth()
        assert ui.author == "john@example.com"
        assert ui.notification == "Logged in successfully"

        ui.toggle_auth()
        assert ui.author == "anonymous"
        assert ui.notification == "Logged out successfully"


class TestCreate:

    @pytest.mark.asyncio
    async def test_empty_draft_is_rejected_locally(self, ui, backend):
        ui.draft.content = "   "

        assert await ui.create_paste() is None
        assert ui.notification == "Please enter some content"
        assert ui.view is View.CREATE
        assert await backend.list_pastes() == []

    @pytest.mark.asyncio
    async def test_create_resets_draft_and_shows_history(self, ui, backend):
        ui.draft = PasteDraft(content="print('hi')", language="python", expiration="1hour")

        paste_id = await ui.create_paste()

        assert paste_id is not None
        assert ui.view is View.HISTORY
        assert ui.notification == "Paste created successfully!"
        assert ui.draft == PasteDraft()
        assert [p.id for p in ui.pastes] == [paste_id]
        assert ui.pastes[0].language == "python"
        # Refreshing the history must not count as a read
        assert ui.pastes[0].views == 0

    @pytest.mark.asyncio
    async def test_create_failure_keeps_draft(self, ui, monkeypatch):
        async def broken(payload):
            raise ApiRequestError(message="Failed to create paste", status_code=500)

        monkeypatch.setattr(ui.backend, "create_paste", broken)
        ui.draft.content = "keep me"

        assert await ui.create_paste() is None
        assert ui.notification == "Failed to create paste"
        assert ui.draft.content == "keep me"
        assert ui.view is View.CREATE

    def test_draft_payload(self):
        payload = PasteDraft(content="x", expiration="5min", burn_after_read=True).to_payload()

        assert payload.expires_in == 300_000
        assert payload.burn_after_read is True
        assert payload.language == "plain"
        assert PasteDraft(content="x").to_payload().expires_in is None


class TestViewPaste:

    @pytest.mark.asyncio
    async def test_view_counts_and_shows_paste(self, ui):
        ui.draft.content = "hello"
        await ui.create_paste()

        await ui.view_paste(ui.pastes[0])

        assert ui.view is View.VIEW
        assert ui.selected.content == "hello"
        assert ui.selected.views == 1

        ui.back()
        assert ui.view is View.HISTORY
        assert ui.selected is None

    @pytest.mark.asyncio
    async def test_expired_summary_is_not_fetched(self, ui, clock):
        ui.draft = PasteDraft(content="short lived", expiration="5min")
        await ui.create_paste()
        summary = ui.pastes[0]

        clock.advance(minutes=6)
        await ui.view_paste(summary)

        assert ui.notification == "This paste has expired"
        assert ui.view is View.HISTORY
        assert ui.selected is None

    @pytest.mark.asyncio
    async def test_burned_paste_is_removed_from_history(self, ui):
        ui.draft = PasteDraft(content="secret", burn_after_read=True)
        await ui.create_paste()
        summary = ui.pastes[0]

        await ui.view_paste(summary)
        ui.back()
        await ui.view_paste(summary)
        ui.back()
        await ui.view_paste(summary)

        assert ui.notification == "This paste has been burned or expired"
        assert ui.pastes == []
        assert ui.view is View.HISTORY

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_view(self, ui, monkeypatch):
        ui.draft.content = "x"
        await ui.create_paste()

        async def broken(paste_id):
            raise ApiRequestError(message="Failed to fetch paste", status_code=502)

        monkeypatch.setattr(ui.backend, "get_paste", broken)
        await ui.view_paste(ui.pastes[0])

        assert ui.notification == "Failed to fetch paste"
        assert ui.view is View.HISTORY
        assert len(ui.pastes) == 1

    @pytest.mark.asyncio
    async def test_stale_read_is_dropped(self, ui, backend, monkeypatch):
        """Navigating away while a read is in flight wins over the read."""
        ui.draft.content = "slow"
        await ui.create_paste()
        summary = ui.pastes[0]

        release = asyncio.Event()
        real_get = backend.get_paste

        async def slow_get(paste_id):
            await release.wait()
            return await real_get(paste_id)

        monkeypatch.setattr(backend, "get_paste", slow_get)

        pending = asyncio.create_task(ui.view_paste(summary))
        await asyncio.sleep(0)
        ui.show(View.CREATE)
        release.set()
        await pending

        assert ui.view is View.CREATE
        assert ui.selected is None

    def test_view_cannot_be_shown_directly(self, ui):
        with pytest.raises(ValueError):
            ui.show(View.VIEW)


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_locally_and_remotely(self, ui, backend):
        ui.draft.content = "bye"
        paste_id = await ui.create_paste()

        await ui.delete_paste(paste_id)

        assert ui.pastes == []
        assert ui.notification == "Paste deleted"
        with pytest.raises(NotFoundError):
            await backend.get_paste(paste_id)

    @pytest.mark.asyncio
    async def test_deleting_selected_paste_returns_to_history(self, ui):
        ui.draft.content = "open"
        paste_id = await ui.create_paste()
        await ui.view_paste(ui.pastes[0])

        await ui.delete_paste(paste_id)

        assert ui.view is View.HISTORY
        assert ui.selected is None

    @pytest.mark.asyncio
    async def test_delete_of_gone_paste_still_clears_list(self, ui, backend):
        ui.draft.content = "race"
        paste_id = await ui.create_paste()
        await backend.delete_paste(paste_id)

        await ui.delete_paste(paste_id)

        assert ui.pastes == []
        assert ui.notification == "Paste was already deleted or expired"

    @pytest.mark.asyncio
    async def test_delete_failure_is_reported(self, ui, monkeypatch):
        ui.draft.content = "x"
        paste_id = await ui.create_paste()

        async def broken(paste_id):
            raise ApiRequestError(message="Failed to delete paste", status_code=500)

        monkeypatch.setattr(ui.backend, "delete_paste", broken)
        await ui.delete_paste(paste_id)

        assert ui.pastes == []
        assert ui.notification == "Failed to delete paste"


class TestLoadAndShare:

    @pytest.mark.asyncio
    async def test_load_failure_sets_error(self, ui, monkeypatch):
        async def broken():
            raise ApiRequestError(message="Failed to fetch pastes", status_code=500)

        monkeypatch.setattr(ui.backend, "list_pastes", broken)
        await ui.load_pastes()

        assert ui.error == "Failed to fetch pastes"
        assert ui.notification == "Failed to load pastes"
        assert ui.loading is False

    @pytest.mark.asyncio
    async def test_seeded_backend(self, clock):
        ui = PastebinUI(LocalPasteBackend(clock=clock, seed_samples=True), clock=clock)
        await ui.load_pastes()

        assert len(ui.pastes) == 2
        assert ui.pastes[0].is_private is True

    def test_share_url(self, backend):
        ui = PastebinUI(backend, origin="https://paste.example.org/")
        assert ui.share_url("ab12cd34") == "https://paste.example.org/paste/ab12cd34"


class TestShare:

    @pytest.mark.asyncio
    async def test_public_paste_can_be_shared(self, ui):
        ui.draft.content = "public"
        paste_id = await ui.create_paste()

        url = ui.share_paste(ui.pastes[0])

        assert url == f"http://localhost:3000/paste/{paste_id}"
        assert ui.shared_url == url
        assert ui.notification == "Share link ready"

    @pytest.mark.asyncio
    async def test_private_paste_is_not_shared(self, ui):
        ui.draft = PasteDraft(content="mine", is_private=True)
        await ui.create_paste()

        assert ui.share_paste(ui.pastes[0]) is None
        assert ui.shared_url is None
        assert ui.notification == "Private pastes cannot be shared"

    @pytest.mark.asyncio
    async def test_expired_paste_is_not_shared(self, ui, clock):
        ui.draft = PasteDraft(content="brief", expiration="5min")
        await ui.create_paste()
        summary = ui.pastes[0]

        clock.advance(minutes=5)

        assert ui.share_paste(summary) is None
        assert ui.notification == "This paste has expired"


class TestTitles:

    @pytest.mark.asyncio
    async def test_title_is_remembered_for_created_paste(self, ui):
        ui.draft = PasteDraft(content="x", title="  Shopping list ")
        paste_id = await ui.create_paste()

        assert ui.title_of(paste_id) == "Shopping list"
        assert ui.draft.title == ""

    @pytest.mark.asyncio
    async def test_blank_title_falls_back_to_untitled(self, ui):
        ui.draft.content = "x"
        paste_id = await ui.create_paste()

        assert ui.title_of(paste_id) == "Untitled"
        assert ui.title_of("ffffffff") == "Untitled"

    def test_title_is_not_sent(self):
        payload = PasteDraft(content="x", title="Notes").to_payload()
        assert "title" not in payload.model_dump(by_alias=True)


class TestLocalBackendLimits:

    @pytest.mark.asyncio
    async def test_out_of_range_expiry_is_a_validation_error(self, backend):
        with pytest.raises(ValidationError):
            await backend.create_paste(PasteCreate(content="x", expires_in=10**18))
        assert await backend.list_pastes() == []

    @pytest.mark.asyncio
    async def test_ui_reports_rejected_create(self, ui, monkeypatch):
        def far_future(draft):
            return PasteCreate(content=draft.content, expires_in=10**18)

        monkeypatch.setattr(PasteDraft, "to_payload", far_future)
        ui.draft.content = "x"

        assert await ui.create_paste() is None
        assert ui.notification == "Failed to create paste"
        assert ui.draft.content == "x"
