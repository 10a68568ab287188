"""
Pastebin UI — headless client state.

    PastebinUI          view state container (create / history / view)
    PasteApiClient      backend talking to the HTTP API
    LocalPasteBackend   client-local mock backend, no server needed
"""

from pastebin.ui.api_client import PasteApiClient
from pastebin.ui.controller import PasteDraft, PastebinUI, View
from pastebin.ui.local_backend import LocalPasteBackend
from pastebin.ui.notifications import NotificationBanner
from pastebin.ui.session import MOCK_USER, Session, User

__all__ = [
    "LocalPasteBackend",
    "MOCK_USER",
    "NotificationBanner",
    "PasteApiClient",
    "PasteDraft",
    "PastebinUI",
    "Session",
    "User",
    "View",
]
