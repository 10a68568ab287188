"""
Pastebin UI — Mock Session
============================

What:  The UI's notion of who is using it.
Why:   Login is a local toggle with no identity verification; it only
       changes the author string the UI displays. Nothing is sent to the API.
How:   Immutable value objects held by the UI state container. login() and
       logout() return new sessions instead of mutating shared state.
"""

from dataclasses import dataclass
from typing import Optional

ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class User:
    name: str
    email: str


MOCK_USER = User(name="John Doe", email="john@example.com")


@dataclass(frozen=True)
class Session:
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def author(self) -> str:
        """Displayed author: the user's email, or "anonymous"."""
        return self.user.email if self.user else ANONYMOUS

    def login(self, user: User = MOCK_USER) -> "Session":
        return Session(user=user)

    def logout(self) -> "Session":
        return Session()
