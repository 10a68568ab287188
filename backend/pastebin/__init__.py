"""
Pastebin — Application Package
================================

What: A small pastebin: an HTTP API over a single `pastes` table plus a
      headless UI state container that drives it.

Architecture Note:
    ┌─────────────────────────────────────┐
    │       UI (pastebin.ui)              │  ← views, notifications, mock auth
    ├─────────────────────────────────────┤
    │       Routes (API Layer)            │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       Services (Business Logic)     │  ← expiry, burn, previews
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │       Database (Persistence)        │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
