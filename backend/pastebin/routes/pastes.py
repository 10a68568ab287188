"""
Pastebin Backend — Paste Route Handlers
=========================================

What:  POST/GET /api/pastes and GET/DELETE /api/pastes/{id}.
Why:   The whole public API of the service.
How:   Extracts path/body data, delegates to PasteService, returns JSON.
Who:   Called by the UI (pastebin.ui.PasteApiClient) or any HTTP client.

Caching:
    Reads mutate the row (view counter, burn), so every response here is
    marked no-store.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from pastebin.database import get_db_session
from pastebin.schemas.paste import (
    ErrorResponse,
    MessageResponse,
    PasteCreate,
    PasteCreated,
    PasteResponse,
    PasteSummary,
)
from pastebin.services.paste_service import paste_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pastes"])

_NO_STORE = "no-store"


@router.post(
    "/pastes",
    response_model=PasteCreated,
    responses={
        200: {"description": "Paste stored", "model": PasteCreated},
        400: {"description": "Empty content", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a paste",
)
async def create_paste(
    payload: PasteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PasteCreated:
    """
    Store text and return its short identifier.

    Body: {content, language?, expiresIn?, burnAfterRead?, isPrivate?}
    expiresIn is in milliseconds from now.
    """
    return await paste_service.create_paste(db=db, payload=payload)


@router.get(
    "/pastes",
    response_model=list[PasteSummary],
    responses={
        200: {"description": "Recent pastes with content previews"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List recent pastes",
)
async def list_pastes(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> list[PasteSummary]:
    """Up to 100 readable pastes, newest first, content cut to 100 characters."""
    result = await paste_service.list_pastes(db=db)
    response.headers["Cache-Control"] = _NO_STORE
    response.headers["X-Total-Count"] = str(len(result))
    return result


@router.get(
    "/pastes/{paste_id}",
    response_model=PasteResponse,
    responses={
        200: {"description": "Full paste", "model": PasteResponse},
        404: {"description": "Missing, expired or deleted", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Read a paste",
)
async def read_paste(
    paste_id: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PasteResponse:
    """
    Return the full paste and count the view.

    A burn-after-read paste is deleted once it reaches its read limit; the
    read that burns it still receives the content.
    """
    result = await paste_service.read_paste(db=db, paste_id=paste_id)
    response.headers["Cache-Control"] = _NO_STORE
    return result


@router.delete(
    "/pastes/{paste_id}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Paste deleted", "model": MessageResponse},
        404: {"description": "Missing or already deleted", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a paste",
)
async def delete_paste(
    paste_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Soft-delete a paste. No ownership check is performed."""
    return await paste_service.delete_paste(db=db, paste_id=paste_id)
