"""
Pastebin UI — HTTP API Client
===============================

What:  Async client for the /api/pastes endpoints.
Why:   The UI state container talks to the service only through this class
       (or through LocalPasteBackend, which has the same methods).
How:   httpx.AsyncClient with the API base URL; JSON bodies use the camelCase
       wire names from pastebin.schemas.paste.

Error mapping:
    404                      → NotFoundError
    any other non-2xx        → ApiRequestError(status_code=...)
    transport failure        → ApiRequestError (no status code)
No request is retried.
"""

import logging
from typing import List, Optional

import httpx

from pastebin.config import settings
from pastebin.exceptions import ApiRequestError, NotFoundError
from pastebin.schemas.paste import (
    MessageResponse,
    PasteCreate,
    PasteCreated,
    PasteResponse,
    PasteSummary,
)

logger = logging.getLogger(__name__)


class PasteApiClient:
    """
    Thin async wrapper around the paste API.

    Usage:
        async with PasteApiClient("http://localhost:3001/api") as api:
            created = await api.create_paste(PasteCreate(content="hello"))
            paste = await api.get_paste(created.id)

    An existing httpx.AsyncClient may be passed in (its base_url must point
    at the /api prefix); the caller then owns its lifecycle.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.api_url,
            timeout=timeout,
        )

    async def __aenter__(self) -> "PasteApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, failure: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiRequestError(message=failure, context={"error_type": type(e).__name__})

        if response.status_code == 404:
            raise NotFoundError(resource="paste", resource_id=path.rsplit("/", 1)[-1])
        if response.is_error:
            logger.warning("%s %s answered %d", method, path, response.status_code)
            raise ApiRequestError(message=failure, status_code=response.status_code)
        return response

    async def create_paste(self, payload: PasteCreate) -> PasteCreated:
        response = await self._request(
            "POST",
            "/pastes",
            "Failed to create paste",
            json=payload.model_dump(by_alias=True),
        )
        return PasteCreated.model_validate(response.json())

    async def get_paste(self, paste_id: str) -> PasteResponse:
        """Fetch a paste. Counts as a view (and may burn it) on the server."""
        response = await self._request("GET", f"/pastes/{paste_id}", "Failed to fetch paste")
        return PasteResponse.model_validate(response.json())

    async def list_pastes(self) -> List[PasteSummary]:
        response = await self._request("GET", "/pastes", "Failed to fetch pastes")
        return [PasteSummary.model_validate(item) for item in response.json()]

    async def delete_paste(self, paste_id: str) -> MessageResponse:
        response = await self._request("DELETE", f"/pastes/{paste_id}", "Failed to delete paste")
        return MessageResponse.model_validate(response.json())
