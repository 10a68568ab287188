"""
Pastebin UI — API Client Tests
================================

What:  PasteApiClient against the real app (ASGITransport) and against
       httpx.MockTransport for failure modes the app never produces.
"""

import httpx
import pytest
import pytest_asyncio

from pastebin.exceptions import ApiRequestError, NotFoundError
from pastebin.schemas.paste import PasteCreate
from pastebin.ui import PasteApiClient, PastebinUI, View


@pytest_asyncio.fixture
async def api(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test/api") as client:
        yield PasteApiClient(client=client)


def _mock_api(handler) -> PasteApiClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test/api")
    return PasteApiClient(client=client)


class TestAgainstApp:

    @pytest.mark.asyncio
    async def test_full_cycle(self, api):
        created = await api.create_paste(
            PasteCreate(content="from the client", language="markdown", burn_after_read=True)
        )

        listed = await api.list_pastes()
        assert [p.id for p in listed] == [created.id]
        assert listed[0].burn_after_read is True

        paste = await api.get_paste(created.id)
        assert paste.content == "from the client"
        assert paste.language == "markdown"
        assert paste.views == 1

        result = await api.delete_paste(created.id)
        assert result.message == "Paste deleted successfully"

        with pytest.raises(NotFoundError):
            await api.get_paste(created.id)

    @pytest.mark.asyncio
    async def test_empty_content_is_request_error(self, api):
        with pytest.raises(ApiRequestError) as excinfo:
            await api.create_paste(PasteCreate(content=""))

        assert excinfo.value.status_code == 400

    @pytest.mark.asyncio
    async def test_ui_over_http(self, api):
        ui = PastebinUI(api)
        ui.draft.content = "through the wire"

        paste_id = await ui.create_paste()
        await ui.view_paste(ui.pastes[0])

        assert ui.view is View.VIEW
        assert ui.selected.id == paste_id
        assert ui.selected.views == 1


class TestFailureMapping:

    @pytest.mark.asyncio
    async def test_server_error(self):
        api = _mock_api(lambda request: httpx.Response(500, json={"error": "server_error"}))

        with pytest.raises(ApiRequestError) as excinfo:
            await api.list_pastes()

        assert excinfo.value.status_code == 500
        assert excinfo.value.message == "Failed to fetch pastes"
        await api.aclose()

    @pytest.mark.asyncio
    async def test_not_found_carries_id(self):
        api = _mock_api(lambda request: httpx.Response(404, json={"error": "not_found"}))

        with pytest.raises(NotFoundError) as excinfo:
            await api.delete_paste("ab12cd34")

        assert excinfo.value.resource_id == "ab12cd34"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        api = _mock_api(refuse)

        with pytest.raises(ApiRequestError) as excinfo:
            await api.get_paste("ab12cd34")

        assert excinfo.value.status_code is None
        assert excinfo.value.context["error_type"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_request_body_uses_camel_case(self):
        seen = {}

        def capture(request):
            seen["path"] = request.url.path
            seen["body"] = request.content
            return httpx.Response(200, json={"id": "ab12cd34"})

        api = _mock_api(capture)
        created = await api.create_paste(PasteCreate(content="x", expires_in=1000, is_private=True))

        assert created.id == "ab12cd34"
        assert seen["path"] == "/api/pastes"
        assert b'"expiresIn":1000' in seen["body"].replace(b" ", b"")
        assert b'"isPrivate":true' in seen["body"].replace(b" ", b"")
        assert b'"burnAfterRead":false' in seen["body"].replace(b" ", b"")
