"""Tests for the Docs/Sheets REST client error mapping."""

import httpx
import pytest

from app.errors import AuthError, NotFoundError, UpstreamError
from app.services.google_api import GoogleApiClient


def client_for(handler, settings) -> GoogleApiClient:
    return GoogleApiClient(settings, transport=httpx.MockTransport(handler))


async def test_get_values_sends_bearer_token_and_stringifies_cells(settings):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"range": "Prompts!B1:D3", "values": [["Title", 12], [True]]})

    rows = await client_for(handler, settings).get_values("sheet-1", "Prompts!B:D", "tok")

    assert rows == [["Title", "12"], ["True"]]
    [request] = seen
    assert request.headers["Authorization"] == "Bearer tok"
    assert request.url.host == "sheets.googleapis.com"
    assert request.url.path == "/v4/spreadsheets/sheet-1/values/Prompts!B:D"


async def test_get_values_empty_range(settings):
    def handler(request):
        return httpx.Response(200, json={"range": "D:H"})

    assert await client_for(handler, settings).get_values("sheet-1", "D:H", "tok") == []


async def test_get_document(settings):
    def handler(request):
        assert request.url.path == "/v1/documents/doc-1"
        return httpx.Response(200, json={"documentId": "doc-1", "body": {"content": []}})

    document = await client_for(handler, settings).get_document("doc-1", "tok")

    assert document["documentId"] == "doc-1"


@pytest.mark.parametrize(
    "status_code, error_type",
    [
        (401, AuthError),
        (403, UpstreamError),
        (404, NotFoundError),
        (500, UpstreamError),
    ],
)
async def test_http_errors_map_to_taxonomy(settings, status_code, error_type):
    def handler(request):
        return httpx.Response(status_code, json={"error": {"message": "nope"}})

    with pytest.raises(error_type):
        await client_for(handler, settings).get_document("doc-1", "tok")


async def test_forbidden_has_permission_hint(settings):
    def handler(request):
        return httpx.Response(403, text="forbidden")

    with pytest.raises(UpstreamError) as exc_info:
        await client_for(handler, settings).get_values("sheet-1", "D:H", "tok")

    assert "Permission denied" in exc_info.value.public_message


async def test_transport_failure_is_upstream_error(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await client_for(handler, settings).get_document("doc-1", "tok")

    assert exc_info.value.public_message == "Upstream service error"
