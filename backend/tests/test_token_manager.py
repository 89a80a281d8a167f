"""Tests for token expiry checks and best-effort refresh."""

from urllib.parse import parse_qs

import httpx

from app.services.token_manager import (
    GOOGLE_TOKEN_URL,
    TokenData,
    TokenManager,
    is_token_expired,
)

NOW = 1_700_000_000_000
MINUTE = 60 * 1000


def token(**fields) -> TokenData:
    return TokenData.model_validate({"accessToken": "old-token", **fields})


def test_expiry_date_inside_margin_is_expired():
    assert is_token_expired(token(expiryDate=NOW + 4 * MINUTE), now_ms=NOW)
    assert not is_token_expired(token(expiryDate=NOW + 10 * MINUTE), now_ms=NOW)


def test_timestamp_only_assumes_one_hour_lifetime():
    assert is_token_expired(token(timestamp=NOW - 61 * MINUTE), now_ms=NOW)
    assert not is_token_expired(token(timestamp=NOW - 30 * MINUTE), now_ms=NOW)


def test_no_times_is_expired():
    assert is_token_expired(token(), now_ms=NOW)


class TokenEndpoint:
    """MockTransport handler standing in for the Google token endpoint."""

    def __init__(self, status_code: int = 200, payload: dict | None = None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {"access_token": "new-token"}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


async def test_refresh_posts_refresh_grant(settings):
    endpoint = TokenEndpoint()
    manager = TokenManager(settings, transport=httpx.MockTransport(endpoint))

    result = await manager.refresh_access_token("refresh-1")

    assert result.success
    assert result.access_token == "new-token"
    [request] = endpoint.requests
    assert str(request.url) == GOOGLE_TOKEN_URL
    form = parse_qs(request.content.decode())
    assert form["grant_type"] == ["refresh_token"]
    assert form["refresh_token"] == ["refresh-1"]
    assert form["client_id"] == ["client-id"]


async def test_refresh_failure_is_reported_not_raised(settings):
    endpoint = TokenEndpoint(status_code=400, payload={"error": "invalid_grant"})
    manager = TokenManager(settings, transport=httpx.MockTransport(endpoint))

    result = await manager.refresh_access_token("refresh-1")

    assert not result.success
    assert result.error


async def test_refresh_without_access_token_in_response(settings):
    endpoint = TokenEndpoint(payload={"token_type": "Bearer"})
    manager = TokenManager(settings, transport=httpx.MockTransport(endpoint))

    result = await manager.refresh_access_token("refresh-1")

    assert result.error == "No access token returned from refresh"


async def test_refresh_requires_client_credentials(settings):
    settings.google_client_secret = None
    endpoint = TokenEndpoint()
    manager = TokenManager(settings, transport=httpx.MockTransport(endpoint))

    result = await manager.refresh_access_token("refresh-1")

    assert not result.success
    assert endpoint.requests == []


async def test_valid_token_refreshes_expired_token(settings):
    endpoint = TokenEndpoint()
    manager = TokenManager(settings, transport=httpx.MockTransport(endpoint))

    result = await manager.get_valid_access_token(
        "old-token",
        token(refreshToken="refresh-1", expiryDate=1),
    )

    assert result.success
    assert result.access_token == "new-token"


async def test_valid_token_falls_back_to_original(settings):
    endpoint = TokenEndpoint(status_code=500, payload={})
    manager = TokenManager(settings, transport=httpx.MockTransport(endpoint))

    expired = await manager.get_valid_access_token("old-token", token(refreshToken="r", expiryDate=1))
    no_refresh = await manager.get_valid_access_token("old-token", token(expiryDate=1))
    no_data = await manager.get_valid_access_token("old-token", None)

    for result in (expired, no_refresh, no_data):
        assert result.access_token == "old-token"
        assert not result.success
        assert result.error
    assert len(endpoint.requests) == 1


async def test_fresh_token_is_not_refreshed(settings):
    endpoint = TokenEndpoint()
    manager = TokenManager(settings, transport=httpx.MockTransport(endpoint))
    far_future = 10 ** 15

    result = await manager.get_valid_access_token("old-token", token(expiryDate=far_future))

    assert result.success
    assert result.access_token == "old-token"
    assert endpoint.requests == []
