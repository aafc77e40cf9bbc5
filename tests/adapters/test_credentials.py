"""
Tests for credential providers.
"""
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from drivetime.adapters.credentials.portal import PortalTokenProvider
from drivetime.adapters.credentials.static import StaticTokenProvider
from drivetime.core.domain.errors import AuthError

pytestmark = pytest.mark.unit

PORTAL = "https://www.arcgis.com"
TOKEN_URL = f"{PORTAL}/sharing/rest/generateToken"


def _response(status: int = 200, payload=None) -> httpx.Response:
    return httpx.Response(status, json=payload or {}, request=httpx.Request("POST", TOKEN_URL))


@pytest.fixture
def mock_post():
    with patch("drivetime.adapters.credentials.portal.httpx.AsyncClient") as MockClient:
        client_instance = MockClient.return_value
        client_instance.post = AsyncMock()
        client_instance.aclose = AsyncMock()
        yield client_instance.post


@pytest.mark.asyncio
async def test_static_token():
    credential = await StaticTokenProvider("abc").fetch(PORTAL)

    assert credential.token == "abc"
    assert credential.authority_url == PORTAL
    assert "abc" not in repr(credential)


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, ""])
async def test_static_token_missing(token):
    with pytest.raises(AuthError):
        await StaticTokenProvider(token).fetch(PORTAL)


@pytest.mark.asyncio
async def test_portal_token(mock_post):
    mock_post.return_value = _response(payload={"token": "fresh", "expires": 1767225600000, "ssl": True})
    provider = PortalTokenProvider(username="user", password="pass", expiration=30)

    credential = await provider.fetch(PORTAL + "/")

    assert credential.token == "fresh"
    assert credential.expires_at.year == 2026
    assert mock_post.await_args.args[0] == TOKEN_URL
    form = mock_post.await_args.kwargs["data"]
    assert form["username"] == "user"
    assert form["expiration"] == "30"
    assert form["f"] == "json"


@pytest.mark.asyncio
async def test_portal_fetches_fresh_token_every_time(mock_post):
    mock_post.return_value = _response(payload={"token": "fresh"})
    provider = PortalTokenProvider(username="user", password="pass")

    await provider.fetch(PORTAL)
    await provider.fetch(PORTAL)

    assert mock_post.await_count == 2


@pytest.mark.asyncio
async def test_portal_without_account():
    with pytest.raises(AuthError):
        await PortalTokenProvider(username=None, password=None).fetch(PORTAL)


@pytest.mark.asyncio
async def test_portal_rejects_sign_in(mock_post):
    mock_post.return_value = _response(payload={
        "error": {"code": 400, "message": "Unable to generate token.", "details": ["Invalid username or password."]},
    })

    with pytest.raises(AuthError, match="Unable to generate token"):
        await PortalTokenProvider(username="user", password="wrong").fetch(PORTAL)


@pytest.mark.asyncio
async def test_portal_transport_error(mock_post):
    mock_post.side_effect = httpx.ConnectTimeout("timed out")

    with pytest.raises(AuthError):
        await PortalTokenProvider(username="user", password="pass").fetch(PORTAL)


@pytest.mark.asyncio
async def test_portal_http_error(mock_post):
    mock_post.return_value = _response(status=503)

    with pytest.raises(AuthError):
        await PortalTokenProvider(username="user", password="pass").fetch(PORTAL)


@pytest.mark.asyncio
async def test_portal_missing_token(mock_post):
    mock_post.return_value = _response(payload={"ssl": True})

    with pytest.raises(AuthError):
        await PortalTokenProvider(username="user", password="pass").fetch(PORTAL)
