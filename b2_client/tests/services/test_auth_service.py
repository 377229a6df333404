import asyncio
import base64
from collections.abc import Callable
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from b2_client.api.http_client import AsyncHttpClient
from b2_client.config import B2Config
from b2_client.exceptions import AuthenticationError, UnauthenticatedError
from b2_client.models.auth import AuthorizationState, Credentials
from b2_client.services.auth_service import Authenticator, TokenGuard
from b2_client.services.token_store import TokenStore
from b2_client.tests.utils.mock_transport import (
    API_URL,
    DOWNLOAD_URL,
    FakeClock,
    MockTransport,
    make_authorize_response,
)

AUTHORIZE = "b2_authorize_account"


@pytest.fixture
def authenticator(
    http: AsyncHttpClient, config: B2Config, credentials: Credentials, store: TokenStore
) -> Authenticator:
    return Authenticator(http, config, credentials, store)


@pytest.fixture
def guard(authenticator: Authenticator, store: TokenStore) -> TokenGuard:
    return TokenGuard(authenticator, store)


# Authenticator


@pytest.mark.asyncio
async def test_authorize_stores_state_from_response(
    authenticator: Authenticator,
    store: TokenStore,
    clock: FakeClock,
    mock_transport: MockTransport,
    credentials: Credentials,
) -> None:
    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response())

    state = await authenticator.authorize()

    assert store.state is state
    assert state.token == "auth-token-1"
    assert state.api_url == API_URL
    assert state.download_url == DOWNLOAD_URL
    assert state.account_id == "acct-123"
    assert state.expires_at == clock() + timedelta(hours=24)

    request = mock_transport.calls(AUTHORIZE)[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.backblazeb2.com/b2api/v1/b2_authorize_account"
    raw = f"{credentials.account_id}:{credentials.application_key}".encode()
    assert request.headers["authorization"] == "Basic " + base64.b64encode(raw).decode()


@pytest.mark.asyncio
async def test_authorize_expiry_counts_from_response_time(
    http: AsyncHttpClient,
    config: B2Config,
    credentials: Credentials,
    store: TokenStore,
    clock: FakeClock,
) -> None:
    authenticator = Authenticator(http, config, credentials, store)
    issued_at = clock()

    async def respond(*args: object, **kwargs: object) -> dict:
        clock.advance(seconds=5)
        return make_authorize_response()

    http.request = AsyncMock(side_effect=respond)  # type: ignore[method-assign]

    state = await authenticator.authorize()

    assert state.expires_at == issued_at + timedelta(hours=24, seconds=5)


@pytest.mark.asyncio
async def test_authorize_rejected_raises_and_resets_only_expiry(
    authenticator: Authenticator,
    store: TokenStore,
    clock: FakeClock,
    mock_transport: MockTransport,
    make_state: Callable[..., AuthorizationState],
) -> None:
    previous = make_state(token="old-token")
    store.set(previous)
    clock.advance(hours=2)
    mock_transport.add_response(
        AUTHORIZE,
        status_code=401,
        json_data={"status": 401, "code": "unauthorized", "message": "Invalid key"},
    )

    with pytest.raises(AuthenticationError, match="Invalid key") as exc_info:
        await authenticator.authorize()

    assert exc_info.value.status == 401
    state = store.state
    assert state is not None
    assert state.expires_at == clock()
    assert state.token == "old-token"
    assert state.api_url == previous.api_url


@pytest.mark.asyncio
async def test_authorize_network_error_raises_authentication_error(
    authenticator: Authenticator, store: TokenStore, mock_transport: MockTransport
) -> None:
    mock_transport.add_error(AUTHORIZE, httpx.ConnectError("Connection refused"))

    with pytest.raises(AuthenticationError, match="Authorization request failed") as exc_info:
        await authenticator.authorize()

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert store.state is None
    assert len(mock_transport.calls(AUTHORIZE)) == 1


@pytest.mark.asyncio
async def test_authorize_incomplete_response_raises(
    authenticator: Authenticator, store: TokenStore, mock_transport: MockTransport
) -> None:
    response = make_authorize_response()
    del response["apiUrl"]
    mock_transport.add_response(AUTHORIZE, json_data=response)

    with pytest.raises(AuthenticationError, match="apiUrl"):
        await authenticator.authorize()

    assert store.state is None


# TokenGuard


@pytest.mark.asyncio
async def test_confirm_without_authorization_raises_unauthenticated(
    guard: TokenGuard, clock: FakeClock, mock_transport: MockTransport
) -> None:
    with pytest.raises(UnauthenticatedError):
        await guard.confirm()

    clock.advance(days=365)
    with pytest.raises(UnauthenticatedError):
        await guard.confirm()

    assert mock_transport.requests == []


@pytest.mark.asyncio
async def test_confirm_within_lifetime_returns_cached_state(
    guard: TokenGuard, clock: FakeClock, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response())
    authorized = await guard.authorize()

    clock.advance(hours=12)
    first = await guard.confirm()
    clock.advance(hours=11, minutes=59)
    second = await guard.confirm()

    assert first is authorized
    assert second is first
    assert len(mock_transport.requests) == 1


@pytest.mark.asyncio
async def test_confirm_after_expiry_authorizes_exactly_once(
    guard: TokenGuard, clock: FakeClock, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response("t1"))
    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response("t2"))
    await guard.authorize()

    clock.advance(hours=24)
    state = await guard.confirm()

    assert state.token == "t2"
    assert len(mock_transport.calls(AUTHORIZE)) == 2


@pytest.mark.asyncio
async def test_confirm_propagates_refresh_failure(
    guard: TokenGuard, clock: FakeClock, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response())
    mock_transport.add_error(AUTHORIZE, httpx.ReadTimeout("timed out"))
    await guard.authorize()

    clock.advance(hours=25)
    with pytest.raises(AuthenticationError):
        await guard.confirm()

    assert len(mock_transport.calls(AUTHORIZE)) == 2


@pytest.mark.asyncio
async def test_confirm_after_failed_authorization_retries_inside_old_window(
    guard: TokenGuard, clock: FakeClock, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response("t1"))
    mock_transport.add_response(AUTHORIZE, status_code=503, json_data={"message": "down"})
    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response("t3"))
    await guard.authorize()

    clock.advance(hours=1)
    with pytest.raises(AuthenticationError):
        await guard.authorize()

    clock.advance(hours=1)
    state = await guard.confirm()

    assert state.token == "t3"
    assert len(mock_transport.calls(AUTHORIZE)) == 3


@pytest.mark.asyncio
async def test_concurrent_confirms_on_expired_token_each_authorize(
    store: TokenStore, clock: FakeClock, make_state: Callable[..., AuthorizationState]
) -> None:
    store.set(make_state(token="stale", lifetime=timedelta(0)))
    fresh = make_state(token="fresh")

    async def slow_authorize() -> AuthorizationState:
        await asyncio.sleep(0)
        store.set(fresh)
        return fresh

    authenticator = Mock(spec=Authenticator)
    authenticator.authorize = AsyncMock(side_effect=slow_authorize)
    guard = TokenGuard(authenticator, store)

    results = await asyncio.gather(guard.confirm(), guard.confirm())

    # No single-flight: each caller that saw the expired token refreshes it.
    assert authenticator.authorize.await_count == 2
    assert [r.token for r in results] == ["fresh", "fresh"]


@pytest.mark.asyncio
async def test_is_authorized_tracks_store(
    guard: TokenGuard, mock_transport: MockTransport
) -> None:
    assert not guard.is_authorized

    mock_transport.add_response(AUTHORIZE, json_data=make_authorize_response())
    await guard.authorize()

    assert guard.is_authorized
