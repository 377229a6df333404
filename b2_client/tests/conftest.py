from collections.abc import AsyncIterator, Callable
from datetime import timedelta

import pytest
import pytest_asyncio

from b2_client.api.http_client import AsyncHttpClient
from b2_client.config import B2Config
from b2_client.models.auth import AuthorizationState, Credentials
from b2_client.services.token_store import TokenStore
from b2_client.tests.utils.mock_transport import (
    ACCOUNT_ID,
    API_URL,
    APPLICATION_KEY,
    DOWNLOAD_URL,
    FakeClock,
    MockTransport,
)


@pytest.fixture
def config() -> B2Config:
    return B2Config()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(account_id=ACCOUNT_ID, application_key=APPLICATION_KEY)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TokenStore:
    return TokenStore(clock)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest_asyncio.fixture
async def http(config: B2Config, mock_transport: MockTransport) -> AsyncIterator[AsyncHttpClient]:
    async with AsyncHttpClient(config, transport=mock_transport) as client:
        yield client


@pytest.fixture
def make_state(clock: FakeClock) -> Callable[..., AuthorizationState]:
    def _make(
        token: str = "auth-token-1", lifetime: timedelta = timedelta(hours=24)
    ) -> AuthorizationState:
        return AuthorizationState(
            token=token,
            api_url=API_URL,
            download_url=DOWNLOAD_URL,
            expires_at=clock() + lifetime,
            account_id=ACCOUNT_ID,
        )

    return _make
