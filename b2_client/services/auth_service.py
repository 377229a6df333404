"""
Authorization service for B2.

Handles the account authorization handshake and keeps the token fresh.
"""

from datetime import timedelta

import httpx
import structlog

from b2_client.api.endpoints.auth import authorize_account
from b2_client.api.http_client import AsyncHttpClient
from b2_client.config import B2Config
from b2_client.exceptions import AuthenticationError, RemoteAPIError, UnauthenticatedError
from b2_client.models.auth import AuthorizationState, Credentials
from b2_client.services.token_store import TokenStore

logger = structlog.get_logger(__name__)


class Authenticator:
    """
    Performs ``b2_authorize_account`` and records the result in a TokenStore.

    Exactly one request per call; never retried.
    """

    def __init__(
        self,
        http_client: AsyncHttpClient,
        config: B2Config,
        credentials: Credentials,
        store: TokenStore,
    ) -> None:
        """
        Args:
            http_client: HTTP client for API requests.
            config: Client configuration (authorization host, token lifetime).
            credentials: Account id and application key.
            store: Slot receiving the new authorization state.
        """
        self._http = http_client
        self._config = config
        self._credentials = credentials
        self._store = store

    async def authorize(self) -> AuthorizationState:
        """
        Authorize the account and store the new state.

        The expiry is measured from when the response was received.

        Returns:
            The new AuthorizationState.

        Raises:
            AuthenticationError: If the credentials are rejected or the
                service cannot be reached. The stored expiry is reset to now.
        """
        logger.info("Authorizing account")

        try:
            response = await authorize_account(
                self._http, self._config.api_url, self._credentials
            )
        except RemoteAPIError as e:
            self._store.expire()
            logger.error("Authorization rejected", status=e.status, code=e.code)
            msg = f"Authorization rejected: {e.message}"
            raise AuthenticationError(msg, status=e.status) from e
        except httpx.HTTPError as e:
            self._store.expire()
            logger.error("Authorization request failed", error_type=type(e).__name__)
            msg = "Authorization request failed"
            raise AuthenticationError(msg) from e

        received_at = self._store.now()
        try:
            state = AuthorizationState(
                token=response["authorizationToken"],
                api_url=response["apiUrl"],
                download_url=response["downloadUrl"],
                expires_at=received_at + timedelta(seconds=self._config.token_lifetime),
                account_id=response.get("accountId"),
                minimum_part_size=response.get("minimumPartSize"),
            )
        except KeyError as e:
            self._store.expire()
            msg = f"Authorization response missing field {e.args[0]!r}"
            raise AuthenticationError(msg) from e

        self._store.set(state)
        logger.info("Authorization successful", api_url=state.api_url)
        return state


class TokenGuard:
    """
    Gate every authenticated request goes through.

    Returns the cached state while it is fresh and refreshes it through the
    Authenticator once expired. The first authorization is never implicit.
    Concurrent callers that find the token expired each trigger their own
    refresh.
    """

    def __init__(self, authenticator: Authenticator, store: TokenStore) -> None:
        self._authenticator = authenticator
        self._store = store

    @property
    def is_authorized(self) -> bool:
        return self._store.has_state

    async def authorize(self) -> AuthorizationState:
        """Explicit (first) authorization."""
        return await self._authenticator.authorize()

    async def confirm(self) -> AuthorizationState:
        """
        Return a valid authorization state.

        Returns:
            The cached state if still valid, otherwise a freshly authorized one.

        Raises:
            UnauthenticatedError: If no authorization has ever succeeded.
            AuthenticationError: If the refresh fails.
        """
        state = self._store.state
        if state is None:
            raise UnauthenticatedError()

        if state.is_valid_at(self._store.now()):
            return state

        logger.debug("Authorization token expired, refreshing")
        return await self._authenticator.authorize()
