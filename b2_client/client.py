"""
B2 client facade.

This is the main entry point for users of the library. It provides a clean,
high-level API that hides the token handling and upload pipeline.
"""

import asyncio
from pathlib import Path
from typing import Self

import httpx
import structlog

from b2_client.api.http_client import AsyncHttpClient
from b2_client.config import B2Config
from b2_client.core.hasher import ContentHasher
from b2_client.models.auth import AuthorizationState, Credentials
from b2_client.models.bucket import Bucket
from b2_client.models.upload import UploadedFile, UploadUrlGrant
from b2_client.services.auth_service import Authenticator, TokenGuard
from b2_client.services.bucket_service import BucketService
from b2_client.services.token_store import Clock, TokenStore
from b2_client.services.upload_service import UploadOrchestrator

logger = structlog.get_logger(__name__)


class B2Client:
    """
    Async client for Backblaze B2.

    Example:
        ```python
        async with B2Client(account_id, application_key) as client:
            await client.authorize_account()

            bucket = await client.create_bucket("my-photos", is_private=True)
            uploaded = await client.upload_file(bucket.bucket_id, "cat.jpg")
            print(uploaded.file_id)
        ```

    ``authorize_account()`` must be called once before any other operation.
    Afterwards the token is refreshed automatically when it expires.
    """

    def __init__(
        self,
        account_id: str,
        application_key: str,
        config: B2Config | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        Args:
            account_id: B2 account (or key) identifier.
            application_key: Secret application key.
            config: Client configuration. Uses defaults if not provided.
            transport: Optional httpx transport for testing.
            clock: Optional wall-clock source for token expiry.
        """
        self._config = config or B2Config()
        self._credentials = Credentials(account_id=account_id, application_key=application_key)
        self._transport = transport

        self._store = TokenStore(clock)
        self._http: AsyncHttpClient | None = None
        self._guard: TokenGuard | None = None
        self._bucket_service: BucketService | None = None
        self._upload_service: UploadOrchestrator | None = None

        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def __aenter__(self) -> Self:
        await self._ensure_initialized()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        await self.close()

    async def _ensure_initialized(self) -> None:
        async with self._init_lock:
            if self._initialized:
                return

            self._http = AsyncHttpClient(self._config, transport=self._transport)
            await self._http.__aenter__()

            authenticator = Authenticator(self._http, self._config, self._credentials, self._store)
            self._guard = TokenGuard(authenticator, self._store)
            self._bucket_service = BucketService(self._http, self._guard, self._credentials)
            self._upload_service = UploadOrchestrator(
                self._http,
                self._config,
                self._guard,
                self._bucket_service,
                ContentHasher(self._config.hash_chunk_size),
            )

            self._initialized = True
            logger.debug("Client initialized")

    async def close(self) -> None:
        """Close the client and forget the authorization."""
        async with self._init_lock:
            if self._http:
                await self._http.__aexit__(None, None, None)
                self._http = None

            self._store.clear()
            self._guard = None
            self._bucket_service = None
            self._upload_service = None
            self._initialized = False
            logger.debug("Client closed")

    @property
    def is_authorized(self) -> bool:
        """Check if an authorization has succeeded (it may have expired since)."""
        return self._store.has_state

    @property
    def authorization(self) -> AuthorizationState | None:
        """Current authorization state, without refreshing it."""
        return self._store.state

    async def authorize_account(self) -> AuthorizationState:
        """
        Authorize the account. Required once before any other call.

        Raises:
            AuthenticationError: If the credentials are rejected or the service
                cannot be reached.
        """
        await self._ensure_initialized()
        if self._guard is None:
            raise RuntimeError("Client not initialized")
        return await self._guard.authorize()

    async def confirm_authorization_token(self) -> AuthorizationState:
        """
        Return a valid authorization, refreshing an expired token.

        Raises:
            UnauthenticatedError: If authorize_account() never succeeded.
            AuthenticationError: If the refresh fails.
        """
        await self._ensure_initialized()
        if self._guard is None:
            raise RuntimeError("Client not initialized")
        return await self._guard.confirm()

    async def create_bucket(self, bucket_name: str, is_private: bool = False) -> Bucket:
        """
        Create a bucket.

        Args:
            bucket_name: 6-50 letters, digits or hyphens, not starting with "b2-".
            is_private: Create an ``allPrivate`` bucket instead of ``allPublic``.
        """
        return await (await self._buckets()).create_bucket(bucket_name, is_private)

    async def delete_bucket(self, bucket_id: str) -> Bucket:
        return await (await self._buckets()).delete_bucket(bucket_id)

    async def list_buckets(self) -> list[Bucket]:
        return await (await self._buckets()).list_buckets()

    async def update_bucket(self, bucket_id: str, is_private: bool) -> Bucket:
        return await (await self._buckets()).update_bucket(bucket_id, is_private)

    async def get_upload_url(self, bucket_id: str) -> UploadUrlGrant:
        return await (await self._buckets()).get_upload_url(bucket_id)

    async def upload_file(self, bucket_id: str, file_path: Path | str) -> UploadedFile:
        """
        Upload a local file to a bucket.

        Args:
            bucket_id: Target bucket.
            file_path: Local file; stored under its basename.

        Returns:
            Upload confirmation from the service.

        Raises:
            FileAccessError: If the file cannot be read.
            UnauthenticatedError: If authorize_account() never succeeded.
            AuthenticationError: If the token refresh fails.
            RemoteAPIError: If the service rejects the upload.
        """
        await self._ensure_initialized()
        if self._upload_service is None:
            raise RuntimeError("Client not initialized")
        return await self._upload_service.upload(bucket_id, file_path)

    async def _buckets(self) -> BucketService:
        await self._ensure_initialized()
        if self._bucket_service is None:
            raise RuntimeError("Client not initialized")
        return self._bucket_service
