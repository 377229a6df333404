"""
Bucket management service.

Each operation confirms the authorization token and issues one request.
"""

import re

import structlog

from b2_client.api.endpoints.bucket import (
    create_bucket,
    delete_bucket,
    get_upload_url,
    list_buckets,
    update_bucket,
)
from b2_client.api.http_client import AsyncHttpClient
from b2_client.models.auth import AuthorizationState, Credentials
from b2_client.models.bucket import Bucket, BucketType
from b2_client.models.upload import UploadUrlGrant
from b2_client.services.auth_service import TokenGuard

logger = structlog.get_logger(__name__)

_BUCKET_NAME_RE = re.compile(r"^[A-Za-z0-9-]{6,50}$")
_RESERVED_PREFIX = "b2-"


def validate_bucket_name(bucket_name: str) -> None:
    """
    Check a bucket name against the service's naming rules.

    Names are 6 to 50 characters of letters, digits and hyphens and may not
    start with ``b2-``.

    Raises:
        ValueError: If the name is not allowed.
    """
    if not _BUCKET_NAME_RE.match(bucket_name):
        msg = f"Invalid bucket name {bucket_name!r}: use 6-50 letters, digits or hyphens"
        raise ValueError(msg)
    if bucket_name.lower().startswith(_RESERVED_PREFIX):
        msg = f"Invalid bucket name {bucket_name!r}: names starting with 'b2-' are reserved"
        raise ValueError(msg)


class BucketService:
    """Create, delete, list and update buckets; hand out upload URLs."""

    def __init__(
        self,
        http: AsyncHttpClient,
        token_guard: TokenGuard,
        credentials: Credentials,
    ) -> None:
        """
        Args:
            http: Async HTTP client.
            token_guard: Supplies a valid authorization for every call.
            credentials: Account whose buckets are managed.
        """
        self._http = http
        self._guard = token_guard
        self._credentials = credentials

    def _account_id(self, auth: AuthorizationState) -> str:
        return auth.account_id or self._credentials.account_id

    async def create_bucket(self, bucket_name: str, is_private: bool = False) -> Bucket:
        """
        Create a bucket.

        Raises:
            ValueError: If the bucket name is invalid.
            UnauthenticatedError: If the account was never authorized.
            RemoteAPIError: If the service rejects the request.
        """
        validate_bucket_name(bucket_name)
        auth = await self._guard.confirm()
        bucket = await create_bucket(
            self._http,
            auth,
            self._account_id(auth),
            bucket_name,
            BucketType.from_private(is_private),
        )
        logger.info("Bucket created", bucket_id=bucket.bucket_id, bucket_type=bucket.bucket_type)
        return bucket

    async def delete_bucket(self, bucket_id: str) -> Bucket:
        auth = await self._guard.confirm()
        bucket = await delete_bucket(self._http, auth, self._account_id(auth), bucket_id)
        logger.info("Bucket deleted", bucket_id=bucket_id)
        return bucket

    async def list_buckets(self) -> list[Bucket]:
        auth = await self._guard.confirm()
        return await list_buckets(self._http, auth, self._account_id(auth))

    async def update_bucket(self, bucket_id: str, is_private: bool) -> Bucket:
        """Switch a bucket between public and private."""
        auth = await self._guard.confirm()
        bucket = await update_bucket(
            self._http,
            auth,
            self._account_id(auth),
            bucket_id,
            BucketType.from_private(is_private),
        )
        logger.info("Bucket updated", bucket_id=bucket_id, bucket_type=bucket.bucket_type)
        return bucket

    async def get_upload_url(self, bucket_id: str) -> UploadUrlGrant:
        """Request a fresh single-use upload URL for a bucket."""
        auth = await self._guard.confirm()
        return await get_upload_url(self._http, auth, bucket_id)
