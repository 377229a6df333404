"""
File upload service for B2.

Runs the upload pipeline: size probe, hash, token check, upload URL, stream.
"""

from pathlib import Path

import structlog

from b2_client.api.endpoints.upload import upload_file
from b2_client.api.http_client import AsyncHttpClient
from b2_client.config import B2Config
from b2_client.core.hasher import ContentHasher
from b2_client.models.upload import FileDigest, UploadedFile, UploadTarget
from b2_client.services.auth_service import TokenGuard
from b2_client.services.bucket_service import BucketService

logger = structlog.get_logger(__name__)


class UploadOrchestrator:
    """
    Uploads local files in a single request.

    Steps run strictly in order and the first failure aborts the rest. Only
    the last step has a remote side effect, so nothing is rolled back.
    """

    def __init__(
        self,
        http: AsyncHttpClient,
        config: B2Config,
        token_guard: TokenGuard,
        bucket_service: BucketService,
        hasher: ContentHasher | None = None,
    ) -> None:
        """
        Args:
            http: Async HTTP client.
            config: Client configuration (content type, chunk size).
            token_guard: Supplies a valid authorization.
            bucket_service: Hands out upload URLs.
            hasher: File hasher; built from the config if omitted.
        """
        self._http = http
        self._config = config
        self._guard = token_guard
        self._buckets = bucket_service
        self._hasher = hasher or ContentHasher(config.hash_chunk_size)

    async def upload(self, bucket_id: str, file_path: Path | str) -> UploadedFile:
        """
        Upload a local file to a bucket under its basename.

        Args:
            bucket_id: Target bucket.
            file_path: Local file to upload.

        Returns:
            The service's upload confirmation. Its content hash is not
            compared with the local one.

        Raises:
            FileAccessError: If the file cannot be inspected, read or streamed.
            UnauthenticatedError: If the account was never authorized.
            AuthenticationError: If the token refresh fails.
            RemoteAPIError: If the upload URL request or the upload is rejected.
        """
        target = UploadTarget(bucket_id=bucket_id, file_path=Path(file_path))

        size = await self._hasher.stat(target.file_path)
        sha1 = await self._hasher.sha1(target.file_path)
        digest = FileDigest(hex_digest=sha1, byte_length=size)

        await self._guard.confirm()
        grant = await self._buckets.get_upload_url(target.bucket_id)

        logger.info(
            "Uploading file",
            bucket_id=target.bucket_id,
            file_name=target.file_name,
            size=digest.byte_length,
        )
        uploaded = await upload_file(
            self._http,
            grant,
            file_name=target.file_name,
            content=self._hasher.iter_chunks(target.file_path),
            digest=digest,
            content_type=self._config.content_type,
        )
        logger.info("File uploaded", file_id=uploaded.file_id, size=uploaded.content_length)
        return uploaded
