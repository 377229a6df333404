"""
Backblaze B2 Python Client.

A modern, async Python client for the B2 API: account authorization,
bucket management and file uploads.

Example:
    ```python
    from b2_client import B2Client

    async with B2Client("account-id", "application-key") as client:
        await client.authorize_account()

        # List buckets
        for bucket in await client.list_buckets():
            print(bucket.bucket_name)

        # Upload a file
        await client.upload_file(bucket.bucket_id, "report.pdf")
    ```
"""

from b2_client.client import B2Client
from b2_client.config import B2Config
from b2_client.exceptions import (
    AuthenticationError,
    B2Error,
    FileAccessError,
    RemoteAPIError,
    UnauthenticatedError,
)
from b2_client.models import (
    AuthorizationState,
    Bucket,
    BucketType,
    FileDigest,
    UploadedFile,
    UploadUrlGrant,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "B2Client",
    "B2Config",
    # Models
    "AuthorizationState",
    "Bucket",
    "BucketType",
    "FileDigest",
    "UploadedFile",
    "UploadUrlGrant",
    # Exceptions
    "B2Error",
    "UnauthenticatedError",
    "AuthenticationError",
    "FileAccessError",
    "RemoteAPIError",
]
