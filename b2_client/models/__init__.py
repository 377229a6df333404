"""
Domain models for the B2 client.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from b2_client.models.auth import AuthorizationState, Credentials
from b2_client.models.bucket import Bucket, BucketType
from b2_client.models.upload import FileDigest, UploadedFile, UploadTarget, UploadUrlGrant

__all__ = [
    # Auth
    "Credentials",
    "AuthorizationState",
    # Buckets
    "Bucket",
    "BucketType",
    # Uploads
    "UploadTarget",
    "UploadUrlGrant",
    "FileDigest",
    "UploadedFile",
]
