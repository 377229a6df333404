"""
Business logic services for the B2 client.
"""

from b2_client.services.auth_service import Authenticator, TokenGuard
from b2_client.services.bucket_service import BucketService
from b2_client.services.token_store import TokenStore
from b2_client.services.upload_service import UploadOrchestrator

__all__ = [
    "Authenticator",
    "BucketService",
    "TokenGuard",
    "TokenStore",
    "UploadOrchestrator",
]
