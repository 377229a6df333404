"""Bucket-related API endpoints (create, delete, list, update, upload URL)."""

from typing import Any

from b2_client.api.http_client import AsyncHttpClient
from b2_client.models.auth import AuthorizationState
from b2_client.models.bucket import Bucket, BucketType
from b2_client.models.upload import UploadUrlGrant


async def _call(
    http: AsyncHttpClient, auth: AuthorizationState, operation: str, body: dict[str, Any]
) -> dict[str, Any]:
    return await http.request(
        "POST",
        http.operation_url(auth.api_url, operation),
        json=body,
        headers={"Authorization": auth.token},
    )


async def create_bucket(
    http: AsyncHttpClient,
    auth: AuthorizationState,
    account_id: str,
    bucket_name: str,
    bucket_type: BucketType,
) -> Bucket:
    """Create a bucket with the given name and access policy."""
    response = await _call(
        http,
        auth,
        "b2_create_bucket",
        {"accountId": account_id, "bucketName": bucket_name, "bucketType": str(bucket_type)},
    )
    return Bucket.from_api(response)


async def delete_bucket(
    http: AsyncHttpClient, auth: AuthorizationState, account_id: str, bucket_id: str
) -> Bucket:
    """Delete a bucket. Returns the bucket as it was before deletion."""
    response = await _call(
        http, auth, "b2_delete_bucket", {"accountId": account_id, "bucketId": bucket_id}
    )
    return Bucket.from_api(response)


async def list_buckets(
    http: AsyncHttpClient, auth: AuthorizationState, account_id: str
) -> list[Bucket]:
    """List all buckets of an account."""
    response = await _call(http, auth, "b2_list_buckets", {"accountId": account_id})
    return [Bucket.from_api(b) for b in response.get("buckets", [])]


async def update_bucket(
    http: AsyncHttpClient,
    auth: AuthorizationState,
    account_id: str,
    bucket_id: str,
    bucket_type: BucketType,
) -> Bucket:
    """Switch the access policy of a bucket."""
    response = await _call(
        http,
        auth,
        "b2_update_bucket",
        {"accountId": account_id, "bucketId": bucket_id, "bucketType": str(bucket_type)},
    )
    return Bucket.from_api(response)


async def get_upload_url(
    http: AsyncHttpClient, auth: AuthorizationState, bucket_id: str
) -> UploadUrlGrant:
    """Request a single-use upload URL and token for a bucket."""
    response = await _call(http, auth, "b2_get_upload_url", {"bucketId": bucket_id})
    return UploadUrlGrant.from_api(response)
