"""Account authorization endpoint."""

from typing import Any

from b2_client.api.http_client import AsyncHttpClient
from b2_client.models.auth import Credentials


async def authorize_account(
    http: AsyncHttpClient, base_url: str, credentials: Credentials
) -> dict[str, Any]:
    """
    Exchange account credentials for an authorization token.

    Args:
        http: Configured async HTTP client.
        base_url: Authorization host (not the per-account apiUrl).
        credentials: Account id and application key, sent as basic auth.

    Returns:
        Response with authorizationToken, apiUrl, downloadUrl, accountId.
    """
    return await http.request(
        "POST",
        http.operation_url(base_url, "b2_authorize_account"),
        auth=(credentials.account_id, credentials.application_key),
    )
