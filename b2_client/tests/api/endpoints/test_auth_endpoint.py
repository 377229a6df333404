from unittest.mock import AsyncMock, Mock

import pytest

from b2_client.api.endpoints.auth import authorize_account
from b2_client.config import B2Config
from b2_client.models.auth import Credentials
from b2_client.tests.utils.mock_transport import make_authorize_response


@pytest.mark.asyncio
async def test_authorize_account_posts_basic_auth(credentials: Credentials) -> None:
    mock_http = Mock()
    mock_http.operation_url.side_effect = B2Config().endpoint
    mock_http.request = AsyncMock(return_value=make_authorize_response())

    result = await authorize_account(mock_http, "https://api.backblazeb2.com", credentials)

    mock_http.request.assert_called_once_with(
        "POST",
        "https://api.backblazeb2.com/b2api/v1/b2_authorize_account",
        auth=(credentials.account_id, credentials.application_key),
    )
    assert result["authorizationToken"] == "auth-token-1"
