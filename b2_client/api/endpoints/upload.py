"""File upload endpoint."""

from collections.abc import AsyncIterable
from urllib.parse import quote

from b2_client.api.http_client import AsyncHttpClient
from b2_client.models.upload import FileDigest, UploadedFile, UploadUrlGrant

# Characters left as-is by JavaScript's encodeURIComponent.
_FILE_NAME_SAFE = "-_.!~*'()"


def encode_file_name(file_name: str) -> str:
    """Percent-encode a file name for the ``X-Bz-File-Name`` header."""
    return quote(file_name, safe=_FILE_NAME_SAFE)


async def upload_file(
    http: AsyncHttpClient,
    grant: UploadUrlGrant,
    *,
    file_name: str,
    content: AsyncIterable[bytes],
    digest: FileDigest,
    content_type: str,
) -> UploadedFile:
    """
    Stream a file body to an upload URL.

    Args:
        http: Configured async HTTP client.
        grant: Upload URL and token from ``b2_get_upload_url``.
        file_name: Name to store the file under (unencoded).
        content: File body chunks.
        digest: Size and SHA-1 declared in the request headers.
        content_type: Content-Type header value.

    Returns:
        Upload confirmation from the service.
    """
    response = await http.request(
        "POST",
        grant.upload_url,
        headers={
            "Authorization": grant.upload_token,
            "X-Bz-File-Name": encode_file_name(file_name),
            "Content-Type": content_type,
            "Content-Length": str(digest.byte_length),
            "X-Bz-Content-Sha1": digest.hex_digest,
        },
        content=content,
    )
    return UploadedFile.from_api(response)
