"""
B2 client configuration.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class B2Config:
    """
    Attributes:
        api_url: Base URL for the account authorization call.
        api_version: API path prefix appended to every base URL.
        timeout: Request timeout in seconds.
        user_agent: User-Agent header value.
        token_lifetime: Seconds an authorization token is trusted after it was granted.
        hash_chunk_size: Bytes read per chunk when hashing or streaming a file.
        content_type: Content-Type sent with uploads.
    """

    api_url: str = "https://api.backblazeb2.com"
    api_version: str = "b2api/v1"
    timeout: float = 30.0
    user_agent: str = "b2-client-python/0.1.0"
    token_lifetime: float = 24 * 60 * 60
    hash_chunk_size: int = 64 * 1024
    content_type: str = "b2/x-auto"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.token_lifetime <= 0:
            msg = "token_lifetime must be positive"
            raise ValueError(msg)
        if self.hash_chunk_size <= 0:
            msg = "hash_chunk_size must be positive"
            raise ValueError(msg)
        if not self.api_version or self.api_version.startswith("/"):
            msg = "api_version must be a relative path"
            raise ValueError(msg)

    def endpoint(self, base_url: str, operation: str) -> str:
        """Build the full URL of an API operation under ``base_url``."""
        return f"{base_url.rstrip('/')}/{self.api_version}/{operation}"
