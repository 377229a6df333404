"""
B2 client exception hierarchy.

All exceptions inherit from B2Error for easy catching.
"""

from typing import Any


class B2Error(Exception):
    """Base exception for all b2_client errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class UnauthenticatedError(B2Error):
    """No authorization has ever succeeded on this client."""

    def __init__(
        self, message: str = "Not authorized. Call authorize_account() first."
    ) -> None:
        super().__init__(message)


class AuthenticationError(B2Error):
    """Account authorization was rejected or could not reach the service."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message, status=status)
        self.status = status


class FileAccessError(B2Error):
    """Local file is missing, unreadable or its stream was interrupted."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class RemoteAPIError(B2Error):
    """The service answered a bucket or upload call with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        code: str | None = None,
        endpoint: str | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message, status=status, code=code, endpoint=endpoint)
        self.status = status
        self.code = code
        self.endpoint = endpoint
        self.body = body
