"""
Authorization-related domain models.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class Credentials:
    """
    Account credentials used for basic authentication.

    Attributes:
        account_id: B2 account (or key) identifier.
        application_key: Secret application key.
    """

    account_id: str
    application_key: str = field(repr=False)


@dataclass(frozen=True, kw_only=True)
class AuthorizationState:
    """
    Result of a successful ``b2_authorize_account`` call.

    Attributes:
        token: Authorization token sent with every authenticated request.
        api_url: Base URL for all API calls except uploads and downloads.
        download_url: Base URL for downloading files.
        expires_at: Wall-clock instant after which the token is refreshed.
        account_id: Account the token was granted to.
        minimum_part_size: Smallest allowed part size reported by the service.
    """

    token: str = field(repr=False)
    api_url: str
    download_url: str
    expires_at: datetime
    account_id: str | None = None
    minimum_part_size: int | None = None

    def is_valid_at(self, now: datetime) -> bool:
        """Check whether the token is still trusted at ``now``."""
        return now < self.expires_at
