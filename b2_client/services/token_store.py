"""In-memory holder of the current authorization state."""

import dataclasses
from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from b2_client.models.auth import AuthorizationState

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenStore:
    """
    Single slot for the authorization state of one client instance.

    The state is replaced wholesale on every authorization. The only partial
    update is ``expire()``, which moves ``expires_at`` and leaves the token
    and URLs untouched.

    Not guarded by a lock: a check followed by a refresh is not atomic, so
    concurrent callers may each refresh.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        """
        Args:
            clock: Wall-clock source returning timezone-aware datetimes.
        """
        self._clock = clock or utc_now
        self._state: AuthorizationState | None = None

    def now(self) -> datetime:
        return self._clock()

    @property
    def state(self) -> AuthorizationState | None:
        return self._state

    @property
    def has_state(self) -> bool:
        """Whether an authorization has ever succeeded."""
        return self._state is not None

    def set(self, state: AuthorizationState) -> None:
        self._state = state

    def is_valid(self, now: datetime | None = None) -> bool:
        """Check if a state exists and its token has not expired at ``now``."""
        if self._state is None:
            return False
        return self._state.is_valid_at(now or self.now())

    def expire(self, now: datetime | None = None) -> None:
        """Force the next validity check to fail. No-op if never authorized."""
        if self._state is None:
            return
        self._state = dataclasses.replace(self._state, expires_at=now or self.now())
        logger.debug("Authorization expiry reset")

    def clear(self) -> None:
        self._state = None
