"""Process-wide holder for the current bearer credential."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from models.credential import Credential


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CredentialStore:
    """Hold one `Credential` and decide when it needs refreshing.

    The token and its fetch time live in a single immutable object that is
    replaced wholesale, so concurrent readers see either the old or the new
    credential, never a mix.
    """

    def __init__(self, ttl: timedelta, clock: Callable[[], datetime] = utc_now) -> None:
        self.ttl = ttl
        self._clock = clock
        self._credential: Optional[Credential] = None

    def get(self) -> Optional[Credential]:
        """Return the current credential, or None if none was ever obtained."""
        return self._credential

    def set(self, token: str) -> Credential:
        """Replace the credential with `token`, stamped with the current time."""
        if not token:
            raise ValueError("Token must be a non-empty string.")
        credential = Credential(token=token, fetched_at=self._clock())
        self._credential = credential
        return credential

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        """True when there is no credential or it is at least `ttl` old."""
        credential = self._credential
        if credential is None:
            return True
        now = now or self._clock()
        return now - credential.fetched_at >= self.ttl
