from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Credential:
    """A bearer token together with the moment it was obtained.

    Instances are immutable so the store can replace them with a single
    reference assignment.
    """

    token: str
    fetched_at: datetime
