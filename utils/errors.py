"""Error taxonomy for the detection relay.

Every error carries a human-readable message and the HTTP status it maps
to. The FastAPI app renders them as `{"error": message}`.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for errors surfaced to HTTP callers."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationMissing(RelayError):
    """No credential source is configured."""

    status_code = 401


class Unauthenticated(RelayError):
    """The credential could not be obtained or was rejected twice."""

    status_code = 401


class InvalidInput(RelayError):
    """The uploaded file is missing, empty, or too large."""

    status_code = 400


class UpstreamFailure(RelayError):
    """Any non-authentication failure talking to the detection service."""


class TokenRejected(Exception):
    """Raised by the detection client when upstream answers 401."""


class PersistenceFailure(Exception):
    """Raised when a scan record cannot be written or read."""
