"""Environment-driven settings for the relay."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

DEFAULT_ID_URL = "https://id.copyleaks.com"
DEFAULT_API_URL = "https://api.copyleaks.com"
DEFAULT_MODEL = "ai-image-1-ultra"
DEFAULT_TTL_HOURS = 47.0
MAX_UPLOAD_BYTES = 32 * 1024 * 1024


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name}={raw!r} is not a number.") from exc
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {raw!r}.")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Attributes:
        email: Account email for the login exchange.
        api_key: Long-lived API key paired with `email`.
        token: Pre-provisioned bearer token; when set the login exchange is skipped.
        id_url: Base URL of the identity service.
        api_url: Base URL of the detection service.
        model: Model identifier sent with each scan.
        token_ttl: Age after which a credential is refreshed before use.
        login_timeout: Timeout in seconds for the login call.
        detect_timeout: Timeout in seconds for the detection call.
        database_dir: Directory for the history database; None disables history.
    """

    email: Optional[str] = None
    api_key: Optional[str] = None
    token: Optional[str] = None
    id_url: str = DEFAULT_ID_URL
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    token_ttl: timedelta = timedelta(hours=DEFAULT_TTL_HOURS)
    login_timeout: float = 15.0
    detect_timeout: float = 60.0
    database_dir: Optional[Path] = None

    @property
    def has_login_pair(self) -> bool:
        return bool(self.email and self.api_key)

    @property
    def configured(self) -> bool:
        """True when some credential source is available."""
        return self.has_login_pair or bool(self.token)

    @classmethod
    def from_env(cls) -> "Settings":
        database_dir = _env("DATABASE_DIR")
        return cls(
            email=_env("COPYLEAKS_EMAIL"),
            api_key=_env("COPYLEAKS_API_KEY"),
            token=_env("COPYLEAKS_TOKEN"),
            id_url=(_env("COPYLEAKS_ID_URL") or DEFAULT_ID_URL).rstrip("/"),
            api_url=(_env("COPYLEAKS_API_URL") or DEFAULT_API_URL).rstrip("/"),
            model=_env("COPYLEAKS_MODEL") or DEFAULT_MODEL,
            token_ttl=timedelta(hours=_env_float("TOKEN_TTL_HOURS", DEFAULT_TTL_HOURS)),
            login_timeout=_env_float("LOGIN_TIMEOUT_SECONDS", 15.0),
            detect_timeout=_env_float("DETECT_TIMEOUT_SECONDS", 60.0),
            database_dir=Path(database_dir).expanduser() if database_dir else None,
        )
