"""Bearer token acquisition against the Copyleaks identity service."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from services.copyleaks.response_parser import extract_error_message
from services.credential_store import CredentialStore
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)
LOGIN_PATH = "/v3/account/login/api"


class Authenticator:
    """Exchange long-lived credentials for a short-lived bearer token.

    A pre-provisioned token, when configured, is stored directly and the
    login exchange is skipped. Failures leave the credential store untouched.
    """

    def __init__(self, settings: Settings, store: CredentialStore, client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.store = store
        self.client = client

    @property
    def configured(self) -> bool:
        return self.settings.configured

    async def authenticate(self) -> bool:
        """Obtain a token and store it. Return True on success."""
        if self.settings.token:
            self.store.set(self.settings.token)
            LOGGER.info("[auth] Using pre-provisioned Copyleaks token.")
            return True

        if not self.settings.has_login_pair:
            LOGGER.warning("[auth] COPYLEAKS_EMAIL / COPYLEAKS_API_KEY not set.")
            return False

        token = await self._login()
        if token is None:
            return False
        self.store.set(token)
        LOGGER.info("[auth] Authenticated with Copyleaks successfully.")
        return True

    async def _login(self) -> Optional[str]:
        """Perform the login exchange and return the token, or None on failure."""
        url = f"{self.settings.id_url}{LOGIN_PATH}"
        try:
            response = await self.client.post(
                url,
                json={"email": self.settings.email, "key": self.settings.api_key},
                timeout=self.settings.login_timeout,
            )
        except httpx.HTTPError as exc:
            LOGGER.error("[auth] Authentication failed: %s", exc)
            return None

        if not response.is_success:
            LOGGER.error(
                "[auth] Authentication failed (%s): %s",
                response.status_code,
                extract_error_message(response),
            )
            return None

        try:
            data = response.json()
        except ValueError:
            LOGGER.error("[auth] Authentication failed: login response is not JSON.")
            return None

        token = None
        if isinstance(data, dict):
            token = data.get("access_token") or data.get("token")
        if not isinstance(token, str) or not token:
            LOGGER.error("[auth] Authentication failed: no token in login response.")
            return None
        return token
