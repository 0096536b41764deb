"""Background task that renews the bearer token on a fixed interval."""

import asyncio
import logging

from services.copyleaks.authenticator import Authenticator

LOGGER = logging.getLogger(__name__)


class TokenRefresher:
    """Re-run the authenticator every `interval_seconds` until cancelled."""

    def __init__(self, authenticator: Authenticator, interval_seconds: float) -> None:
        self._authenticator = authenticator
        self.interval_seconds = interval_seconds

    async def refresh_once(self) -> bool:
        try:
            return await self._authenticator.authenticate()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("[auth] Scheduled refresh failed: %s", exc)
            return False

    async def run_periodic(self) -> None:
        """
        Sleep one interval, refresh, repeat. The first refresh happens one
        interval after start since startup authenticates separately.
        """
        while True:
            try:
                await asyncio.sleep(self.interval_seconds)
            except asyncio.CancelledError:
                break
            await self.refresh_once()
