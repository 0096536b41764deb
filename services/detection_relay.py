"""Coordinate credential freshness, submission and the single auth retry."""

from __future__ import annotations

import logging
from typing import Any, Dict

from models.detection import DetectionOutcome, DetectionRequest
from services.copyleaks.authenticator import Authenticator
from services.copyleaks.detection_client import DetectionClient
from services.copyleaks.response_parser import parse_detection
from services.credential_store import CredentialStore
from services.history_recorder import HistoryRecorder
from utils.errors import ConfigurationMissing, TokenRejected, Unauthenticated, UpstreamFailure

LOGGER = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "Not authenticated. Set COPYLEAKS_EMAIL and COPYLEAKS_API_KEY environment variables."
)


class DetectionRelay:
    """Broker one detection request to the upstream service.

    A stale credential is refreshed before the first submission. A 401 from
    upstream triggers exactly one re-authentication and one resubmission of
    the same scan; whatever that resubmission returns is final.
    """

    def __init__(
        self,
        store: CredentialStore,
        authenticator: Authenticator,
        client: DetectionClient,
        recorder: HistoryRecorder,
    ) -> None:
        self.store = store
        self.authenticator = authenticator
        self.client = client
        self.recorder = recorder

    async def detect(self, request: DetectionRequest) -> DetectionOutcome:
        """Run one scan and return its outcome, recording it on success.

        Raises:
            ConfigurationMissing: no credential source is configured.
            Unauthenticated: no usable credential, or upstream rejected it twice.
            UpstreamFailure: any other upstream error.
        """
        await self._ensure_credential()

        try:
            payload = await self._submit_with_reauth(request)
            result = parse_detection(payload)
        except UpstreamFailure as exc:
            LOGGER.error("[detect] Scan %s failed: %s", request.scan_id, exc.message)
            raise

        LOGGER.info("[detect] Scan %s complete: AI %s%%", request.scan_id, result.ai_percentage)
        await self.recorder.record(request, result)
        return DetectionOutcome(request=request, result=result, payload=payload)

    async def _ensure_credential(self) -> None:
        if self.store.is_stale():
            if not self.authenticator.configured:
                raise ConfigurationMissing(NOT_CONFIGURED_MESSAGE)
            if not await self.authenticator.authenticate():
                raise Unauthenticated("Authentication with the detection service failed.")
        if self.store.get() is None:
            raise Unauthenticated(NOT_CONFIGURED_MESSAGE)

    def _current_token(self) -> str:
        credential = self.store.get()
        if credential is None:
            raise Unauthenticated(NOT_CONFIGURED_MESSAGE)
        return credential.token

    async def _submit_with_reauth(self, request: DetectionRequest) -> Dict[str, Any]:
        try:
            return await self.client.submit(request, self._current_token())
        except TokenRejected:
            LOGGER.warning("[detect] Token rejected, re-authenticating.")

        if not await self.authenticator.authenticate():
            raise Unauthenticated("Re-authentication failed.")

        try:
            return await self.client.submit(request, self._current_token())
        except TokenRejected as exc:
            LOGGER.error("[detect] Scan %s rejected again after re-authentication.", request.scan_id)
            raise Unauthenticated(f"Detection service rejected the credential: {exc}") from exc
