"""Multipart submission to the Copyleaks AI image detector."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from models.detection import DetectionRequest
from services.copyleaks.response_parser import extract_error_message, parse_json_object
from utils.errors import TokenRejected, UpstreamFailure
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)


class DetectionClient:
    """Send one image to the detection endpoint and classify the HTTP outcome."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.client = client

    def endpoint(self, scan_id: str) -> str:
        return f"{self.settings.api_url}/v1/ai-image-detector/{scan_id}/check"

    def build_form(self, request: DetectionRequest) -> Dict[str, Any]:
        """Build the multipart `files`/`data` arguments for one submission."""
        return {
            "files": {"image": (request.filename, request.image_bytes, request.content_type)},
            "data": {
                "filename": request.filename,
                "sandbox": "true" if request.sandbox else "false",
                "model": self.settings.model,
            },
        }

    async def submit(self, request: DetectionRequest, token: str) -> Dict[str, Any]:
        """Submit `request` with `token` and return the decoded JSON payload.

        Raises:
            TokenRejected: upstream answered 401.
            UpstreamFailure: network error, timeout, any other non-2xx, or a malformed body.
        """
        try:
            response = await self.client.post(
                self.endpoint(request.scan_id),
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.settings.detect_timeout,
                **self.build_form(request),
            )
        except httpx.TimeoutException as exc:
            LOGGER.warning("[detect] Scan %s timed out after %ss.", request.scan_id, self.settings.detect_timeout)
            raise UpstreamFailure("Detection service timed out.") from exc
        except httpx.HTTPError as exc:
            LOGGER.warning("[detect] Scan %s could not reach the detector: %s", request.scan_id, exc)
            raise UpstreamFailure(f"Detection service unreachable: {exc}") from exc

        if response.status_code == 401:
            LOGGER.warning("[detect] Scan %s rejected with 401.", request.scan_id)
            raise TokenRejected(extract_error_message(response))
        if not response.is_success:
            LOGGER.warning("[detect] Scan %s got HTTP %s from the detector.", request.scan_id, response.status_code)
            status = response.status_code if response.status_code >= 400 else 500
            raise UpstreamFailure(extract_error_message(response), status_code=status)
        return parse_json_object(response)
