"""Helpers to read Copyleaks API responses."""

import math
from typing import Any, Dict, Optional

import httpx

from models.detection import DetectionResult
from utils.errors import UpstreamFailure

MAX_PLAIN_ERROR_LENGTH = 200


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    # httpx decodes NaN and Infinity tokens into floats
    return isinstance(value, float) and math.isfinite(value)


def _dimension(value: Any) -> Optional[int]:
    return int(value) if _is_number(value) else None


def extract_error_message(response: httpx.Response) -> str:
    """Return the upstream `message` field.

    A short plain-text body is used when there is no JSON message; markup
    or long bodies fall back to the reason phrase.
    """
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    text = response.text.strip()
    if data is None and text and len(text) <= MAX_PLAIN_ERROR_LENGTH and not text.startswith("<"):
        return text
    return response.reason_phrase or f"HTTP {response.status_code}"


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Non-finite number {token} in response body.")


def parse_json_object(response: httpx.Response) -> Dict[str, Any]:
    """Decode a successful response body, which must be a JSON object.

    NaN and Infinity tokens are refused since the payload is echoed back to
    the caller as strict JSON.
    """
    try:
        data = response.json(parse_constant=_reject_constant)
    except ValueError as exc:
        raise UpstreamFailure("Detection service returned a malformed response.") from exc
    if not isinstance(data, dict):
        raise UpstreamFailure("Detection service returned a malformed response.")
    return data


def parse_detection(payload: Dict[str, Any]) -> DetectionResult:
    """Extract the AI/human split and image dimensions from a detection payload.

    A missing `summary.ai` counts as 0 and a missing `summary.human` is
    derived as `100 - ai`. Missing dimensions stay None.
    """
    summary = payload.get("summary") or {}
    image_info = payload.get("imageInfo") or {}
    if not isinstance(summary, dict) or not isinstance(image_info, dict):
        raise UpstreamFailure("Detection service returned a malformed response.")

    ai = summary.get("ai")
    if ai is None:
        ai = 0
    if not _is_number(ai):
        raise UpstreamFailure("Detection service returned a non-numeric AI score.")

    human = summary.get("human")
    if human is None:
        human = 100 - ai
    if not _is_number(human):
        raise UpstreamFailure("Detection service returned a non-numeric human score.")

    return DetectionResult(
        ai_percentage=ai,
        human_percentage=human,
        width=_dimension(image_info.get("width")),
        height=_dimension(image_info.get("height")),
    )
