from typing import Any, Dict, Optional

from fastapi import Request, UploadFile

from models.detection import DetectionRequest
from services.detection_relay import DetectionRelay
from utils.upload_validation import parse_sandbox_flag, read_image_bytes


async def detect_image(request: Request, image: Optional[UploadFile], sandbox: Optional[str]) -> Dict[str, Any]:
    """Validate the upload and relay it to the detection service.

    Args:
        request: FastAPI Request (used to access app.state.detection_relay).
        image: Uploaded image file, or None when the field is missing.
        sandbox: Raw form value; only "true" enables sandbox mode.

    Returns:
        The upstream detection payload with `scanId`, `aiPercentage` and
        `humanPercentage` added.

    Raises:
        InvalidInput, ConfigurationMissing, Unauthenticated, UpstreamFailure.
    """
    image_bytes = await read_image_bytes(image)

    detection_request = DetectionRequest(
        image_bytes=image_bytes,
        filename=image.filename,
        content_type=image.content_type or "application/octet-stream",
        sandbox=parse_sandbox_flag(sandbox),
    )

    relay: DetectionRelay = request.app.state.detection_relay
    outcome = await relay.detect(detection_request)
    return outcome.as_response()
