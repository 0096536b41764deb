import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile

from controllers.detect_controller import detect_image
from utils.errors import RelayError

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["detect"])


@router.post("/detect")
async def post_detect(
    request: Request,
    image: Optional[UploadFile] = File(None),
    sandbox: Optional[str] = Form(None),
):
    """Run AI-image detection on the uploaded file."""
    try:
        return await detect_image(request, image, sandbox)
    except (HTTPException, RelayError):
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.exception("[detect] Unexpected error")
        raise RelayError("Detection failed unexpectedly.") from exc
