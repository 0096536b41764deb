"""Validation helpers for uploaded images."""

from typing import Optional

from fastapi import UploadFile

from utils.errors import InvalidInput
from utils.settings import MAX_UPLOAD_BYTES


def parse_sandbox_flag(raw: Optional[str]) -> bool:
    """Only the literal string "true" (any case) enables sandbox mode."""
    return (raw or "").strip().lower() == "true"


async def read_image_bytes(image: Optional[UploadFile], max_bytes: int = MAX_UPLOAD_BYTES) -> bytes:
    """Read an uploaded image, rejecting missing, empty or oversized files.

    At most `max_bytes + 1` bytes are read so an oversized upload is detected
    without buffering all of it.
    """
    if image is None or not image.filename:
        raise InvalidInput("No image file provided.")
    image_bytes = await image.read(max_bytes + 1)
    if not image_bytes:
        raise InvalidInput("Uploaded image is empty.")
    if len(image_bytes) > max_bytes:
        limit_mib = max_bytes // (1024 * 1024)
        raise InvalidInput(f"Image exceeds the {limit_mib} MiB upload limit.")
    return image_bytes
