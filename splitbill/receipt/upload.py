"""Checks applied to a receipt photo before it is sent for parsing."""

from __future__ import annotations

from pathlib import Path

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MAX_IMAGE_BYTES = 10 * 1024 * 1024

_SUFFIX_TO_TYPE = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


def image_type_for_filename(filename: str) -> str | None:
    return _SUFFIX_TO_TYPE.get(Path(filename).suffix.lower())


def validate_receipt_image(
    filename: str | None,
    content_type: str | None,
    data: bytes,
    max_bytes: int = MAX_IMAGE_BYTES,
) -> str | None:
    """Return an error message for an unacceptable upload, or None if it is fine."""
    if not filename:
        return "Filename is required"
    if content_type not in ALLOWED_IMAGE_TYPES:
        return "Only image files are allowed (JPEG, PNG, WebP)"
    if not data:
        return "File cannot be empty"
    if len(data) > max_bytes:
        return f"File size cannot exceed {max_bytes // (1024 * 1024)}MB"
    return None
