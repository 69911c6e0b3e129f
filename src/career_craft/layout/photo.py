"""Candidate photo input.

Photos travel through the wizard as ``data:<mime>;base64,<payload>`` URIs.
Only PNG and JPEG are drawn.  Anything else is logged and skipped so a bad
photo never stops a résumé from being laid out.
"""

from __future__ import annotations

import base64
import binascii
import logging
import struct
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from career_craft.config import DEFAULT_MAX_PHOTO_BYTES

__all__ = [
    "CONTENT_TYPE_ALIASES",
    "IMAGE_TYPE_TO_MIME",
    "DecodedPhoto",
    "Photo",
    "decode_photo",
    "validate_photo",
]

logger = logging.getLogger(__name__)

IMAGE_TYPE_TO_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
}
CONTENT_TYPE_ALIASES = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
}


def _normalize_content_type(content_type: str | None) -> str | None:
    if content_type is None:
        return None
    normalized = content_type.strip().lower()
    return CONTENT_TYPE_ALIASES.get(normalized, normalized) or None


@dataclass(frozen=True)
class Photo:
    mime_type: str | None
    data: bytes

    @classmethod
    def from_data_uri(cls, uri: str) -> Photo:
        """Parse a ``data:`` URI.

        A bare base64 payload without the ``data:`` prefix is accepted too.

        Raises:
            ValueError: If the payload is not valid base64.
        """
        mime_type: str | None = None
        payload = uri.strip()
        if payload.startswith("data:"):
            header, sep, payload = payload.partition(",")
            if not sep:
                raise ValueError("Photo data URI has no payload.")
            mime_type = header[len("data:") :].split(";", 1)[0] or None
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Photo payload is not valid base64.") from exc
        return cls(mime_type=_normalize_content_type(mime_type), data=data)


@dataclass(frozen=True)
class DecodedPhoto:
    data: bytes
    image_format: str
    width_px: int
    height_px: int


def validate_photo(photo: Photo, max_bytes: int = DEFAULT_MAX_PHOTO_BYTES) -> DecodedPhoto:
    """Decode *photo* with Pillow and check it can be drawn.

    Raises:
        ValueError: If the photo is empty, too large, unreadable, not PNG or
            JPEG, or its declared MIME type does not match its content.
    """
    if not photo.data:
        raise ValueError("Photo is empty.")
    if len(photo.data) > max_bytes:
        raise ValueError(f"Photo exceeds {max_bytes} bytes.")

    try:
        with Image.open(BytesIO(photo.data)) as image:
            image_format = image.format
            width_px, height_px = image.size
            image.verify()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
        EOFError,
        struct.error,
    ) as exc:
        raise ValueError(f"Photo could not be decoded: {exc}") from exc

    if image_format not in IMAGE_TYPE_TO_MIME:
        raise ValueError(f"Unsupported photo image type: {image_format}.")

    expected_mime = IMAGE_TYPE_TO_MIME[image_format]
    declared = _normalize_content_type(photo.mime_type)
    if declared and declared != expected_mime:
        raise ValueError("Photo content type does not match image data.")

    return DecodedPhoto(
        data=photo.data,
        image_format=image_format,
        width_px=width_px,
        height_px=height_px,
    )


def decode_photo(photo: Photo | None, max_bytes: int = DEFAULT_MAX_PHOTO_BYTES) -> DecodedPhoto | None:
    """Return the decoded photo, or None when it is missing or unusable."""
    if photo is None:
        return None
    try:
        return validate_photo(photo, max_bytes=max_bytes)
    except ValueError as exc:
        logger.warning("Skipping candidate photo: %s", exc)
        return None
