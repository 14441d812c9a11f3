"""Inline image encoding for Gemini requests.

An uploaded reference photo travels to the model as an inline payload: the
raw bytes base64-encoded, tagged with their media type. This module turns a
file on disk, or a ``data:`` URL, into that representation.

Media-type validation happens at selection time (see
:mod:`warkah.ui.validation`); the encoder trusts the type it is given.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_MEDIA_TYPES = ("image/jpeg", "image/png", "image/webp")


class ImageEncodingError(OSError):
    """Raised when an image file cannot be read for encoding."""

    pass


@dataclass(frozen=True)
class InlineImage:
    """Base64 image payload plus its media type."""

    media_type: str
    payload: str

    def to_bytes(self) -> bytes:
        """Decode the payload back to raw image bytes."""
        return base64.b64decode(self.payload)

    @classmethod
    def from_data_url(cls, data_url: str) -> "InlineImage":
        """Parse a ``data:<type>;base64,<payload>`` URL.

        Raises:
            ValueError: If the string is not a base64 data URL
        """
        header, sep, payload = data_url.partition(",")
        if not sep or not header.startswith("data:") or not header.endswith(";base64"):
            raise ValueError("Not a base64 data URL")
        media_type = header[len("data:") : -len(";base64")]
        return cls(media_type=media_type, payload=payload.strip())

    def __repr__(self) -> str:
        return f"InlineImage(media_type={self.media_type!r}, payload_len={len(self.payload)})"


def encode_bytes(data: bytes, media_type: str) -> InlineImage:
    """Encode raw image bytes as an inline payload."""
    return InlineImage(media_type=media_type, payload=base64.b64encode(data).decode("ascii"))


def encode_image(path: str | Path, media_type: str) -> InlineImage:
    """Read an image file and encode it as an inline payload.

    Args:
        path: Path to the image file
        media_type: Declared media type (already validated by the caller)

    Returns:
        InlineImage ready to embed in a request

    Raises:
        ImageEncodingError: If the file cannot be read
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read image {path}: {e}")
        raise ImageEncodingError(f"Could not read image file: {path.name}") from e

    logger.debug(f"Encoded {path.name} ({len(data)} bytes, {media_type})")
    return encode_bytes(data, media_type)


def decode_payload(payload: str) -> bytes:
    """Strictly decode a base64 payload.

    Raises:
        ValueError: If the payload is not valid base64
    """
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Image payload is not valid base64") from e
