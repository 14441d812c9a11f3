"""Validation utilities for Warkah UI inputs."""

import logging
import mimetypes
from pathlib import Path

from warkah.core.image_encoder import SUPPORTED_MEDIA_TYPES

from .models import SessionState

logger = logging.getLogger(__name__)

# mimetypes does not know .webp on every platform
mimetypes.add_type("image/webp", ".webp")


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    def __init__(self, message: str, title: str = "Validation Error"):
        super().__init__(message)
        self.title = title


def guess_media_type(path: str | Path) -> str | None:
    """Return the declared media type of a file from its name."""
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type


def validate_media_type(media_type: str | None) -> str:
    """Ensure the media type is one the model accepts.

    Raises:
        ValidationError: If the type is missing or unsupported
    """
    if media_type not in SUPPORTED_MEDIA_TYPES:
        logger.warning(f"Rejected media type: {media_type}")
        raise ValidationError(
            "Please upload a JPG, PNG or WEBP image only.", title="Invalid Format"
        )
    return media_type


def validate_image_file(path: str | Path | None) -> tuple[Path, str]:
    """Validate a selected image file.

    Args:
        path: Path of the uploaded file

    Returns:
        Tuple of (resolved path, media type)

    Raises:
        ValidationError: If nothing was selected, the file is missing, or
            the type is unsupported
    """
    if not path:
        raise ValidationError("No file selected", title="Invalid Format")

    file_path = Path(path)
    media_type = validate_media_type(guess_media_type(file_path))

    if not file_path.is_file():
        raise ValidationError(f"File not found: {file_path.name}", title="Invalid Format")

    return file_path, media_type


def validate_submission(session: SessionState, no_image_message: str) -> None:
    """Check that a session may start a submission.

    Raises:
        ValidationError: If no image is selected or a call is already pending
    """
    if session.image is None:
        raise ValidationError(no_image_message, title="No Image")
    if session.pending:
        raise ValidationError(
            "A request is already being processed. Please wait for it to finish.",
            title="Still Processing",
        )
