"""Unit tests for validation utilities."""

from pathlib import Path

import pytest

from warkah.ui.models import SessionState, UploadedImage
from warkah.ui.validation import (
    ValidationError,
    guess_media_type,
    validate_image_file,
    validate_media_type,
    validate_submission,
)


class TestValidationError:
    """Tests for ValidationError exception."""

    def test_validation_error_is_exception(self):
        """Test that ValidationError is an Exception."""
        assert issubclass(ValidationError, Exception)

    def test_default_title(self):
        assert ValidationError("msg").title == "Validation Error"

    def test_custom_title_and_message(self):
        error = ValidationError("Bad file", title="Invalid Format")
        assert error.title == "Invalid Format"
        assert str(error) == "Bad file"


class TestGuessMediaType:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("photo.jpg", "image/jpeg"),
            ("photo.JPEG", "image/jpeg"),
            ("photo.png", "image/png"),
            ("photo.webp", "image/webp"),
            ("photo.gif", "image/gif"),
        ],
    )
    def test_known_extensions(self, name, expected):
        assert guess_media_type(name) == expected

    def test_unknown_extension(self):
        assert guess_media_type("photo") is None


class TestValidateMediaType:
    @pytest.mark.parametrize("media_type", ["image/jpeg", "image/png", "image/webp"])
    def test_supported(self, media_type):
        assert validate_media_type(media_type) == media_type

    @pytest.mark.parametrize("media_type", ["image/gif", "image/heic", "application/pdf", None])
    def test_unsupported(self, media_type):
        with pytest.raises(ValidationError, match="JPG, PNG or WEBP") as exc_info:
            validate_media_type(media_type)
        assert exc_info.value.title == "Invalid Format"


class TestValidateImageFile:
    """Tests for validate_image_file function."""

    @pytest.mark.parametrize("ext", ["jpg", "png", "webp"])
    def test_accepts_supported_images(self, sample_images, ext):
        path, media_type = validate_image_file(str(sample_images[ext]))
        assert path == sample_images[ext]
        assert media_type.startswith("image/")

    def test_rejects_gif(self, sample_images):
        with pytest.raises(ValidationError) as exc_info:
            validate_image_file(sample_images["gif"])
        assert exc_info.value.title == "Invalid Format"

    @pytest.mark.parametrize("path", [None, ""])
    def test_nothing_selected(self, path):
        with pytest.raises(ValidationError, match="No file selected"):
            validate_image_file(path)

    def test_missing_file(self, temp_dir: Path):
        with pytest.raises(ValidationError, match="File not found: gone.png"):
            validate_image_file(temp_dir / "gone.png")

    def test_type_checked_before_existence(self, temp_dir: Path):
        """An unsupported name is rejected as a format error even if missing."""
        with pytest.raises(ValidationError, match="JPG, PNG or WEBP"):
            validate_image_file(temp_dir / "gone.gif")


class TestValidateSubmission:
    """Tests for validate_submission function."""

    def test_no_image(self):
        with pytest.raises(ValidationError, match="upload first") as exc_info:
            validate_submission(SessionState(), "upload first")
        assert exc_info.value.title == "No Image"

    def test_pending(self, sample_images):
        image = UploadedImage(sample_images["jpg"], "image/jpeg")
        session = SessionState(image=image, pending=True)

        with pytest.raises(ValidationError) as exc_info:
            validate_submission(session, "upload first")
        assert exc_info.value.title == "Still Processing"

    def test_ready(self, sample_images):
        image = UploadedImage(sample_images["jpg"], "image/jpeg")
        validate_submission(SessionState(image=image), "upload first")  # Should not raise
