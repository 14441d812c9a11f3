"""Session orchestration for the two prompt modes.

The orchestrator is the single entry point the presentation layer uses:
``select_image``, ``submit``, ``reset`` and ``switch_mode``. It sequences
encode, build request, remote call and decode for one mode and records the
outcome in that mode's :class:`SessionState`.

State machine per mode::

    Idle --submit (image present, not pending)--> Submitting
    Submitting --success--> Idle (result set)
    Submitting --failure--> Idle (result empty, alert raised)

Submitting without an image, or while already Submitting, raises an alert
and leaves the state as it was. Both modes clear their previous result when
a submission starts, so a failed call never leaves an old result on screen.
"""

import logging
import uuid
from collections.abc import Callable
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from warkah.core.config import WarkahConfig
from warkah.core.gemini_client import ConfigurationError, GeminiClient, TransportError
from warkah.core.image_encoder import ImageEncodingError, InlineImage, encode_image
from warkah.core.pose_decoder import DecodeError, decode_pose_batch, decode_style_analysis
from warkah.core.prompt_requests import MODES, Mode, build_request

from .models import (
    DECODE_FAILURE_MESSAGE,
    FAILURE_MESSAGES,
    NO_IMAGE_MESSAGES,
    PROGRESS_MESSAGES,
    Notification,
    Result,
    UIState,
    UploadedImage,
)
from .state import (
    begin_submission,
    cleared,
    complete_submission,
    fail_submission,
    hide_progress,
    release_preview,
    show_alert,
    show_progress,
    update_session,
    with_image,
)
from .validation import ValidationError, validate_image_file, validate_submission

logger = logging.getLogger(__name__)


class SessionOrchestrator:
    """Drives per-mode sessions against a Gemini client.

    Args:
        client: Remote inference client
        settings: Configuration (preview directory, temperature)
    """

    def __init__(self, client: GeminiClient, settings: WarkahConfig):
        self.client = client
        self.settings = settings

    # ------------------------------------------------------------------
    # Core pipeline
    # ------------------------------------------------------------------

    def process(self, mode: Mode, image: InlineImage) -> Result:
        """Build, send and decode one request for ``mode``.

        Raises:
            ConfigurationError: If no API key is configured
            TransportError: If the remote call fails or returns nothing
            DecodeError: If the pose response is malformed
        """
        if mode == "analyzer":
            request = build_request(mode, image, temperature=self.settings.analysis_temperature)
        else:
            request = build_request(mode, image)
        text = self.client.generate(request)
        if mode == "poses":
            return decode_pose_batch(text)
        return decode_style_analysis(text)

    # ------------------------------------------------------------------
    # Presentation entry points
    # ------------------------------------------------------------------

    def select_image(self, state: UIState, mode: Mode, path: str | Path | None) -> UIState:
        """Validate and store an image for ``mode``.

        On rejection an "Invalid Format" alert is raised and the session is
        left exactly as it was.
        """
        try:
            source_path, media_type = validate_image_file(path)
            preview_path = self._create_preview(source_path)
        except ValidationError as e:
            logger.warning(f"Image selection rejected for '{mode}': {e}")
            return show_alert(state, e.title, str(e))

        session = state.session(mode)
        release_preview(session.image)
        image = UploadedImage(
            source_path=source_path, media_type=media_type, preview_path=preview_path
        )
        logger.info(f"Selected {image.name} ({media_type}) for '{mode}'")
        return update_session(state, mode, with_image(session, image))

    def submit(
        self,
        state: UIState,
        mode: Mode,
        on_progress: Callable[[Notification], None] | None = None,
    ) -> UIState:
        """Run one submission for ``mode`` to completion.

        Args:
            state: UI state
            mode: Mode to submit
            on_progress: Called with the progress notification just before
                the image is encoded and sent
        """
        session = state.session(mode)
        try:
            validate_submission(session, NO_IMAGE_MESSAGES[mode])
        except ValidationError as e:
            logger.warning(f"Submission rejected for '{mode}': {e}")
            return show_alert(state, e.title, str(e))

        session = begin_submission(session)
        submission_id = session.submission_id
        image = session.image
        update_session(state, mode, session)
        progress = show_progress(state, *PROGRESS_MESSAGES[mode]).progress

        try:
            if on_progress is not None:
                on_progress(progress)
            inline = encode_image(image.source_path, image.media_type)
            result = self.process(mode, inline)
        except DecodeError as e:
            logger.error(f"Decoding failed for '{mode}': {e}", exc_info=True)
            message = DECODE_FAILURE_MESSAGE if mode == "poses" else FAILURE_MESSAGES[mode]
            self._fail(state, mode, submission_id, message)
        except (ImageEncodingError, ConfigurationError, TransportError) as e:
            logger.error(f"Submission failed for '{mode}': {e}", exc_info=True)
            self._fail(state, mode, submission_id, FAILURE_MESSAGES[mode])
        except Exception as e:
            logger.error(f"Unexpected error during '{mode}' submission: {e}", exc_info=True)
            self._fail(state, mode, submission_id, FAILURE_MESSAGES[mode])
        else:
            update_session(
                state, mode, complete_submission(state.session(mode), submission_id, result)
            )
            logger.info(f"Submission {submission_id} for '{mode}' complete")
        finally:
            # A newer submission may own the notification by now.
            if state.progress is progress:
                hide_progress(state)

        return state

    def reset(self, state: UIState, mode: Mode) -> UIState:
        """Clear image and result for ``mode`` regardless of its state."""
        session = state.session(mode)
        release_preview(session.image)
        logger.info(f"Reset '{mode}' session")
        return update_session(state, mode, cleared(session))

    def switch_mode(self, state: UIState, mode: Mode) -> UIState:
        """Make ``mode`` the active tab.

        Raises:
            ValueError: If the mode is unknown
        """
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")
        state.active_mode = mode
        return state

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fail(self, state: UIState, mode: Mode, submission_id: int, message: str) -> None:
        session = state.session(mode)
        if session.submission_id != submission_id:
            # Reset while in flight; nobody is waiting for this outcome.
            return
        update_session(state, mode, fail_submission(session, submission_id))
        show_alert(state, "Error", message)

    def _create_preview(self, source_path: Path) -> Path:
        """Write a PNG thumbnail of the image to the preview directory.

        Raises:
            ValidationError: If the file cannot be decoded as an image
        """
        preview_path = self.settings.preview_dir / f"{uuid.uuid4().hex}.png"
        try:
            with Image.open(source_path) as img:
                img.thumbnail((self.settings.preview_max_size, self.settings.preview_max_size))
                img.convert("RGB").save(preview_path, format="PNG")
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not build preview for {source_path.name}: {e}")
            raise ValidationError(
                f"{source_path.name} could not be read as an image.", title="Invalid Format"
            ) from e
        return preview_path
