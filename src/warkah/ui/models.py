"""Data models for Warkah UI state."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from warkah.core.pose_decoder import PoseBatch
from warkah.core.prompt_requests import MODES, Mode

logger = logging.getLogger(__name__)

NotificationKind = Literal["alert", "progress"]

Result = str | PoseBatch


@dataclass(frozen=True)
class UploadedImage:
    """A reference image selected for one mode.

    ``preview_path`` is the ephemeral display handle: a thumbnail owned by
    the session and deleted when the image is replaced or removed.
    """

    source_path: Path
    media_type: str
    preview_path: Path | None = None

    @property
    def name(self) -> str:
        return self.source_path.name


@dataclass(frozen=True)
class SessionState:
    """Per-mode interaction state.

    Values are never mutated; reducers in :mod:`warkah.ui.state` return new
    instances. ``submission_id`` increases whenever a submission starts or
    the session is reset, so a response can tell whether it is still wanted.
    """

    image: UploadedImage | None = None
    result: Result | None = None
    pending: bool = False
    submission_id: int = 0

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def has_result(self) -> bool:
        return self.result is not None


@dataclass(frozen=True)
class Notification:
    """Transient alert or progress message."""

    kind: NotificationKind
    title: str
    message: str


@dataclass
class UIState:
    """Session state for the Gradio UI.

    One instance per browser session. Holds an independent
    :class:`SessionState` per mode so switching tabs keeps each tab's last
    image and result.

    Attributes
    ----------
    sessions : dict[str, SessionState]
        Current state for "analyzer" and "poses"
    active_mode : str
        Mode of the visible tab
    alert : Notification | None
        Latest alert, replaced by the next one
    progress : Notification | None
        Progress message while a call is in flight
    """

    sessions: dict[str, SessionState] = field(
        default_factory=lambda: {mode: SessionState() for mode in MODES}
    )
    active_mode: Mode = "analyzer"
    alert: Notification | None = None
    progress: Notification | None = None

    def session(self, mode: Mode) -> SessionState:
        return self.sessions[mode]

    def __repr__(self) -> str:
        """String representation for debugging."""
        summary = ", ".join(
            f"{mode}(image={s.has_image}, result={s.has_result}, pending={s.pending})"
            for mode, s in self.sessions.items()
        )
        return f"UIState(active={self.active_mode}, {summary})"


# Constants for UI
MODE_LABELS = {
    "analyzer": "Style Analysis",
    "poses": "Pose Variations",
}

PROGRESS_MESSAGES = {
    "analyzer": ("Analyzing Style...", "Reading texture, lighting and mood..."),
    "poses": ("Generating Variations...", "Creating 8 professional and candid poses..."),
}

NO_IMAGE_MESSAGES = {
    "analyzer": "Please upload a wedding style reference image first.",
    "poses": "Please upload a theme reference image first.",
}

FAILURE_MESSAGES = {
    "analyzer": "The system failed to process the image. Make sure the API key is valid.",
    "poses": "The system failed to generate poses. Make sure the API key is valid.",
}

DECODE_FAILURE_MESSAGE = "Failed to process pose data."
