"""State management utilities for Warkah UI.

Per-mode :class:`SessionState` values are immutable. The reducer functions
here take a session and return the next one; :class:`UIState` is the only
mutable container and is updated through :func:`update_session`.
"""

import logging
from dataclasses import replace

from warkah.core.prompt_requests import Mode

from .models import Notification, Result, SessionState, UIState, UploadedImage

logger = logging.getLogger(__name__)


def with_image(session: SessionState, image: UploadedImage) -> SessionState:
    """Store a newly selected image, keeping any previous result."""
    return replace(session, image=image)


def cleared(session: SessionState) -> SessionState:
    """Drop image and result unconditionally.

    The submission id is bumped so a response still in flight for this
    session is ignored when it arrives.
    """
    return SessionState(submission_id=session.submission_id + 1)


def begin_submission(session: SessionState) -> SessionState:
    """Enter Submitting: previous result cleared, new submission id."""
    return replace(session, result=None, pending=True, submission_id=session.submission_id + 1)


def complete_submission(session: SessionState, submission_id: int, result: Result) -> SessionState:
    """Apply a successful result if it belongs to the current submission."""
    if session.submission_id != submission_id:
        logger.info(f"Ignoring stale result for submission {submission_id}")
        return session
    return replace(session, result=result, pending=False)


def fail_submission(session: SessionState, submission_id: int) -> SessionState:
    """Return to Idle with no result if the failure belongs to the current submission."""
    if session.submission_id != submission_id:
        logger.info(f"Ignoring stale failure for submission {submission_id}")
        return session
    return replace(session, result=None, pending=False)


def update_session(state: UIState, mode: Mode, session: SessionState) -> UIState:
    """Replace the session for ``mode``; the other mode is untouched."""
    state.sessions[mode] = session
    return state


def show_alert(state: UIState, title: str, message: str) -> UIState:
    state.alert = Notification(kind="alert", title=title, message=message)
    return state


def dismiss_alert(state: UIState) -> UIState:
    state.alert = None
    return state


def show_progress(state: UIState, title: str, message: str) -> UIState:
    state.progress = Notification(kind="progress", title=title, message=message)
    return state


def hide_progress(state: UIState) -> UIState:
    state.progress = None
    return state


def release_preview(image: UploadedImage | None) -> None:
    """Delete the preview thumbnail owned by ``image``, if any."""
    if image is None or image.preview_path is None:
        return
    try:
        image.preview_path.unlink(missing_ok=True)
        logger.debug(f"Released preview {image.preview_path}")
    except OSError as e:
        logger.warning(f"Could not remove preview {image.preview_path}: {e}")


def cleanup_ui_state(state: UIState) -> None:
    """Release every preview held by the session.

    This should be called when a browser session ends.

    Args:
        state: UI state to clean up
    """
    logger.info("Cleaning up UIState resources")
    for mode, session in state.sessions.items():
        release_preview(session.image)
        state.sessions[mode] = cleared(session)
    state.alert = None
    state.progress = None
