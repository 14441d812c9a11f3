"""Unit tests for UI state reducers and models."""

from pathlib import Path

import pytest

from warkah.core.pose_decoder import PosePrompt
from warkah.ui.models import SessionState, UIState, UploadedImage
from warkah.ui.state import (
    begin_submission,
    cleanup_ui_state,
    cleared,
    complete_submission,
    dismiss_alert,
    fail_submission,
    hide_progress,
    release_preview,
    show_alert,
    show_progress,
    update_session,
    with_image,
)


@pytest.fixture
def image(temp_dir: Path) -> UploadedImage:
    preview = temp_dir / "preview.png"
    preview.write_bytes(b"thumb")
    return UploadedImage(temp_dir / "bride.jpg", "image/jpeg", preview_path=preview)


class TestUIState:
    def test_starts_idle(self, ui_state: UIState):
        assert set(ui_state.sessions) == {"analyzer", "poses"}
        for session in ui_state.sessions.values():
            assert session == SessionState()
        assert ui_state.active_mode == "analyzer"
        assert ui_state.alert is None
        assert ui_state.progress is None

    def test_repr(self, ui_state: UIState):
        text = repr(ui_state)
        assert "analyzer(image=False" in text
        assert "poses(image=False" in text

    def test_uploaded_image_name(self):
        assert UploadedImage(Path("/tmp/x/garden.png"), "image/png").name == "garden.png"


class TestReducers:
    def test_with_image_keeps_result(self, image):
        session = SessionState(result="previous")
        updated = with_image(session, image)

        assert updated.image is image
        assert updated.result == "previous"
        assert session.image is None

    def test_cleared(self, image):
        session = SessionState(image=image, result="x", submission_id=3)
        reset = cleared(session)

        assert reset.image is None
        assert reset.result is None
        assert not reset.pending
        assert reset.submission_id == 4

    def test_begin_submission(self, image):
        session = begin_submission(SessionState(image=image, result="old"))

        assert session.pending
        assert session.result is None
        assert session.image is image
        assert session.submission_id == 1

    def test_complete_submission(self, image):
        pending = begin_submission(SessionState(image=image))
        done = complete_submission(pending, pending.submission_id, "analysis")

        assert done.result == "analysis"
        assert not done.pending

    def test_complete_with_poses(self, image):
        poses = (PosePrompt(title="t", prompt="p"),)
        pending = begin_submission(SessionState(image=image))
        assert complete_submission(pending, pending.submission_id, poses).result == poses

    def test_stale_completion_ignored(self, image):
        pending = begin_submission(SessionState(image=image))
        reset = cleared(pending)

        assert complete_submission(reset, pending.submission_id, "late") is reset

    def test_fail_submission(self, image):
        pending = begin_submission(SessionState(image=image))
        failed = fail_submission(pending, pending.submission_id)

        assert failed.result is None
        assert not failed.pending
        assert failed.image is image

    def test_stale_failure_ignored(self, image):
        first = begin_submission(SessionState(image=image))
        second = begin_submission(complete_submission(first, first.submission_id, "r"))

        assert fail_submission(second, first.submission_id) is second

    def test_sessions_are_immutable(self):
        with pytest.raises(AttributeError):
            SessionState().pending = True


class TestUIStateMutators:
    def test_update_session_isolated(self, ui_state: UIState, image):
        update_session(ui_state, "poses", with_image(ui_state.session("poses"), image))

        assert ui_state.session("poses").image is image
        assert ui_state.session("analyzer").image is None

    def test_alert_replaced(self, ui_state: UIState):
        show_alert(ui_state, "First", "one")
        show_alert(ui_state, "Second", "two")

        assert ui_state.alert.title == "Second"
        assert ui_state.alert.kind == "alert"

        dismiss_alert(ui_state)
        assert ui_state.alert is None

    def test_progress(self, ui_state: UIState):
        show_progress(ui_state, "Analyzing Style...", "Reading")
        assert ui_state.progress.kind == "progress"

        hide_progress(ui_state)
        assert ui_state.progress is None


class TestPreviewCleanup:
    def test_release_preview_deletes_file(self, image):
        release_preview(image)
        assert not image.preview_path.exists()

    def test_release_preview_missing_file(self, image):
        image.preview_path.unlink()
        release_preview(image)  # Should not raise

    def test_release_preview_none(self):
        release_preview(None)
        release_preview(UploadedImage(Path("x.jpg"), "image/jpeg"))

    def test_cleanup_ui_state(self, ui_state: UIState, image):
        update_session(ui_state, "analyzer", SessionState(image=image, result="r"))
        show_alert(ui_state, "t", "m")

        cleanup_ui_state(ui_state)

        assert not image.preview_path.exists()
        assert ui_state.session("analyzer").image is None
        assert ui_state.session("analyzer").result is None
        assert ui_state.alert is None
