"""Gradio event handlers for the analysis and pose tabs.

Handlers translate Gradio inputs into orchestrator calls and the resulting
:class:`UIState` back into component updates. They never talk to the model
directly.
"""

import logging
from typing import Any

import gradio as gr

from warkah.core.config import ConfigCredentialProvider, config
from warkah.core.gemini_client import GeminiClient
from warkah.core.prompt_requests import Mode

from .models import Notification, SessionState, UIState
from .orchestrator import SessionOrchestrator
from .state import dismiss_alert

logger = logging.getLogger(__name__)

_orchestrator: SessionOrchestrator | None = None


def get_orchestrator() -> SessionOrchestrator:
    """Return the process-wide orchestrator, creating it on first use."""
    global _orchestrator
    if _orchestrator is None:
        logger.info(f"Initializing SessionOrchestrator (model={config.gemini_model})")
        client = GeminiClient(ConfigCredentialProvider(config), model=config.gemini_model)
        _orchestrator = SessionOrchestrator(client, config)
    return _orchestrator


def set_orchestrator(orchestrator: SessionOrchestrator | None) -> None:
    """Replace the process-wide orchestrator (used by tests)."""
    global _orchestrator
    _orchestrator = orchestrator


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------


def format_alert(alert: Notification | None) -> str:
    """Render an alert as Markdown, or an empty string."""
    if alert is None:
        return ""
    return f"❌ **{alert.title}**\n\n{alert.message}"


def format_poses(session: SessionState) -> str:
    """Render a pose batch as a numbered Markdown list with copyable prompts."""
    if not session.result or isinstance(session.result, str):
        return ""
    blocks = [f"### ✅ Batch Prompt List ({len(session.result)} Variations)"]
    for index, pose in enumerate(session.result, start=1):
        blocks.append(f"**{index}. {pose.title}**\n\n```text\n{pose.prompt}\n```")
    return "\n\n".join(blocks)


def render_result(mode: Mode, session: SessionState) -> dict[str, Any]:
    """Build the result component update for ``mode``."""
    if mode == "analyzer":
        text = session.result if isinstance(session.result, str) else ""
        return gr.update(value=text, visible=bool(text))
    markdown = format_poses(session)
    return gr.update(value=markdown, visible=bool(markdown))


def render_preview(session: SessionState) -> dict[str, Any]:
    if session.image is None or session.image.preview_path is None:
        return gr.update(value=None)
    return gr.update(value=str(session.image.preview_path))


def _take_alert(state: UIState) -> str:
    # Alerts are shown once; the next event starts clean.
    markdown = format_alert(state.alert)
    dismiss_alert(state)
    return markdown


# ----------------------------------------------------------------------
# Event handlers
# ----------------------------------------------------------------------


def handle_image_upload(
    mode: Mode, file_path: str | None, state: UIState
) -> tuple[dict[str, Any], dict[str, Any], str, dict[str, Any], UIState]:
    """Handle a file dropped or picked in a tab's upload area.

    Args:
        mode: Tab the upload belongs to
        file_path: Temporary path of the uploaded file
        state: UI state

    Returns:
        Tuple of (file_update, preview_update, alert_markdown, submit_update, updated_state)
    """
    state = get_orchestrator().select_image(state, mode, file_path)
    session = state.session(mode)
    rejected = state.alert is not None

    file_update = gr.update(value=None) if rejected else gr.update()
    return (
        file_update,
        render_preview(session),
        _take_alert(state),
        gr.update(interactive=session.has_image),
        state,
    )


def handle_submit(
    mode: Mode, state: UIState, progress: gr.Progress = gr.Progress()
) -> tuple[dict[str, Any], str, UIState]:
    """Run a submission for the tab.

    Returns:
        Tuple of (result_update, alert_markdown, updated_state)
    """

    def on_progress(notification: Notification) -> None:
        progress(0, desc=f"{notification.title} {notification.message}")

    state = get_orchestrator().submit(state, mode, on_progress=on_progress)
    return render_result(mode, state.session(mode)), _take_alert(state), state


def handle_reset(
    mode: Mode, state: UIState
) -> tuple[dict[str, Any], dict[str, Any], dict[str, Any], str, dict[str, Any], UIState]:
    """Clear a tab's image and result.

    Returns:
        Tuple of (file_update, preview_update, result_update, alert_markdown,
        submit_update, updated_state)
    """
    state = get_orchestrator().reset(state, mode)
    session = state.session(mode)
    return (
        gr.update(value=None),
        render_preview(session),
        render_result(mode, session),
        _take_alert(state),
        gr.update(interactive=False),
        state,
    )


def handle_tab_select(mode: Mode, state: UIState) -> UIState:
    """Record which tab is active; the other tab's session is untouched."""
    return get_orchestrator().switch_mode(state, mode)
