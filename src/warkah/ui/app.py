"""Gradio UI for Warkah Prompt Studio."""

import logging
from functools import partial

import gradio as gr

from warkah.core.config import config

from .components import ModePanel
from .handlers import handle_image_upload, handle_reset, handle_submit, handle_tab_select
from .models import MODE_LABELS, UIState
from .state import cleanup_ui_state

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .warkah-header { text-align: center; }
    .warkah-footer { text-align: center; opacity: 0.6; font-size: 0.8em; }
    """

    app = gr.Blocks(title="Warkah Prompt Studio")

    with app:
        # Session state - one instance per user, previews released on disconnect
        ui_state = gr.State(UIState(), delete_callback=cleanup_ui_state)

        gr.Markdown(
            """
            # WARKAH KASIH
            ### Wedding Style Analysis & Professional Prompt Generator
            """,
            elem_classes=["warkah-header"],
        )

        with gr.Tabs():
            for mode in ("analyzer", "poses"):
                with gr.Tab(MODE_LABELS[mode], id=f"{mode}_tab") as tab:
                    panel = ModePanel(mode)
                    wire_mode_panel(panel, ui_state)
                tab.select(
                    fn=partial(handle_tab_select, mode),
                    inputs=[ui_state],
                    outputs=[ui_state],
                )

        gr.Markdown(
            "Powered by Gemini · prompts for Midjourney v6",
            elem_classes=["warkah-footer"],
        )

    return app, custom_css


def wire_mode_panel(panel: ModePanel, ui_state: gr.State) -> None:
    """Connect a panel's components to the handlers for its mode.

    Args:
        panel: Panel built for one mode
        ui_state: UI state component
    """
    mode = panel.mode

    panel.file.upload(
        fn=partial(handle_image_upload, mode),
        inputs=[panel.file, ui_state],
        outputs=[panel.file, panel.preview, panel.alert, panel.submit_btn, ui_state],
    )

    reset_outputs = [
        panel.file,
        panel.preview,
        panel.result,
        panel.alert,
        panel.submit_btn,
        ui_state,
    ]

    # Removing the file behaves like the reset button
    panel.file.clear(
        fn=partial(handle_reset, mode),
        inputs=[ui_state],
        outputs=reset_outputs,
    )
    panel.reset_btn.click(
        fn=partial(handle_reset, mode),
        inputs=[ui_state],
        outputs=reset_outputs,
    )

    # One submission at a time per session; the orchestrator rejects re-entry too
    panel.submit_btn.click(
        fn=lambda: gr.update(interactive=False),
        outputs=[panel.submit_btn],
    ).then(
        fn=partial(handle_submit, mode),
        inputs=[ui_state],
        outputs=[panel.result, panel.alert, ui_state],
    ).then(
        fn=lambda state: gr.update(interactive=state.session(mode).has_image),
        inputs=[ui_state],
        outputs=[panel.submit_btn],
    )


def main():
    """Main entry point for the application."""
    logger.info("Starting Warkah Prompt Studio UI...")
    logger.info(f"Configuration: {config.model_dump(exclude={'gemini_api_key'})}")
    if config.gemini_api_key is None:
        logger.warning("No Gemini API key configured; submissions will fail until one is set")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
