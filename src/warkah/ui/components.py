"""Reusable UI components for the Warkah Gradio interface."""

import gradio as gr

from warkah.core.prompt_requests import Mode

from .models import MODE_LABELS

UPLOAD_FILE_TYPES = ["image"]

INFO_TEXT = {
    "analyzer": (
        "The AI analyzes the image's aesthetic (color, lighting, mood) and produces "
        "one master prompt you can reuse to recreate the style."
    ),
    "poses": (
        "Upload a theme image and the AI generates 8 different prompt variations "
        "(Candid, Romantic, Artistic, ...) that follow the image's aesthetic."
    ),
}

SUBMIT_LABELS = {
    "analyzer": "✨ ANALYZE STYLE",
    "poses": "🧩 GENERATE 8 POSE VARIATIONS",
}


class ModePanel:
    """UI block for one mode tab.

    Both tabs share the same layout: upload area with preview, submit and
    reset buttons, an alert area and the mode's result output. Building
    them from one class keeps the two tabs identical apart from the result
    component.
    """

    def __init__(self, mode: Mode):
        """Initialize the panel's components.

        Args:
            mode: "analyzer" or "poses"
        """
        self.mode = mode

        with gr.Row():
            gr.Markdown(f"### {MODE_LABELS[mode]}")
        with gr.Accordion("Info", open=False):
            gr.Markdown(INFO_TEXT[mode])

        with gr.Row():
            with gr.Column(scale=1):
                self.file = gr.File(
                    label="Reference Image (JPG, PNG or WEBP)",
                    file_types=UPLOAD_FILE_TYPES,
                    type="filepath",
                )
            with gr.Column(scale=1):
                self.preview = gr.Image(
                    label="Preview",
                    type="filepath",
                    interactive=False,
                    height=250,
                )

        with gr.Row():
            self.submit_btn = gr.Button(
                SUBMIT_LABELS[mode], variant="primary", interactive=False, scale=4
            )
            self.reset_btn = gr.Button("↻ Reset", variant="secondary", scale=1)

        self.alert = gr.Markdown(value="")

        if mode == "analyzer":
            self.result = gr.Textbox(
                label="✅ Analysis Prompt",
                lines=8,
                interactive=False,
                buttons=["copy"],
                visible=False,
            )
        else:
            self.result = gr.Markdown(value="", visible=False)
