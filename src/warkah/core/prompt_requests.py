"""Request construction for the two prompt modes.

Each mode maps an :class:`InlineImage` to a fully specified
:class:`PromptRequest`: system instruction, user instruction and output
configuration. Nothing here touches the network; the descriptor is handed
to :class:`warkah.core.gemini_client.GeminiClient` for execution.

Modes
-----
analyzer
    One dense English paragraph describing the reference image's style,
    usable directly as a generative-image prompt.
poses
    Eight pose-variation prompts in a fixed category order, returned as a
    JSON array constrained by a response schema.
"""

from dataclasses import dataclass
from typing import Any, Literal

from .image_encoder import InlineImage

Mode = Literal["analyzer", "poses"]

MODES: tuple[Mode, ...] = ("analyzer", "poses")

POSE_SUFFIX = "--ar 3:4 --v 6.0"

DEFAULT_ANALYSIS_TEMPERATURE = 0.7

# Display order matters: index 1-8 is shown to the user as a label.
POSE_CATEGORIES = (
    "Candid: Spontaneous Laughter",
    "Intimate: The Forehead Touch",
    "Artistic: Under The Veil",
    "Wide Shot: Environmental / Grand",
    "Classic Glamour: Elegant",
    "Detail: Ring / Hands / Flowers",
    "Candid: Secret Whisper",
    "Mood: Black & White Emotion",
)

POSE_COUNT = len(POSE_CATEGORIES)

STYLE_ANALYSIS_SYSTEM_INSTRUCTION = """\
You are a world-class professional wedding photographer and art director, and an expert in \
prompt engineering for generative AI (Midjourney v6). Your task is to analyze the provided \
image and produce one highly detailed prompt paragraph. The prompt must cover:
1. Aesthetic (e.g. luxurious, rustic, minimalist)
2. Mood (e.g. intimate, joyful, serene)
3. Color Palette & Lighting (e.g. golden hour, soft diffused, pastel tones)
4. Composition & Camera Details (e.g. Sony A7R V, 85mm f/1.2, bokeh)
5. Subject & Attire Description (fabric texture, emotion)

The output must be in English, a single dense paragraph, ready to use in Midjourney."""

STYLE_ANALYSIS_INSTRUCTION = "Analyze this image and create a high-end generative AI prompt."


def _pose_system_instruction() -> str:
    categories = "\n".join(f"{i}. {name}" for i, name in enumerate(POSE_CATEGORIES, start=1))
    return (
        "You are a creative art director for wedding photography. Based on the aesthetic style "
        f"of the uploaded image, generate {POSE_COUNT} unique pose ideas.\n"
        f"Mandatory pose categories:\n{categories}\n\n"
        "For each pose, provide:\n"
        "- 'title': The pose name (as listed above)\n"
        "- 'prompt': A full AI prompt describing the pose WHILE preserving the visual style "
        "(lighting, tone, camera settings) of the original uploaded image. "
        f"Append the parameters '{POSE_SUFFIX}' at the end of the prompt."
    )


POSE_BATCH_SYSTEM_INSTRUCTION = _pose_system_instruction()

POSE_BATCH_INSTRUCTION = (
    f"Generate {POSE_COUNT} wedding pose prompts based on this image's style."
)

# Gemini response schema (OpenAPI subset) for the pose batch.
POSE_BATCH_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "prompt": {"type": "STRING"},
        },
        "required": ["title", "prompt"],
    },
}


@dataclass(frozen=True)
class PromptRequest:
    """Fully specified request for one remote model call.

    Attributes:
        mode: Which prompt mode produced this request
        system_instruction: Role, task and required output structure
        image: Reference image as an inline payload
        instruction: User instruction sent alongside the image
        temperature: Sampling temperature, or None for the model default
        response_schema: Structured output schema, or None for free text
        response_mime_type: Output MIME type, or None for free text
    """

    mode: Mode
    system_instruction: str
    image: InlineImage
    instruction: str
    temperature: float | None = None
    response_schema: dict[str, Any] | None = None
    response_mime_type: str | None = None

    @property
    def is_structured(self) -> bool:
        return self.response_schema is not None

    def describe(self) -> dict[str, Any]:
        """Loggable summary without the image payload."""
        return {
            "mode": self.mode,
            "media_type": self.image.media_type,
            "payload_len": len(self.image.payload),
            "instruction": self.instruction,
            "temperature": self.temperature,
            "structured": self.is_structured,
        }


def build_style_analysis_request(
    image: InlineImage, temperature: float = DEFAULT_ANALYSIS_TEMPERATURE
) -> PromptRequest:
    """Build the free-text style analysis request."""
    return PromptRequest(
        mode="analyzer",
        system_instruction=STYLE_ANALYSIS_SYSTEM_INSTRUCTION,
        image=image,
        instruction=STYLE_ANALYSIS_INSTRUCTION,
        temperature=temperature,
    )


def build_pose_batch_request(image: InlineImage) -> PromptRequest:
    """Build the schema-constrained eight-pose request."""
    return PromptRequest(
        mode="poses",
        system_instruction=POSE_BATCH_SYSTEM_INSTRUCTION,
        image=image,
        instruction=POSE_BATCH_INSTRUCTION,
        response_schema=POSE_BATCH_SCHEMA,
        response_mime_type="application/json",
    )


def build_request(mode: Mode, image: InlineImage, **kwargs: Any) -> PromptRequest:
    """Dispatch to the builder for ``mode``.

    Raises:
        ValueError: If the mode is unknown
    """
    if mode == "analyzer":
        return build_style_analysis_request(image, **kwargs)
    if mode == "poses":
        return build_pose_batch_request(image)
    raise ValueError(f"Unknown mode: {mode}")
