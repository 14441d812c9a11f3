"""Decoding and validation of model responses.

The style analysis path passes text through. The pose path parses the
model's JSON and validates it against an explicit shape: exactly
:data:`POSE_COUNT` records, each with a non-empty ``title`` and ``prompt``.
Anything else raises :class:`DecodeError` and nothing partial is returned.
"""

import json
import logging
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, TypeAdapter, ValidationError

from .prompt_requests import POSE_COUNT, POSE_SUFFIX

logger = logging.getLogger(__name__)

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class DecodeError(ValueError):
    """Raised when a model response does not have the expected shape."""

    def __init__(self, message: str = "Failed to process pose data"):
        super().__init__(message)


class PosePrompt(BaseModel):
    """One pose variation: short label plus full generative prompt."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: NonEmptyStr
    prompt: NonEmptyStr


PoseBatch = tuple[PosePrompt, ...]

_pose_list_adapter = TypeAdapter(list[PosePrompt])


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    s = text.strip()
    if s.startswith("```"):
        first_nl = s.find("\n")
        if first_nl != -1:
            s = s[first_nl + 1 :]
        if s.rstrip().endswith("```"):
            s = s.rstrip()[:-3]
    return s.strip()


def ensure_suffix(prompt: str, suffix: str = POSE_SUFFIX) -> str:
    """Append the aspect-ratio/version suffix unless already present."""
    prompt = prompt.rstrip()
    if prompt.endswith(suffix):
        return prompt
    return f"{prompt} {suffix}"


def decode_style_analysis(text: str) -> str:
    """Return the analysis text, stripped.

    Raises:
        DecodeError: If the text is empty
    """
    result = (text or "").strip()
    if not result:
        raise DecodeError("Style analysis response was empty")
    return result


def decode_pose_batch(text: str) -> PoseBatch:
    """Parse and validate a pose batch response.

    Args:
        text: Raw model output, expected to be a JSON array

    Returns:
        Tuple of exactly POSE_COUNT PosePrompt records in model order

    Raises:
        DecodeError: On invalid JSON, wrong shape, or wrong record count
    """
    try:
        data = json.loads(strip_code_fences(text or ""))
    except (json.JSONDecodeError, RecursionError) as e:
        logger.error(f"Pose response is not valid JSON: {e}")
        raise DecodeError() from e

    try:
        poses = _pose_list_adapter.validate_python(data)
    except ValidationError as e:
        logger.error(f"Pose response has an invalid shape: {e}")
        raise DecodeError() from e

    if len(poses) != POSE_COUNT:
        logger.error(f"Expected {POSE_COUNT} poses, got {len(poses)}")
        raise DecodeError()

    return tuple(
        PosePrompt(title=pose.title, prompt=ensure_suffix(pose.prompt)) for pose in poses
    )
