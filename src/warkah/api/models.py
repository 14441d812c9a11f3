"""Pydantic request and response models for the Warkah REST API.

Models
------
PromptRequestBody
    Payload for ``POST /api/analyze`` and ``POST /api/poses``: one
    reference image as a base64 payload plus its media type, or as a
    ``data:`` URL.
AnalysisResponse
    Result of a style analysis.
PoseResponse
    Result of a pose batch, each pose numbered in display order.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class PromptRequestBody(BaseModel):
    """Request body for the prompt endpoints.

    Attributes:
        image_base64: Base64 image payload, or a full ``data:`` URL.
        media_type: Image media type.  Optional when ``image_base64`` is a
            data URL, which carries its own type.
    """

    image_base64: str = Field(
        ...,
        min_length=1,
        description="Base64-encoded image, or a data:<type>;base64,<payload> URL.",
    )
    media_type: str | None = Field(
        default=None,
        description="Image media type: image/jpeg, image/png or image/webp.",
    )

    @model_validator(mode="after")
    def _require_media_type(self) -> PromptRequestBody:
        if self.media_type is None and not self.image_base64.startswith("data:"):
            raise ValueError("media_type is required unless image_base64 is a data URL")
        return self


class PoseItem(BaseModel):
    """One pose in a :class:`PoseResponse`."""

    index: int = Field(..., ge=1, description="1-based display position.")
    title: str
    prompt: str


class AnalysisResponse(BaseModel):
    success: bool = True
    prompt: str


class PoseResponse(BaseModel):
    success: bool = True
    poses: list[PoseItem]
