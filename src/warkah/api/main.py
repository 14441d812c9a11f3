"""Warkah Prompt Studio: FastAPI Application.

A stateless JSON surface over the same pipeline the Gradio UI uses. Each
request carries its own image; nothing is stored between requests.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/api/config``     Version, modes, pose categories, media types
POST      ``/api/analyze``    Style analysis prompt for one image
POST      ``/api/poses``      Eight pose-variation prompts for one image
========  ==================  ==========================================

Errors
------
Messages returned to the client are generic; the underlying cause is
logged.

- 400: invalid media type or payload
- 502: the model call failed or returned unusable output
- 503: no Gemini API key configured

Usage
-----
CLI (installed entry point)::

    warkah-api

Direct invocation::

    python -m warkah.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from warkah import __version__
from warkah.api.models import AnalysisResponse, PoseItem, PoseResponse, PromptRequestBody
from warkah.core.config import ConfigCredentialProvider, config
from warkah.core.gemini_client import ConfigurationError, GeminiClient, TransportError
from warkah.core.image_encoder import SUPPORTED_MEDIA_TYPES, InlineImage, decode_payload
from warkah.core.pose_decoder import DecodeError
from warkah.core.prompt_requests import MODES, POSE_CATEGORIES, POSE_SUFFIX, Mode
from warkah.ui.models import DECODE_FAILURE_MESSAGE, FAILURE_MESSAGES
from warkah.ui.orchestrator import SessionOrchestrator
from warkah.ui.validation import ValidationError, validate_media_type

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the orchestrator on startup.

    Tests may pre-populate ``app.state.orchestrator`` with a fake client;
    an existing orchestrator is left in place.
    """
    if getattr(app.state, "orchestrator", None) is None:
        client = GeminiClient(ConfigCredentialProvider(config), model=config.gemini_model)
        app.state.orchestrator = SessionOrchestrator(client, config)
        logger.info(f"SessionOrchestrator initialised (model={config.gemini_model}).")
    if config.gemini_api_key is None:
        logger.warning("No Gemini API key configured; prompt endpoints will return 503")

    yield


app = FastAPI(
    title="Warkah Prompt Studio",
    description="Wedding style analysis and pose prompt generation with Gemini.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _inline_image(body: PromptRequestBody) -> InlineImage:
    """Turn a request body into a validated inline image.

    Raises:
        HTTPException: 400 for unsupported media types or bad base64
    """
    try:
        if body.image_base64.startswith("data:"):
            image = InlineImage.from_data_url(body.image_base64)
        else:
            image = InlineImage(media_type=body.media_type or "", payload=body.image_base64)
        validate_media_type(image.media_type)
        decode_payload(image.payload)
    except (ValidationError, ValueError) as e:
        logger.warning(f"Rejected image payload: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    return image


def _process(request: Request, mode: Mode, image: InlineImage):
    """Run the pipeline for ``mode`` and map failures to HTTP errors."""
    orchestrator: SessionOrchestrator = request.app.state.orchestrator
    try:
        return orchestrator.process(mode, image)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise HTTPException(
            status_code=503, detail="Gemini API key is not configured on the server."
        ) from e
    except DecodeError as e:
        logger.error(f"Decoding failed for '{mode}': {e}", exc_info=True)
        detail = DECODE_FAILURE_MESSAGE if mode == "poses" else FAILURE_MESSAGES[mode]
        raise HTTPException(status_code=502, detail=detail) from e
    except TransportError as e:
        logger.error(f"Remote call failed for '{mode}': {e}", exc_info=True)
        raise HTTPException(status_code=502, detail=FAILURE_MESSAGES[mode]) from e


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
def get_config() -> dict:
    """Return static configuration for clients.

    Returns:
        Dictionary with keys ``version``, ``model``, ``modes``,
        ``pose_categories``, ``pose_suffix`` and ``media_types``.
    """
    return {
        "version": __version__,
        "model": config.gemini_model,
        "modes": list(MODES),
        "pose_categories": list(POSE_CATEGORIES),
        "pose_suffix": POSE_SUFFIX,
        "media_types": list(SUPPORTED_MEDIA_TYPES),
    }


@app.post("/api/analyze", response_model=AnalysisResponse)
def analyze_style(body: PromptRequestBody, request: Request) -> AnalysisResponse:
    """Generate one descriptive style prompt for the image."""
    image = _inline_image(body)
    prompt = _process(request, "analyzer", image)
    return AnalysisResponse(prompt=prompt)


@app.post("/api/poses", response_model=PoseResponse)
def generate_poses(body: PromptRequestBody, request: Request) -> PoseResponse:
    """Generate eight pose-variation prompts for the image."""
    image = _inline_image(body)
    poses = _process(request, "poses", image)
    return PoseResponse(
        poses=[
            PoseItem(index=i, title=pose.title, prompt=pose.prompt)
            for i, pose in enumerate(poses, start=1)
        ]
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~warkah.core.config.config`
    (``WARKAH_SERVER_HOST`` and ``WARKAH_SERVER_PORT``).
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "warkah.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
