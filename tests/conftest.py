"""Shared pytest fixtures for Warkah tests."""

import json
import shutil
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Generator

import pytest
from PIL import Image

from warkah.core.config import StaticCredentialProvider, WarkahConfig
from warkah.core.gemini_client import GeminiClient
from warkah.core.prompt_requests import POSE_CATEGORIES, POSE_SUFFIX
from warkah.ui.models import UIState
from warkah.ui.orchestrator import SessionOrchestrator


class FakeGemini:
    """Stand-in for ``genai.Client`` recording every call.

    Acts as the client factory (called with ``api_key``), the client, and
    its ``models`` namespace at once.
    """

    def __init__(self, response_text: str = "", error: Exception | None = None):
        self.response_text = response_text
        self.error = error
        self.calls: list[dict] = []
        self.api_keys: list[str] = []
        self.closed = 0

    def __call__(self, api_key: str) -> "FakeGemini":
        self.api_keys.append(api_key)
        return self

    def __enter__(self) -> "FakeGemini":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.closed += 1

    @property
    def models(self) -> "FakeGemini":
        return self

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.response_text)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> WarkahConfig:
    """Create a test configuration with a temporary preview directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        WarkahConfig instance for testing
    """
    return WarkahConfig(
        _env_file=None,
        gemini_api_key="test-key",
        preview_dir=str(temp_dir / "previews"),
        preview_max_size=128,
    )


@pytest.fixture
def fake_gemini() -> FakeGemini:
    """Fake SDK client returning an empty response until configured."""
    return FakeGemini()


@pytest.fixture
def gemini_client(fake_gemini: FakeGemini) -> GeminiClient:
    """GeminiClient wired to the fake SDK with a fixed key."""
    return GeminiClient(
        StaticCredentialProvider("test-key"),
        model="gemini-test",
        client_factory=fake_gemini,
    )


@pytest.fixture
def orchestrator(gemini_client: GeminiClient, test_config: WarkahConfig) -> SessionOrchestrator:
    return SessionOrchestrator(gemini_client, test_config)


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing.

    Returns:
        UIState instance
    """
    return UIState()


def _write_image(path: Path, fmt: str, size: tuple[int, int] = (64, 48)) -> Path:
    Image.new("RGB", size, (200, 160, 120)).save(path, format=fmt)
    return path


@pytest.fixture
def sample_images(temp_dir: Path) -> dict[str, Path]:
    """One small image per format, keyed by extension.

    Returns:
        Dict mapping "jpg", "png", "webp" and "gif" to file paths
    """
    images_dir = temp_dir / "images"
    images_dir.mkdir()
    return {
        "jpg": _write_image(images_dir / "reference.jpg", "JPEG"),
        "png": _write_image(images_dir / "reference.png", "PNG"),
        "webp": _write_image(images_dir / "reference.webp", "WEBP"),
        "gif": _write_image(images_dir / "reference.gif", "GIF"),
    }


@pytest.fixture
def pose_records() -> list[dict[str, str]]:
    """Eight valid pose records in category order."""
    return [
        {
            "title": category,
            "prompt": f"Bride and groom, {category.lower()}, golden hour, 85mm f/1.2 {POSE_SUFFIX}",
        }
        for category in POSE_CATEGORIES
    ]


@pytest.fixture
def pose_json(pose_records: list[dict[str, str]]) -> str:
    """Pose records serialised the way the model returns them."""
    return json.dumps(pose_records)


@pytest.fixture
def test_client(orchestrator: SessionOrchestrator) -> Generator:
    """FastAPI TestClient whose orchestrator uses the fake Gemini client.

    The orchestrator is placed on ``app.state`` before the lifespan runs,
    so startup keeps it instead of building a real one.
    """
    from fastapi.testclient import TestClient

    from warkah.api.main import app

    app.state.orchestrator = orchestrator
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.state.orchestrator = None


@pytest.fixture
def installed_orchestrator(orchestrator: SessionOrchestrator) -> Generator:
    """Install the test orchestrator for the Gradio handlers."""
    from warkah.ui.handlers import set_orchestrator

    set_orchestrator(orchestrator)
    try:
        yield orchestrator
    finally:
        set_orchestrator(None)
