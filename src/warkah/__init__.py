"""Warkah Prompt Studio - wedding style analysis and pose prompt generation."""

__version__ = "0.1.0"

from warkah.core.config import WarkahConfig, config
from warkah.core.gemini_client import GeminiClient
from warkah.core.pose_decoder import PosePrompt

__all__ = [
    "GeminiClient",
    "PosePrompt",
    "WarkahConfig",
    "config",
]
