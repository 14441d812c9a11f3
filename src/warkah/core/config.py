"""Configuration management for Warkah Prompt Studio.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the WARKAH_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (WARKAH_* prefix)
2. .env file in the project root
3. Default values defined in WarkahConfig

The Gemini API key is the one exception to the prefix rule: it is also read
from ``GEMINI_API_KEY`` or ``API_KEY`` so that an existing Google AI Studio
setup works unchanged.

Example .env file:
    WARKAH_GEMINI_API_KEY=your-key-here
    WARKAH_GEMINI_MODEL=gemini-2.5-flash
    WARKAH_PREVIEW_DIR=previews

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from warkah.core.config import config

    print(config.gemini_model)
    print(config.preview_dir)

Credentials
-----------
The remote client never reads the key from the config directly. It asks a
:class:`CredentialProvider` at call time, so a missing key is reported per
call and tests can inject a fixed key.
"""

from pathlib import Path
from typing import Protocol

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class WarkahConfig(BaseSettings):
    """Main configuration for Warkah Prompt Studio.

    Attributes
    ----------
    Gemini Settings:
        gemini_api_key : SecretStr | None
            API key for the Gemini API (also read from GEMINI_API_KEY / API_KEY)
        gemini_model : str
            Model used for both style analysis and pose generation
        analysis_temperature : float
            Sampling temperature for the free-text style analysis

    Preview Settings:
        preview_dir : Path
            Directory where uploaded-image thumbnails are written
        preview_max_size : int
            Longest edge of a preview thumbnail in pixels

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    API Settings:
        server_host : str
            Bind address for the REST API
        server_port : int
            Port for the REST API (1024-65535)

    Examples
    --------
        >>> custom_config = WarkahConfig(
        ...     gemini_api_key="test-key",
        ...     preview_dir="/tmp/previews",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WARKAH_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Gemini settings
    gemini_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("WARKAH_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="API key for the Gemini API",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used for analysis and pose generation",
    )
    analysis_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for style analysis",
        ge=0.0,
        le=2.0,
    )

    # Preview thumbnails
    preview_dir: Path = Field(
        default=Path("previews"),
        description="Directory for uploaded-image preview thumbnails",
    )
    preview_max_size: int = Field(
        default=512,
        description="Longest edge of a preview thumbnail in pixels",
        ge=64,
        le=2048,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    # REST API settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Bind address for the REST API",
    )
    server_port: int = Field(
        default=8000,
        description="Port for the REST API",
        ge=1024,
        le=65535,
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the preview directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.preview_dir.mkdir(parents=True, exist_ok=True)


class CredentialProvider(Protocol):
    """Source of the Gemini API key, consulted once per remote call."""

    def get_api_key(self) -> str | None: ...


class ConfigCredentialProvider:
    """Resolve the API key from a :class:`WarkahConfig` at call time."""

    def __init__(self, settings: WarkahConfig):
        self.settings = settings

    def get_api_key(self) -> str | None:
        secret = self.settings.gemini_api_key
        if secret is None:
            return None
        return secret.get_secret_value().strip() or None


class StaticCredentialProvider:
    """Fixed API key, for scripting and tests."""

    def __init__(self, api_key: str | None):
        self.api_key = api_key

    def get_api_key(self) -> str | None:
        return self.api_key


# Global configuration instance
config = WarkahConfig()
