"""Remote inference client for the Gemini API.

Executes a :class:`~warkah.core.prompt_requests.PromptRequest` with the
google-genai SDK and returns the raw response text. The client performs a
single call per request: no retries, no timeouts beyond the SDK's own.

Failure modes
-------------
ConfigurationError
    No API key available. Raised before any network I/O.
TransportError
    The SDK call failed (network, auth, quota, invalid argument...).
EmptyResponseError
    The call succeeded but the model returned no text.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from google import genai
from google.genai import types

from .config import CredentialProvider
from .prompt_requests import PromptRequest

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class ConfigurationError(RuntimeError):
    """Raised when the client is not configured to make a call."""

    pass


class TransportError(RuntimeError):
    """Raised when a remote call fails."""

    pass


class EmptyResponseError(TransportError):
    """Raised when the model returns no text."""

    def __init__(self, message: str = "No response from model"):
        super().__init__(message)


class GeminiClient:
    """Thin wrapper over ``genai.Client`` for prompt requests.

    The API key is resolved from ``credentials`` on every call and an SDK
    client is built for that call only and closed when it returns, so a key
    added to the environment after startup is picked up without a restart.

    Args:
        credentials: Provider consulted for the API key at call time
        model: Gemini model name
        client_factory: Callable building an SDK client from ``api_key``;
            defaults to ``genai.Client``
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        model: str = DEFAULT_MODEL,
        client_factory: Callable[..., Any] | None = None,
    ):
        self.credentials = credentials
        self.model = model
        self._client_factory = client_factory or genai.Client

    def generate(self, request: PromptRequest) -> str:
        """Execute ``request`` and return the model's text.

        Raises:
            ConfigurationError: If no API key is configured
            TransportError: If the remote call fails
            EmptyResponseError: If the model returns no text
        """
        api_key = self.credentials.get_api_key()
        if not api_key:
            raise ConfigurationError(
                "Gemini API key not found. Set WARKAH_GEMINI_API_KEY or GEMINI_API_KEY."
            )

        logger.info(f"Calling {self.model} for mode '{request.mode}'")
        logger.debug(f"Request: {request.describe()}")

        started = time.monotonic()
        try:
            with self._client_factory(api_key=api_key) as client:
                response = client.models.generate_content(
                    model=self.model,
                    contents=self._build_contents(request),
                    config=self._build_config(request),
                )
        except Exception as e:
            logger.error(f"Gemini call failed for mode '{request.mode}': {e}")
            raise TransportError(f"Gemini request failed: {e}") from e

        elapsed = time.monotonic() - started
        text = getattr(response, "text", None) or ""
        if not text.strip():
            logger.warning(f"Empty response from {self.model} after {elapsed:.2f}s")
            raise EmptyResponseError()

        logger.info(f"Received {len(text)} characters from {self.model} in {elapsed:.2f}s")
        return text

    @staticmethod
    def _build_contents(request: PromptRequest) -> list[Any]:
        # The SDK base64-encodes bytes on the wire; hand it the raw image.
        image_part = types.Part.from_bytes(
            data=request.image.to_bytes(), mime_type=request.image.media_type
        )
        return [image_part, request.instruction]

    @staticmethod
    def _build_config(request: PromptRequest) -> types.GenerateContentConfig:
        kwargs: dict[str, Any] = {"system_instruction": request.system_instruction}
        if request.temperature is not None:
            kwargs["temperature"] = request.temperature
        if request.response_mime_type is not None:
            kwargs["response_mime_type"] = request.response_mime_type
        if request.response_schema is not None:
            kwargs["response_schema"] = request.response_schema
        return types.GenerateContentConfig(**kwargs)
