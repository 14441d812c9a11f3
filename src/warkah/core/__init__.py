"""Core functionality for prompt generation.

This package holds everything between an uploaded file and a decoded model
response. Nothing in it knows about Gradio or FastAPI.

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with WARKAH_ in .env files
   - Credential providers resolving the Gemini API key per call

2. **Encoding** (image_encoder.py):
   - File or bytes to base64 inline payload with media type

3. **Request Building** (prompt_requests.py):
   - Style analysis and pose batch request descriptors
   - Fixed system instructions and the pose response schema

4. **Remote Client** (gemini_client.py):
   - google-genai call, configuration/transport/empty-response errors

5. **Decoding** (pose_decoder.py):
   - JSON parsing and schema validation of the eight-pose batch

Usage Example
-------------
    from warkah.core import (
        ConfigCredentialProvider, GeminiClient, build_pose_batch_request,
        config, decode_pose_batch, encode_image,
    )

    client = GeminiClient(ConfigCredentialProvider(config), model=config.gemini_model)
    image = encode_image("reference.jpg", "image/jpeg")
    poses = decode_pose_batch(client.generate(build_pose_batch_request(image)))
"""

from warkah.core.config import (
    ConfigCredentialProvider,
    CredentialProvider,
    StaticCredentialProvider,
    WarkahConfig,
    config,
)
from warkah.core.gemini_client import (
    ConfigurationError,
    EmptyResponseError,
    GeminiClient,
    TransportError,
)
from warkah.core.image_encoder import (
    SUPPORTED_MEDIA_TYPES,
    ImageEncodingError,
    InlineImage,
    encode_bytes,
    encode_image,
)
from warkah.core.pose_decoder import (
    DecodeError,
    PoseBatch,
    PosePrompt,
    decode_pose_batch,
    decode_style_analysis,
)
from warkah.core.prompt_requests import (
    MODES,
    POSE_CATEGORIES,
    POSE_SUFFIX,
    Mode,
    PromptRequest,
    build_pose_batch_request,
    build_request,
    build_style_analysis_request,
)

__all__ = [
    "ConfigCredentialProvider",
    "CredentialProvider",
    "StaticCredentialProvider",
    "WarkahConfig",
    "config",
    "ConfigurationError",
    "EmptyResponseError",
    "GeminiClient",
    "TransportError",
    "SUPPORTED_MEDIA_TYPES",
    "ImageEncodingError",
    "InlineImage",
    "encode_bytes",
    "encode_image",
    "DecodeError",
    "PoseBatch",
    "PosePrompt",
    "decode_pose_batch",
    "decode_style_analysis",
    "MODES",
    "POSE_CATEGORIES",
    "POSE_SUFFIX",
    "Mode",
    "PromptRequest",
    "build_pose_batch_request",
    "build_request",
    "build_style_analysis_request",
]
