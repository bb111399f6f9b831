"""Gemini 图像模块。

nano-banana-mcp gemini v0.1.0

提供图像生成、编辑和描述的 API 客户端。
"""

from __future__ import annotations

__version__ = "0.1.0"

from .types import (
    AspectRatio,
    ImageSize,
    ImageConfig,
    ImageAttachment,
    GenerateImageOptions,
    EditImageOptions,
    DescribeImageOptions,
    TextPart,
    ImagePart,
    GeneratedImage,
    ImageDescription,
)
from .models import (
    ALLOWED_MODELS,
    DEFAULT_MODEL,
    MODEL_CAPABILITIES,
    ModelCapabilities,
    resolve_model,
)
from .config import API_KEY_ENV, DEFAULT_ENDPOINT, GeminiEnvConfig, get_gemini_config
from .errors import (
    GeminiError,
    GeminiConfigError,
    GeminiInvalidModelError,
    GeminiValidationError,
    GeminiAPIError,
    GeminiNetworkError,
    GeminiResponseFormatError,
    GeminiProviderError,
    GeminiEmptyResponseError,
    GeminiMissingPayloadError,
)
from .client import GeminiImageClient

__all__ = [
    "__version__",
    # Types
    "AspectRatio",
    "ImageSize",
    "ImageConfig",
    "ImageAttachment",
    "GenerateImageOptions",
    "EditImageOptions",
    "DescribeImageOptions",
    "TextPart",
    "ImagePart",
    "GeneratedImage",
    "ImageDescription",
    # Models
    "ALLOWED_MODELS",
    "DEFAULT_MODEL",
    "MODEL_CAPABILITIES",
    "ModelCapabilities",
    "resolve_model",
    # Config
    "API_KEY_ENV",
    "DEFAULT_ENDPOINT",
    "GeminiEnvConfig",
    "get_gemini_config",
    # Errors
    "GeminiError",
    "GeminiConfigError",
    "GeminiInvalidModelError",
    "GeminiValidationError",
    "GeminiAPIError",
    "GeminiNetworkError",
    "GeminiResponseFormatError",
    "GeminiProviderError",
    "GeminiEmptyResponseError",
    "GeminiMissingPayloadError",
    # Client
    "GeminiImageClient",
]
