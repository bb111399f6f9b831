"""Gemini 请求体构建。

nano-banana-mcp gemini v0.1.0

请求体格式由 Gemini generateContent 接口决定:

    {
      "contents": [{"parts": [{"text": ...}, {"inlineData": {...}}, ...]}],
      "generationConfig": {
        "responseModalities": [...],
        "imageConfig": {"aspectRatio": ..., "imageSize": ...}   # 可选
      }
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import GeminiValidationError
from .models import ModelCapabilities, resolve_model
from .types import (
    DescribeImageOptions,
    EditImageOptions,
    GenerateImageOptions,
    ImageAttachment,
    ImageConfig,
)

__all__ = [
    "DEFAULT_DESCRIBE_PROMPT",
    "GeminiRequest",
    "build_generate_request",
    "build_edit_request",
    "build_describe_request",
]

DEFAULT_DESCRIBE_PROMPT = (
    "Describe this image in detail. Include the subject, composition, colors, "
    "style, lighting and any visible text."
)

GENERATE_MODALITIES = ["TEXT", "IMAGE"]
DESCRIBE_MODALITIES = ["TEXT"]


@dataclass
class GeminiRequest:
    """一次出站调用。

    Attributes:
        model: 已校验的模型 ID
        body: JSON 请求体
    """
    model: str
    body: dict[str, Any]


def _build_contents(prompt: str, images: list[ImageAttachment]) -> list[dict[str, Any]]:
    # prompt 永远在最前，图片按输入顺序
    parts: list[dict[str, Any]] = [{"text": prompt}]
    parts.extend(image.to_part() for image in images)
    return [{"parts": parts}]


def _build_generation_config(
    modalities: list[str],
    capabilities: ModelCapabilities,
    image_config: ImageConfig | None = None,
) -> dict[str, Any]:
    generation_config: dict[str, Any] = {"responseModalities": list(modalities)}
    if image_config is not None and capabilities.supports_image_config and not image_config.is_empty:
        generation_config["imageConfig"] = image_config.to_payload()
    return generation_config


def build_generate_request(options: GenerateImageOptions) -> GeminiRequest:
    """构建 generate 请求。

    不支持 imageConfig 的模型会静默丢弃 aspect_ratio / image_size。

    Raises:
        GeminiInvalidModelError: 模型不在白名单内
    """
    model, capabilities = resolve_model(options.model)
    body = {
        "contents": _build_contents(options.prompt, options.images),
        "generationConfig": _build_generation_config(
            GENERATE_MODALITIES,
            capabilities,
            options.image_config,
        ),
    }
    return GeminiRequest(model, body)


def build_edit_request(options: EditImageOptions) -> GeminiRequest:
    """构建 edit 请求（不带图片形状配置的 generate）。"""
    return build_generate_request(
        GenerateImageOptions(
            prompt=options.prompt,
            model=options.model,
            images=list(options.images),
        )
    )


def build_describe_request(options: DescribeImageOptions) -> GeminiRequest:
    """构建 describe 请求。

    Raises:
        GeminiValidationError: 未提供图片
        GeminiInvalidModelError: 模型不在白名单内
    """
    if not options.images:
        raise GeminiValidationError("At least one image is required")

    model, capabilities = resolve_model(options.model)
    body = {
        "contents": _build_contents(options.prompt or DEFAULT_DESCRIBE_PROMPT, options.images),
        "generationConfig": _build_generation_config(DESCRIBE_MODALITIES, capabilities),
    }
    return GeminiRequest(model, body)
