"""Gemini 模型白名单与能力表。

nano-banana-mcp gemini v0.1.0

模型 ID 会被拼接进请求 URL，所以只接受白名单内的值。
能力表是静态的：新增模型时在这里显式声明是否支持 imageConfig，
不再从模型名字推断。
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import GeminiInvalidModelError

__all__ = [
    "DEFAULT_MODEL",
    "ALLOWED_MODELS",
    "ModelCapabilities",
    "MODEL_CAPABILITIES",
    "resolve_model",
]


@dataclass(frozen=True)
class ModelCapabilities:
    """模型能力。

    Attributes:
        label: 人类可读名称
        supports_image_config: 是否接受 aspectRatio / imageSize
    """
    label: str
    supports_image_config: bool = False


MODEL_CAPABILITIES: dict[str, ModelCapabilities] = {
    "gemini-3-pro-image-preview": ModelCapabilities(
        label="Nano Banana Pro (highest quality)",
        supports_image_config=True,
    ),
    "gemini-2.5-flash-preview-05-20": ModelCapabilities(
        label="Nano Banana (fast)",
    ),
    "gemini-2.0-flash-exp": ModelCapabilities(
        label="Gemini 2.0 Flash (widely available fallback)",
    ),
}

ALLOWED_MODELS: tuple[str, ...] = tuple(MODEL_CAPABILITIES)

DEFAULT_MODEL = "gemini-3-pro-image-preview"


def resolve_model(model: str | None) -> tuple[str, ModelCapabilities]:
    """解析并校验模型 ID。

    Args:
        model: 请求的模型 ID，None 或空字符串使用默认模型

    Returns:
        (model_id, capabilities) 元组

    Raises:
        GeminiInvalidModelError: 模型不在白名单内
    """
    model_id = model or DEFAULT_MODEL
    capabilities = MODEL_CAPABILITIES.get(model_id)
    if capabilities is None:
        raise GeminiInvalidModelError(model_id, ALLOWED_MODELS)
    return model_id, capabilities
