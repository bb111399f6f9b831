"""Gemini 模块配置。

nano-banana-mcp gemini v0.1.0

环境变量:
    GEMINI_API_KEY: API key（必填，以 ?key= 查询参数发送）
    GEMINI_ENDPOINT: API 端点 URL（默认 Google AI Studio）
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .debug_utils import mask_token

__all__ = [
    "API_KEY_ENV",
    "ENDPOINT_ENV",
    "DEFAULT_ENDPOINT",
    "GeminiEnvConfig",
    "normalize_endpoint",
    "get_gemini_config",
]

API_KEY_ENV = "GEMINI_API_KEY"
ENDPOINT_ENV = "GEMINI_ENDPOINT"

# 默认 API 端点（模型列表路径）
DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"


def normalize_endpoint(url: str) -> str:
    """规范化端点 URL，自动补全 /models 路径。"""
    url = url.rstrip("/")
    if url.endswith("/models"):
        return url
    # 只给了版本根路径
    if url.endswith(("/v1beta", "/v1")):
        return f"{url}/models"
    return f"{url}/v1beta/models"


@dataclass
class GeminiEnvConfig:
    """Gemini 环境配置。

    Attributes:
        api_key: API key
        base_url: 模型端点 URL（不含模型 ID）
    """
    api_key: str
    base_url: str = DEFAULT_ENDPOINT

    @property
    def is_configured(self) -> bool:
        """检查是否已配置 API key。"""
        return bool(self.api_key)

    def __repr__(self) -> str:
        return f"GeminiEnvConfig(api_key={mask_token(self.api_key)}, base_url={self.base_url})"


def get_gemini_config() -> GeminiEnvConfig:
    """从环境变量加载配置。"""
    raw_url = os.environ.get(ENDPOINT_ENV, "")
    return GeminiEnvConfig(
        api_key=os.environ.get(API_KEY_ENV, "").strip(),
        base_url=normalize_endpoint(raw_url) if raw_url.strip() else DEFAULT_ENDPOINT,
    )
