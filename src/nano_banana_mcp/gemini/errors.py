"""Gemini 模块异常类。

nano-banana-mcp gemini v0.1.0

所有异常都继承 GeminiError，handler 层统一捕获后渲染为带前缀的错误结果。
"""

from __future__ import annotations

from typing import Iterable

__all__ = [
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
]


class GeminiError(Exception):
    """Gemini 模块基础异常。"""
    pass


class GeminiConfigError(GeminiError):
    """配置错误（如缺少 API key）。"""
    pass


class GeminiInvalidModelError(GeminiError):
    """模型不在白名单内（发请求前检测）。

    Attributes:
        model: 请求的模型 ID
        allowed: 允许的模型 ID 列表
    """

    def __init__(self, model: str, allowed: Iterable[str]) -> None:
        self.model = model
        self.allowed = tuple(allowed)
        super().__init__(f"Invalid model: {model}. Allowed: {', '.join(self.allowed)}")


class GeminiValidationError(GeminiError):
    """本地参数校验失败（如 describe 未提供图片）。"""
    pass


class GeminiAPIError(GeminiError):
    """HTTP 非成功状态码。

    Attributes:
        status_code: HTTP 状态码
        body: 原始响应体文本
    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API error ({status_code}): {body}")


class GeminiNetworkError(GeminiError):
    """网络层错误（连接失败、连接中断等）。"""
    pass


class GeminiResponseFormatError(GeminiError):
    """成功状态码但响应体不是合法 JSON。"""
    pass


class GeminiProviderError(GeminiError):
    """HTTP 成功但响应体带有 error 对象。

    消息只包含 provider 的 message 文本，不包含数字 code。

    Attributes:
        message: provider 返回的错误消息
        code: provider 返回的错误码（可能为 None）
        status: provider 返回的状态字符串
    """

    def __init__(self, message: str, code: int | None = None, status: str = "") -> None:
        self.message = message
        self.code = code
        self.status = status
        super().__init__(f"Gemini API error: {message}")


class GeminiEmptyResponseError(GeminiError):
    """响应中没有任何 candidate。"""
    pass


class GeminiMissingPayloadError(GeminiError):
    """candidate 存在，但没有可用的图片（generate/edit）或文本（describe）。"""
    pass
