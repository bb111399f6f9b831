"""MCP 响应格式化器。

把客户端结果映射为 MCP content block:
    - GeneratedImage -> [ImageContent, TextContent?]（图片在前，说明文字可选）
    - ImageDescription -> [TextContent]
    - 失败 -> isError=True + 单个带前缀的 TextContent
"""

from __future__ import annotations

from mcp.types import CallToolResult, ImageContent, TextContent

from .gemini.types import GeneratedImage, ImageDescription

__all__ = [
    "format_generated_image",
    "format_description",
    "format_error_response",
]


def format_generated_image(result: GeneratedImage) -> CallToolResult:
    """格式化 generate/edit 结果。base64 数据原样透传。"""
    content: list[ImageContent | TextContent] = [
        ImageContent(type="image", data=result.base64_data, mimeType=result.mime_type),
    ]
    if result.description:
        content.append(TextContent(type="text", text=result.description))
    return CallToolResult(content=content)


def format_description(result: ImageDescription) -> CallToolResult:
    """格式化 describe 结果。"""
    return CallToolResult(content=[TextContent(type="text", text=result.text)])


def format_error_response(error: str, label: str = "") -> CallToolResult:
    """统一的错误响应格式化函数。

    Args:
        error: 错误信息
        label: 操作前缀，如 "Failed to generate image"

    Returns:
        isError=True 的 CallToolResult
    """
    text = f"{label}: {error}" if label else error
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=True,
    )
