"""Tool Handlers 模块。

提供工具处理器抽象和具体实现。
"""

from .base import ToolContext, ToolHandler
from .image_tools import (
    DescribeImageHandler,
    EditImageHandler,
    GenerateImageHandler,
    ImageToolHandler,
)

# 工具名 -> 处理器类
HANDLERS: dict[str, type[ImageToolHandler]] = {
    "generate_image": GenerateImageHandler,
    "edit_image": EditImageHandler,
    "describe_image": DescribeImageHandler,
}

__all__ = [
    "ToolContext",
    "ToolHandler",
    "ImageToolHandler",
    "GenerateImageHandler",
    "EditImageHandler",
    "DescribeImageHandler",
    "HANDLERS",
]
