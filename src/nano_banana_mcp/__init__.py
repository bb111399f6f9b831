"""Nano Banana MCP - Gemini 图像生成 MCP 服务器。

环境变量:
    GEMINI_API_KEY: Gemini API key（必填）
    NBM_ENABLE / NBM_DISABLE: 工具启用/禁用列表
    NBM_LOG_DEBUG: DEBUG 日志输出到临时文件

用法:
    uvx nano-banana-mcp
"""

__version__ = "0.1.0"

from .app import main

__all__ = ["__version__", "main"]
