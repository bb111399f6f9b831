"""Nano Banana MCP Server。

通过 MCP 暴露 Gemini 图像生成、编辑和描述能力。

环境变量:
    GEMINI_API_KEY: Gemini API key（必填）
    NBM_ENABLE / NBM_DISABLE: 工具启用/禁用列表
    NBM_LOG_DEBUG: DEBUG 日志输出到临时文件

用法:
    uvx nano-banana-mcp
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import anyio
from mcp.server import Server
from mcp.types import CallToolResult, Tool

from .config import Config, get_config
from .gemini import GeminiImageClient
from .handlers import HANDLERS, ToolContext
from .response_formatter import format_error_response
from .tool_schema import TOOL_ORDER

__all__ = ["SERVER_NAME", "create_server", "list_enabled_tools", "dispatch_tool"]

logger = logging.getLogger(__name__)

SERVER_NAME = "nano-banana-mcp"


def _summarize_arguments(arguments: dict[str, Any]) -> str:
    """生成日志用的参数摘要（截断长字符串和图片数据）。"""
    summary: dict[str, Any] = {}
    for k, v in arguments.items():
        if isinstance(v, str) and len(v) > 100:
            summary[k] = v[:100] + "..."
        elif k == "images" and isinstance(v, list):
            summary[k] = f"<{len(v)} images>"
        else:
            summary[k] = v
    return json.dumps(summary, ensure_ascii=False, default=str)


def list_enabled_tools(config: Config) -> list[Tool]:
    """按固定顺序列出启用的工具。"""
    tools = []
    for name in TOOL_ORDER:
        if config.is_tool_allowed(name):
            handler = HANDLERS[name]()
            tools.append(
                Tool(
                    name=handler.name,
                    description=handler.description,
                    inputSchema=handler.get_input_schema(),
                )
            )
    return tools


async def dispatch_tool(
    name: str,
    arguments: dict[str, Any] | None,
    ctx: ToolContext,
) -> CallToolResult:
    """把一次工具调用分发给对应 handler。

    除取消外不抛出异常，所有失败都转换成 isError=True 的结果。
    """
    arguments = arguments or {}
    logger.debug(f"[MCP] call_tool: {name} {_summarize_arguments(arguments)}")

    handler_cls = HANDLERS.get(name)
    if handler_cls is None:
        return format_error_response(f"Unknown tool: {name}")

    if not ctx.config.is_tool_allowed(name):
        return format_error_response(f"Tool '{name}' is not enabled")

    handler = handler_cls()
    try:
        return await handler.handle(arguments, ctx)

    except (anyio.get_cancelled_exc_class(), asyncio.CancelledError):
        logger.info(f"Tool '{name}' cancelled")
        raise

    except Exception as e:
        # handler 已经处理了已知错误，这里兜底防止单次调用拖垮整个服务
        logger.exception(f"Tool '{name}' unexpected error: {e}")
        return format_error_response(str(e), handler.error_label)


def create_server(
    client: GeminiImageClient,
    config: Config | None = None,
) -> Server:
    """创建 MCP Server 实例。

    Args:
        client: Gemini 图像客户端
        config: 配置（可选，默认从环境变量加载）
    """
    config = config or get_config()
    server = Server(SERVER_NAME)
    tool_ctx = ToolContext(config=config, client=client)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """列出可用工具。"""
        tools = list_enabled_tools(config)
        logger.debug(f"[MCP] list_tools returning {[t.name for t in tools]}")
        return tools

    # 参数校验由 handler 的 pydantic 模型负责，失败时返回带前缀的错误
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        """调用工具。"""
        return await dispatch_tool(name, arguments, tool_ctx)

    return server
