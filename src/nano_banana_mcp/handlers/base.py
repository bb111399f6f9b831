"""Tool Handler 基础抽象。

定义工具处理器的协议和上下文。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mcp.types import CallToolResult

if TYPE_CHECKING:
    from ..config import Config
    from ..gemini import GeminiImageClient

__all__ = [
    "ToolContext",
    "ToolHandler",
]


@dataclass
class ToolContext:
    """工具执行上下文。

    封装工具执行所需的所有依赖，避免在函数间传递大量参数。
    """

    config: "Config"
    client: "GeminiImageClient"


class ToolHandler(ABC):
    """工具处理器协议。

    所有工具处理器必须实现此接口。handle 不抛出业务异常，
    失败一律以 isError=True 的结果返回。
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """工具名称。"""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """工具描述。"""
        ...

    @abstractmethod
    def get_input_schema(self) -> dict[str, Any]:
        """获取输入参数 schema。"""
        ...

    @abstractmethod
    async def handle(
        self,
        arguments: dict[str, Any],
        ctx: ToolContext,
    ) -> CallToolResult:
        """处理工具调用。

        Args:
            arguments: 工具参数
            ctx: 执行上下文

        Returns:
            CallToolResult
        """
        ...
