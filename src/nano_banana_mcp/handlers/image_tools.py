"""图像工具处理器。

处理 generate_image / edit_image / describe_image 工具调用。
"""

from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod
from typing import Any

from mcp.types import CallToolResult
from pydantic import BaseModel, ValidationError

from .arguments import (
    DescribeImageArguments,
    EditImageArguments,
    GenerateImageArguments,
    format_validation_error,
)
from .base import ToolContext, ToolHandler
from ..gemini import GeminiError
from ..response_formatter import (
    format_description,
    format_error_response,
    format_generated_image,
)
from ..tool_schema import TOOL_DESCRIPTIONS, TOOL_ERROR_LABELS, create_tool_schema

__all__ = [
    "ImageToolHandler",
    "GenerateImageHandler",
    "EditImageHandler",
    "DescribeImageHandler",
]

logger = logging.getLogger(__name__)


class ImageToolHandler(ToolHandler):
    """图像工具公共流程：校验参数 -> 调用客户端 -> 格式化结果。

    子类只需要声明 name、arguments_model 和 invoke。
    """

    arguments_model: type[BaseModel]

    @property
    def description(self) -> str:
        return TOOL_DESCRIPTIONS[self.name]

    @property
    def error_label(self) -> str:
        return TOOL_ERROR_LABELS[self.name]

    def get_input_schema(self) -> dict[str, Any]:
        return create_tool_schema(self.name)

    @abstractmethod
    async def invoke(self, args: Any, ctx: ToolContext) -> CallToolResult:
        """调用客户端并格式化成功结果。"""
        ...

    async def handle(
        self,
        arguments: dict[str, Any],
        ctx: ToolContext,
    ) -> CallToolResult:
        try:
            args = self.arguments_model.model_validate(arguments or {})
            return await self.invoke(args, ctx)

        except asyncio.CancelledError:
            logger.info(f"{self.name} cancelled")
            raise

        except ValidationError as e:
            message = format_validation_error(e)
            logger.info(f"{self.name} invalid arguments: {message}")
            return format_error_response(message, self.error_label)

        except GeminiError as e:
            logger.warning(f"{self.name} failed: {type(e).__name__}: {e}")
            return format_error_response(str(e), self.error_label)

        except Exception as e:
            logger.exception(f"Unexpected error in {self.name}: {e}")
            return format_error_response(str(e) or type(e).__name__, self.error_label)


class GenerateImageHandler(ImageToolHandler):
    """generate_image 工具处理器。"""

    arguments_model = GenerateImageArguments

    @property
    def name(self) -> str:
        return "generate_image"

    async def invoke(self, args: GenerateImageArguments, ctx: ToolContext) -> CallToolResult:
        result = await ctx.client.generate_image(args.to_options())
        return format_generated_image(result)


class EditImageHandler(ImageToolHandler):
    """edit_image 工具处理器。"""

    arguments_model = EditImageArguments

    @property
    def name(self) -> str:
        return "edit_image"

    async def invoke(self, args: EditImageArguments, ctx: ToolContext) -> CallToolResult:
        result = await ctx.client.edit_image(args.to_options())
        return format_generated_image(result)


class DescribeImageHandler(ImageToolHandler):
    """describe_image 工具处理器。"""

    arguments_model = DescribeImageArguments

    @property
    def name(self) -> str:
        return "describe_image"

    async def invoke(self, args: DescribeImageArguments, ctx: ToolContext) -> CallToolResult:
        result = await ctx.client.describe_image(args.to_options())
        return format_description(result)
