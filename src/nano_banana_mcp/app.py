"""Nano Banana MCP 应用入口。

包含日志配置、服务器生命周期管理和主入口点。
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from mcp.server.stdio import stdio_server

from .config import Config, get_config
from .gemini import API_KEY_ENV, GeminiImageClient
from .server import create_server

__all__ = ["configure_logging", "run_server", "main"]

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonSerializingFormatter(logging.Formatter):
    """DEBUG 文件日志格式化器：尝试把 dict/list 参数 JSON 序列化。"""

    def format(self, record: logging.LogRecord) -> str:
        if record.args and isinstance(record.args, tuple):
            new_args = []
            for arg in record.args:
                if isinstance(arg, (dict, list)):
                    try:
                        new_args.append(json.dumps(arg, ensure_ascii=False, default=str))
                        continue
                    except (TypeError, ValueError):
                        pass
                new_args.append(arg)
            record.args = tuple(new_args)
        return super().format(record)


def configure_logging(config: Config) -> None:
    """配置日志输出。

    - 默认: INFO 输出到 stderr（stdout 留给 MCP 协议）
    - NBM_LOG_DEBUG: DEBUG 输出到临时文件，ERROR 同时输出到 stderr
    """
    log_handlers: list[logging.Handler] = []

    if config.log_debug and config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(JsonSerializingFormatter(LOG_FORMAT))
        log_handlers.append(file_handler)
        # 启动失败等错误仍然要出现在 stderr
        error_handler = logging.StreamHandler(sys.stderr)
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log_handlers.append(error_handler)
        log_level = logging.DEBUG
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log_handlers.append(stderr_handler)
        log_level = logging.INFO

    # 第三方库只输出 WARNING 以上，减少噪音
    logging.basicConfig(
        level=logging.WARNING,
        handlers=log_handlers,
        force=True,
    )
    logging.getLogger("nano_banana_mcp").setLevel(log_level)


async def run_server(config: Config) -> None:
    """运行 MCP Server（stdio transport）。

    客户端在服务器启动前创建，API key 缺失会立即失败。
    """
    async with GeminiImageClient(config.gemini.api_key, base_url=config.gemini.base_url) as client:
        server = create_server(client, config)
        logger.info(f"Starting Nano Banana MCP server: {config!r}")

        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )

    logger.info("Nano Banana MCP server stopped")


def main() -> None:
    """主入口点。"""
    config = get_config()
    configure_logging(config)

    if not config.gemini.is_configured:
        logger.error(f"Error: {API_KEY_ENV} environment variable is required")
        logger.error(f"Set it with: export {API_KEY_ENV}=your_key_here")
        sys.exit(1)

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
