"""NBM 环境变量配置管理。

环境变量:
    GEMINI_API_KEY: Gemini API key（必填，缺失时服务无法启动）

    GEMINI_ENDPOINT: Gemini 端点 URL（可选，默认 Google AI Studio）

    NBM_ENABLE: 启用的工具列表
        - 空/未设置 = 全部可用 (generate_image, edit_image, describe_image)
        - 逗号分割，忽略大小写
        - 例: "generate_image,describe_image"

    NBM_DISABLE: 禁用的工具列表（从 enable 中减去）
        - 逗号分割，忽略大小写
        - 例: "edit_image"

    NBM_LOG_DEBUG: 日志调试模式
        - true/1/yes = 开启 (DEBUG 日志输出到临时文件)
        - false/0/no = 关闭 (默认，INFO 日志输出到 stderr)
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .gemini.config import GeminiEnvConfig, get_gemini_config
from .tool_schema import SUPPORTED_TOOLS

__all__ = ["Config", "load_config", "get_config", "reload_config"]


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """解析布尔值环境变量。"""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_tool_list(value: str | None) -> set[str]:
    """解析工具列表环境变量，忽略未知工具名。"""
    if not value or not value.strip():
        return set()

    tools = set()
    for item in value.split(","):
        tool = item.strip().lower()
        if tool and tool in SUPPORTED_TOOLS:
            tools.add(tool)

    return tools


def _compute_enabled_tools(enable: str | None, disable: str | None) -> set[str]:
    """计算最终启用的工具列表。

    Args:
        enable: NBM_ENABLE 环境变量值
        disable: NBM_DISABLE 环境变量值

    Returns:
        最终启用的工具集合
    """
    enabled = _parse_tool_list(enable)
    disabled = _parse_tool_list(disable)

    # enable 为空时默认全开
    if not enabled:
        enabled = set(SUPPORTED_TOOLS)

    return enabled - disabled


@dataclass
class Config:
    """NBM 配置。

    Attributes:
        gemini: Gemini 客户端配置（API key + 端点）
        tools: 启用的工具集合
        log_debug: 日志调试模式（输出到临时文件）
        log_file: 日志文件路径（当 log_debug=True 时自动设置）
    """

    gemini: GeminiEnvConfig = field(default_factory=lambda: GeminiEnvConfig(api_key=""))
    tools: set[str] = field(default_factory=lambda: set(SUPPORTED_TOOLS))
    log_debug: bool = False
    log_file: str | None = None

    def is_tool_allowed(self, tool: str) -> bool:
        """检查工具是否允许使用。"""
        return tool.lower() in self.tools

    def __repr__(self) -> str:
        tools_str = ",".join(sorted(self.tools)) or "none"
        return (
            f"Config(gemini={self.gemini!r}, "
            f"tools={tools_str}, "
            f"log_debug={self.log_debug}, "
            f"log_file={self.log_file})"
        )


def _generate_log_file_path() -> str:
    """生成日志文件路径（系统临时目录下）。"""
    log_dir = Path(tempfile.gettempdir()) / "nano-banana-mcp"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"nbm_debug_{timestamp}.log"

    return str(log_file.resolve())


def load_config() -> Config:
    """从环境变量加载配置。"""
    log_debug = _parse_bool(os.environ.get("NBM_LOG_DEBUG"), default=False)
    log_file = _generate_log_file_path() if log_debug else None

    return Config(
        gemini=get_gemini_config(),
        tools=_compute_enabled_tools(
            os.environ.get("NBM_ENABLE"),
            os.environ.get("NBM_DISABLE"),
        ),
        log_debug=log_debug,
        log_file=log_file,
    )


# 全局配置实例（延迟加载）
_config: Config | None = None


def get_config() -> Config:
    """获取全局配置实例。"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """重新加载配置（用于测试）。"""
    global _config
    _config = load_config()
    return _config
