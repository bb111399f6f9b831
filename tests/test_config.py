"""Config 模块测试。

测试 GEMINI_* / NBM_* 环境变量解析和配置管理。
"""

from __future__ import annotations

import os
from unittest import mock

import pytest

from nano_banana_mcp.config import Config, load_config, get_config, reload_config
from nano_banana_mcp.gemini import DEFAULT_ENDPOINT, GeminiEnvConfig, get_gemini_config
from nano_banana_mcp.gemini.config import normalize_endpoint
from nano_banana_mcp.tool_schema import SUPPORTED_TOOLS

CONFIG_VARS = ("GEMINI_API_KEY", "GEMINI_ENDPOINT", "NBM_ENABLE", "NBM_DISABLE", "NBM_LOG_DEBUG")


def _clean_env(**overrides: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in CONFIG_VARS}
    env.update(overrides)
    return env


class TestParseTools:
    """测试工具列表解析。"""

    def test_unset_tools_means_all(self):
        """未设置工具列表表示全部可用。"""
        with mock.patch.dict(os.environ, _clean_env(), clear=True):
            config = load_config()
            assert config.tools == set(SUPPORTED_TOOLS)

    def test_single_tool(self):
        with mock.patch.dict(os.environ, _clean_env(NBM_ENABLE="generate_image"), clear=True):
            assert load_config().tools == {"generate_image"}

    def test_case_and_whitespace(self):
        """大小写不敏感，忽略空格。"""
        with mock.patch.dict(os.environ, _clean_env(NBM_ENABLE=" Generate_Image , DESCRIBE_IMAGE "), clear=True):
            assert load_config().tools == {"generate_image", "describe_image"}

    def test_invalid_tools_ignored(self):
        with mock.patch.dict(os.environ, _clean_env(NBM_ENABLE="edit_image,banana"), clear=True):
            assert load_config().tools == {"edit_image"}

    def test_all_invalid_means_all(self):
        """全部无效时 enable 解析为空，所以全部可用。"""
        with mock.patch.dict(os.environ, _clean_env(NBM_ENABLE="foo,bar"), clear=True):
            assert load_config().tools == set(SUPPORTED_TOOLS)

    def test_disable_subtracts(self):
        with mock.patch.dict(os.environ, _clean_env(NBM_DISABLE="edit_image"), clear=True):
            assert load_config().tools == {"generate_image", "describe_image"}


class TestParseBool:
    """测试布尔值解析。"""

    @pytest.mark.parametrize("value", ["true", "True", "1", "yes", "on"])
    def test_truthy_values(self, value: str, tmp_path):
        with mock.patch.dict(os.environ, _clean_env(NBM_LOG_DEBUG=value), clear=True), \
                mock.patch("tempfile.gettempdir", return_value=str(tmp_path)):
            config = load_config()
            assert config.log_debug is True
            assert config.log_file is not None
            assert config.log_file.startswith(str(tmp_path.resolve()))

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", ""])
    def test_falsy_values(self, value: str):
        with mock.patch.dict(os.environ, _clean_env(NBM_LOG_DEBUG=value), clear=True):
            config = load_config()
            assert config.log_debug is False
            assert config.log_file is None


class TestGeminiConfig:
    """测试 Gemini 客户端配置。"""

    def test_api_key_loaded(self):
        with mock.patch.dict(os.environ, _clean_env(GEMINI_API_KEY="secret-key-123456"), clear=True):
            config = get_gemini_config()
            assert config.api_key == "secret-key-123456"
            assert config.is_configured
            assert config.base_url == DEFAULT_ENDPOINT

    def test_missing_api_key(self):
        with mock.patch.dict(os.environ, _clean_env(), clear=True):
            assert get_gemini_config().is_configured is False

    def test_endpoint_override(self):
        with mock.patch.dict(os.environ, _clean_env(GEMINI_ENDPOINT="http://proxy.local/"), clear=True):
            assert get_gemini_config().base_url == "http://proxy.local/v1beta/models"

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://example.com/v1beta/models/", "https://example.com/v1beta/models"),
            ("https://example.com/v1beta", "https://example.com/v1beta/models"),
            ("https://example.com/v1", "https://example.com/v1/models"),
            ("https://example.com", "https://example.com/v1beta/models"),
        ],
    )
    def test_normalize_endpoint(self, url, expected):
        assert normalize_endpoint(url) == expected

    def test_repr_hides_api_key(self):
        config = Config(gemini=GeminiEnvConfig(api_key="super-secret-value"))
        assert "super-secret-value" not in repr(config)
        assert "supe" not in repr(config)


class TestConfigMethods:
    """测试 Config 类方法。"""

    def test_is_tool_allowed_when_restricted(self):
        config = Config(tools={"describe_image"})
        assert config.is_tool_allowed("describe_image") is True
        assert config.is_tool_allowed("generate_image") is False

    def test_is_tool_allowed_case_insensitive(self):
        config = Config(tools={"describe_image"})
        assert config.is_tool_allowed("DESCRIBE_IMAGE") is True


class TestGlobalConfig:
    """测试全局配置实例。"""

    def test_get_config_returns_same_instance(self):
        reload_config()
        assert get_config() is get_config()

    def test_reload_config_creates_new_instance(self):
        config1 = get_config()
        config2 = reload_config()
        assert config1 is not config2
