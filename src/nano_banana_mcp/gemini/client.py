"""Gemini 图像 API 客户端。

nano-banana-mcp gemini v0.1.0

使用 aiohttp 异步调用 Gemini generateContent 接口。
每次操作只发一次请求，不重试。
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

import aiohttp

from .config import DEFAULT_ENDPOINT, API_KEY_ENV
from .debug_utils import sanitize_for_debug
from .decoder import decode_description, decode_generation
from .errors import (
    GeminiAPIError,
    GeminiConfigError,
    GeminiNetworkError,
    GeminiResponseFormatError,
)
from .request import (
    GeminiRequest,
    build_describe_request,
    build_edit_request,
    build_generate_request,
)
from .types import (
    DescribeImageOptions,
    EditImageOptions,
    GeneratedImage,
    GenerateImageOptions,
    ImageDescription,
)

__all__ = ["GeminiImageClient"]

logger = logging.getLogger(__name__)


class GeminiImageClient:
    """Gemini 图像 API 客户端。

    Example:
        async with GeminiImageClient(api_key) as client:
            image = await client.generate_image(GenerateImageOptions(
                prompt="a cute cat",
                aspect_ratio=AspectRatio.RATIO_16_9,
            ))
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_ENDPOINT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """初始化客户端。

        Args:
            api_key: Gemini API key（不能为空）
            base_url: 模型端点 URL
            session: 外部传入的 HTTP 会话（可选，默认按需创建）

        Raises:
            GeminiConfigError: api_key 为空
        """
        if not api_key:
            raise GeminiConfigError(f"{API_KEY_ENV} is required")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "GeminiImageClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_session(self) -> aiohttp.ClientSession:
        """获取或创建 HTTP 会话。"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """关闭 HTTP 会话（只关闭自己创建的会话）。"""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _endpoint(self, model: str) -> str:
        return f"{self._base_url}/{model}:generateContent"

    async def _post(self, request: GeminiRequest) -> dict[str, Any]:
        """发送请求并返回 JSON 响应体。

        Raises:
            GeminiAPIError: 非成功状态码
            GeminiNetworkError: 网络层错误
            GeminiResponseFormatError: 响应体不是 JSON 对象
        """
        url = self._endpoint(request.model)
        logger.debug("POST %s?key=*** body=%s", url, sanitize_for_debug(request.body))

        session = await self._get_session()
        start_time = time.time()
        try:
            async with session.post(
                url,
                params={"key": self._api_key},
                json=request.body,
                headers={"Content-Type": "application/json"},
            ) as resp:
                duration_ms = int((time.time() - start_time) * 1000)
                if not 200 <= resp.status < 300:
                    # 网关错误页不一定是 UTF-8
                    error_text = await resp.text(errors="replace")
                    logger.warning(
                        f"Gemini API error {resp.status} after {duration_ms}ms: {error_text[:200]}"
                    )
                    raise GeminiAPIError(resp.status, error_text)

                try:
                    data = await resp.json(content_type=None)
                except (json.JSONDecodeError, ValueError) as e:
                    raise GeminiResponseFormatError(f"Invalid JSON in Gemini response: {e}") from e

        except asyncio.CancelledError:
            # 取消必须 re-raise，async with 已经中止了连接
            logger.info(f"Gemini request cancelled: model={request.model}")
            raise

        except aiohttp.ClientError as e:
            logger.warning(f"Network error calling Gemini: {e}")
            raise GeminiNetworkError(f"Network error: {e}") from e

        if not isinstance(data, dict):
            raise GeminiResponseFormatError("Gemini response is not a JSON object")

        logger.debug(
            "Gemini response %s in %sms: %s",
            resp.status,
            duration_ms,
            sanitize_for_debug(data),
        )
        return data

    async def generate_image(self, options: GenerateImageOptions) -> GeneratedImage:
        """生成图片。

        Raises:
            GeminiError: 任一分类错误
        """
        request = build_generate_request(options)
        logger.info(
            f"generate_image: model={request.model}, "
            f"prompt={options.prompt[:100]!r}, images={len(options.images)}"
        )
        return decode_generation(await self._post(request))

    async def edit_image(self, options: EditImageOptions) -> GeneratedImage:
        """编辑图片（带输入图片、不带形状配置的 generate）。"""
        request = build_edit_request(options)
        logger.info(
            f"edit_image: model={request.model}, "
            f"prompt={options.prompt[:100]!r}, images={len(options.images)}"
        )
        return decode_generation(await self._post(request))

    async def describe_image(self, options: DescribeImageOptions) -> ImageDescription:
        """描述图片。

        Raises:
            GeminiValidationError: 未提供图片（不会发请求）
        """
        request = build_describe_request(options)
        logger.info(f"describe_image: model={request.model}, images={len(options.images)}")
        return decode_description(await self._post(request))
