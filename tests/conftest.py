"""Pytest 配置和 fixtures。"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent

# 添加 src 目录到 Python 路径
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from nano_banana_mcp.gemini import GeminiImageClient  # noqa: E402

TEST_API_KEY = "test-api-key"

_UNSET = object()


class FakeResponse:
    """模拟 aiohttp 响应（支持 async with）。"""

    def __init__(
        self,
        status: int = 200,
        json_body: Any = _UNSET,
        text: str = "",
        body: bytes | None = None,
    ) -> None:
        self.status = status
        self._json = json_body
        if body is None:
            body = (text if text or json_body is _UNSET else json.dumps(json_body)).encode("utf-8")
        self._body = body

    async def json(self, content_type: str | None = "application/json") -> Any:
        if self._json is _UNSET:
            return json.loads(self._body.decode("utf-8"))
        return self._json

    async def text(self, encoding: str | None = None, errors: str = "strict") -> str:
        return self._body.decode(encoding or "utf-8", errors)

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False


class FakeSession:
    """模拟 aiohttp.ClientSession，记录每一次出站请求。

    queue() 放入响应或异常；没有排队响应时发请求会直接让测试失败。
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.closed = False
        self._queue: list[FakeResponse | BaseException] = []

    def queue(self, item: FakeResponse | BaseException) -> None:
        self._queue.append(item)

    def queue_json(self, payload: dict[str, Any], status: int = 200) -> None:
        self.queue(FakeResponse(status=status, json_body=payload))

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if not self._queue:
            raise AssertionError(f"Unexpected request to {url}")
        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True

    @property
    def last_body(self) -> dict[str, Any]:
        return self.calls[-1]["json"]


def candidates_payload(*parts: dict[str, Any]) -> dict[str, Any]:
    """构造单 candidate 的 Gemini 响应。"""
    return {"candidates": [{"content": {"parts": list(parts)}}]}


def image_part(data: str = "base64data", mime_type: str = "image/png") -> dict[str, Any]:
    return {"inlineData": {"mimeType": mime_type, "data": data}}


def text_part(text: str) -> dict[str, Any]:
    return {"text": text}


@pytest.fixture
def fake_session() -> FakeSession:
    """记录请求的假 HTTP 会话。"""
    return FakeSession()


@pytest.fixture
def client(fake_session: FakeSession) -> GeminiImageClient:
    """使用假会话的 Gemini 客户端。"""
    return GeminiImageClient(TEST_API_KEY, session=fake_session)


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    """Gemini 响应构造器。"""
    return candidates_payload


@pytest.fixture
def image() -> Callable[..., dict[str, Any]]:
    """图片 part 构造器。"""
    return image_part


@pytest.fixture
def text() -> Callable[[str], dict[str, Any]]:
    """文本 part 构造器。"""
    return text_part
