"""图片编解码工具。

nano-banana-mcp gemini v0.1.0

只做 base64 编解码和 MIME 推断，不做任何像素处理。
"""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from .types import ImageAttachment

__all__ = [
    "get_mime_type",
    "encode_image_file",
    "decode_image_data",
]


def get_mime_type(file_path: str | Path) -> str:
    """获取文件的 MIME 类型。

    Args:
        file_path: 文件路径

    Returns:
        MIME 类型字符串，默认 image/png
    """
    mime_type, _ = mimetypes.guess_type(str(file_path))
    return mime_type or "image/png"


def encode_image_file(file_path: str | Path) -> ImageAttachment:
    """读取图片文件并编码为 ImageAttachment。

    Raises:
        FileNotFoundError: 文件不存在
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    data = base64.b64encode(path.read_bytes()).decode("utf-8")
    return ImageAttachment(data=data, mime_type=get_mime_type(path))


def decode_image_data(base64_data: str) -> bytes:
    """把 base64 图片数据解码为字节。"""
    return base64.b64decode(base64_data)
