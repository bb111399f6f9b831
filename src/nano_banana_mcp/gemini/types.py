"""Gemini 模块类型定义。

nano-banana-mcp gemini v0.1.0

请求侧的可选字段一律用 None 表示"未提供"，只在序列化（to_payload）时省略。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

__all__ = [
    "AspectRatio",
    "ImageSize",
    "ImageConfig",
    "ImageAttachment",
    "GenerateImageOptions",
    "EditImageOptions",
    "DescribeImageOptions",
    "TextPart",
    "ImagePart",
    "ResponsePart",
    "GeneratedImage",
    "ImageDescription",
]


class AspectRatio(str, Enum):
    """输出图片宽高比。"""
    RATIO_1_1 = "1:1"
    RATIO_3_4 = "3:4"
    RATIO_4_3 = "4:3"
    RATIO_9_16 = "9:16"
    RATIO_16_9 = "16:9"


class ImageSize(str, Enum):
    """输出图片分辨率。"""
    SIZE_1K = "1K"  # 最高 1024x1024
    SIZE_2K = "2K"  # 最高 2048x2048
    SIZE_4K = "4K"  # 最高 4096x4096


@dataclass(frozen=True)
class ImageConfig:
    """图片形状配置（仅部分模型支持）。

    Attributes:
        aspect_ratio: 输出宽高比
        image_size: 输出分辨率
    """
    aspect_ratio: AspectRatio | None = None
    image_size: ImageSize | None = None

    @property
    def is_empty(self) -> bool:
        return self.aspect_ratio is None and self.image_size is None

    def to_payload(self) -> dict[str, str]:
        """序列化为 imageConfig，未提供的字段省略。"""
        payload: dict[str, str] = {}
        if self.aspect_ratio is not None:
            payload["aspectRatio"] = AspectRatio(self.aspect_ratio).value
        if self.image_size is not None:
            payload["imageSize"] = ImageSize(self.image_size).value
        return payload


@dataclass(frozen=True)
class ImageAttachment:
    """图片输入（参考图 / 待编辑图 / 待描述图）。

    Attributes:
        data: base64 编码的图片数据
        mime_type: MIME 类型，如 image/png
    """
    data: str
    mime_type: str

    def to_part(self) -> dict[str, Any]:
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}


@dataclass
class GenerateImageOptions:
    """generate 请求参数。

    Attributes:
        prompt: 图像生成提示词
        model: 模型 ID（None 使用默认模型）
        aspect_ratio: 输出宽高比
        image_size: 输出分辨率
        images: 参考图片，按顺序排在 prompt 之后
    """
    prompt: str
    model: str | None = None
    aspect_ratio: AspectRatio | None = None
    image_size: ImageSize | None = None
    images: list[ImageAttachment] = field(default_factory=list)

    @property
    def image_config(self) -> ImageConfig:
        return ImageConfig(aspect_ratio=self.aspect_ratio, image_size=self.image_size)


@dataclass
class EditImageOptions:
    """edit 请求参数。

    Attributes:
        prompt: 编辑指令
        images: 待编辑图片（至少一张，由 tool schema 保证）
        model: 模型 ID
    """
    prompt: str
    images: list[ImageAttachment] = field(default_factory=list)
    model: str | None = None


@dataclass
class DescribeImageOptions:
    """describe 请求参数。

    Attributes:
        images: 待描述图片（至少一张）
        prompt: 自定义分析指令（None 使用默认指令）
        model: 模型 ID
    """
    images: list[ImageAttachment] = field(default_factory=list)
    prompt: str | None = None
    model: str | None = None


@dataclass(frozen=True)
class TextPart:
    """响应中的文本部分。"""
    text: str


@dataclass(frozen=True)
class ImagePart:
    """响应中的内联图片部分。"""
    mime_type: str
    data: str


ResponsePart = Union[TextPart, ImagePart]


@dataclass
class GeneratedImage:
    """generate/edit 结果。

    Attributes:
        mime_type: 图片 MIME 类型
        base64_data: base64 图片数据（原样透传）
        description: 模型附带的文字说明（可选）
    """
    mime_type: str
    base64_data: str
    description: str | None = None


@dataclass
class ImageDescription:
    """describe 结果。"""
    text: str
