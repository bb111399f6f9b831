"""工具参数模型。

用 pydantic 校验并转换 agent 传入的参数；字段名对外使用 camelCase（与 tool schema 一致）。
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..gemini.types import (
    AspectRatio,
    DescribeImageOptions,
    EditImageOptions,
    GenerateImageOptions,
    ImageAttachment,
    ImageSize,
)

__all__ = [
    "ImageArgument",
    "GenerateImageArguments",
    "EditImageArguments",
    "DescribeImageArguments",
    "format_validation_error",
]


class _ToolArguments(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


class ImageArgument(_ToolArguments):
    """单张图片参数。"""

    data: str
    mime_type: str = Field(alias="mimeType")

    def to_attachment(self) -> ImageAttachment:
        return ImageAttachment(data=self.data, mime_type=self.mime_type)


class GenerateImageArguments(_ToolArguments):
    """generate_image 参数。aspectRatio / imageSize 有默认值。"""

    prompt: str
    aspect_ratio: AspectRatio | None = Field(default=AspectRatio.RATIO_1_1, alias="aspectRatio")
    image_size: ImageSize | None = Field(default=ImageSize.SIZE_1K, alias="imageSize")
    model: str | None = None
    images: list[ImageArgument] = Field(default_factory=list)

    def to_options(self) -> GenerateImageOptions:
        return GenerateImageOptions(
            prompt=self.prompt,
            model=self.model,
            aspect_ratio=self.aspect_ratio,
            image_size=self.image_size,
            images=[img.to_attachment() for img in self.images],
        )


class EditImageArguments(_ToolArguments):
    """edit_image 参数。"""

    prompt: str
    images: list[ImageArgument] = Field(min_length=1)
    model: str | None = None

    def to_options(self) -> EditImageOptions:
        return EditImageOptions(
            prompt=self.prompt,
            images=[img.to_attachment() for img in self.images],
            model=self.model,
        )


class DescribeImageArguments(_ToolArguments):
    """describe_image 参数。"""

    images: list[ImageArgument] = Field(min_length=1)
    prompt: str | None = None
    model: str | None = None

    def to_options(self) -> DescribeImageOptions:
        return DescribeImageOptions(
            images=[img.to_attachment() for img in self.images],
            prompt=self.prompt,
            model=self.model,
        )


def format_validation_error(error: ValidationError) -> str:
    """把 pydantic 校验错误压缩成单行消息。

    例: "prompt: Field required; images: List should have at least 1 item after validation, not 0"
    """
    messages = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ()))
        msg = item.get("msg", "Invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages) or "Invalid arguments"
