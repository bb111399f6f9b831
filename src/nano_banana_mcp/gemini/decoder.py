"""Gemini 响应解析。

nano-banana-mcp gemini v0.1.0

解析顺序:
1. 顶层 error 对象 -> GeminiProviderError
2. candidates 缺失或为空 -> GeminiEmptyResponseError
3. 把第一个 candidate 的 parts 转成 TextPart / ImagePart 序列，再折叠成结果

两种折叠策略是有意不同的:
- generate/edit: 图片和文字都是"最后一个生效"，文字作为单条说明
- describe: 所有文字按顺序直接拼接（不加分隔符）
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import (
    GeminiEmptyResponseError,
    GeminiMissingPayloadError,
    GeminiProviderError,
)
from .types import (
    GeneratedImage,
    ImageDescription,
    ImagePart,
    ResponsePart,
    TextPart,
)

__all__ = [
    "GENERATE_EMPTY_MESSAGE",
    "DESCRIBE_EMPTY_MESSAGE",
    "parse_parts",
    "fold_generation",
    "fold_description",
    "decode_generation",
    "decode_description",
]

GENERATE_EMPTY_MESSAGE = "No image generated - empty response from Gemini"
DESCRIBE_EMPTY_MESSAGE = "No response from Gemini"


@dataclass
class GenerationAccumulator:
    """generate/edit 折叠状态。"""
    image: ImagePart | None = None
    description: str | None = None


@dataclass
class DescriptionAccumulator:
    """describe 折叠状态。"""
    chunks: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.chunks)


def _raise_for_error(payload: dict[str, Any]) -> None:
    error = payload.get("error")
    if error:
        if isinstance(error, dict):
            raise GeminiProviderError(
                str(error.get("message", "")),
                code=error.get("code"),
                status=str(error.get("status", "")),
            )
        raise GeminiProviderError(str(error))


def _first_candidate_parts(payload: dict[str, Any], empty_message: str) -> list[dict[str, Any]]:
    _raise_for_error(payload)

    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise GeminiEmptyResponseError(empty_message)

    # 被安全策略拦截时 content 可能缺失，结构不对的 candidate 同样按"没有 parts"处理
    candidate = candidates[0]
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    return parts if isinstance(parts, list) else []


def parse_parts(raw_parts: list[dict[str, Any]]) -> list[ResponsePart]:
    """把原始 parts 转成 TextPart / ImagePart 序列。

    带内联数据的 part 视为图片（即使同时带有文本）；
    既没有内联数据也没有非空文本的 part（包括非 dict 的 part）会被跳过。
    兼容 inlineData 和 inline_data 两种写法。
    """
    parts: list[ResponsePart] = []
    for raw in raw_parts:
        if not isinstance(raw, dict):
            continue
        inline_data = raw.get("inlineData") or raw.get("inline_data")
        if isinstance(inline_data, dict) and inline_data:
            parts.append(ImagePart(
                mime_type=inline_data.get("mimeType") or inline_data.get("mime_type", ""),
                data=inline_data.get("data", ""),
            ))
        elif isinstance(raw.get("text"), str) and raw["text"]:
            parts.append(TextPart(text=raw["text"]))
    return parts


def fold_generation(parts: list[ResponsePart]) -> GenerationAccumulator:
    """generate/edit 折叠：图片、文字都是最后一个生效。"""
    acc = GenerationAccumulator()
    for part in parts:
        if isinstance(part, ImagePart):
            acc.image = part
        else:
            acc.description = part.text
    return acc


def fold_description(parts: list[ResponsePart]) -> DescriptionAccumulator:
    """describe 折叠：文字按顺序拼接，图片忽略。"""
    acc = DescriptionAccumulator()
    for part in parts:
        if isinstance(part, TextPart):
            acc.chunks.append(part.text)
    return acc


def decode_generation(payload: dict[str, Any]) -> GeneratedImage:
    """解析 generate/edit 响应。

    Raises:
        GeminiProviderError: 响应带 error 对象
        GeminiEmptyResponseError: 没有 candidates
        GeminiMissingPayloadError: 没有图片（即使有文字）
    """
    raw_parts = _first_candidate_parts(payload, GENERATE_EMPTY_MESSAGE)
    acc = fold_generation(parse_parts(raw_parts))
    if acc.image is None:
        raise GeminiMissingPayloadError("No image data in Gemini response")
    return GeneratedImage(
        mime_type=acc.image.mime_type,
        base64_data=acc.image.data,
        description=acc.description,
    )


def decode_description(payload: dict[str, Any]) -> ImageDescription:
    """解析 describe 响应。

    Raises:
        GeminiProviderError: 响应带 error 对象
        GeminiEmptyResponseError: 没有 candidates
        GeminiMissingPayloadError: 没有文本
    """
    raw_parts = _first_candidate_parts(payload, DESCRIBE_EMPTY_MESSAGE)
    acc = fold_description(parse_parts(raw_parts))
    if not acc.text:
        raise GeminiMissingPayloadError("No description in Gemini response")
    return ImageDescription(text=acc.text)
