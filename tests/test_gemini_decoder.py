"""Gemini 响应解析测试。

generate 与 describe 对多段文本的处理不同：
generate 只保留最后一段作为说明，describe 按顺序拼接全部文本。
这里的用例把两种行为都固定下来。
"""

from __future__ import annotations

import pytest

from nano_banana_mcp.gemini import (
    GeminiEmptyResponseError,
    GeminiMissingPayloadError,
    GeminiProviderError,
    GeneratedImage,
    ImagePart,
    TextPart,
)
from nano_banana_mcp.gemini.decoder import (
    DESCRIBE_EMPTY_MESSAGE,
    GENERATE_EMPTY_MESSAGE,
    decode_description,
    decode_generation,
    fold_description,
    fold_generation,
    parse_parts,
)


class TestParseParts:
    """测试 parts 解析。"""

    def test_text_and_image(self, image, text):
        parts = parse_parts([text("hello"), image("AAA", "image/jpeg")])
        assert parts == [TextPart("hello"), ImagePart(mime_type="image/jpeg", data="AAA")]

    def test_image_wins_over_text_in_same_part(self):
        raw = {"text": "caption", "inlineData": {"mimeType": "image/png", "data": "AAA"}}
        assert parse_parts([raw]) == [ImagePart(mime_type="image/png", data="AAA")]

    def test_empty_and_unknown_parts_skipped(self):
        assert parse_parts([{"text": ""}, {"functionCall": {}}, {}]) == []

    def test_snake_case_inline_data(self):
        raw = {"inline_data": {"mime_type": "image/webp", "data": "BBB"}}
        assert parse_parts([raw]) == [ImagePart(mime_type="image/webp", data="BBB")]


class TestFolds:
    """测试两种折叠策略。"""

    def test_generation_last_wins(self):
        acc = fold_generation([
            TextPart("first"),
            ImagePart("image/png", "A"),
            TextPart("second"),
            ImagePart("image/jpeg", "B"),
        ])
        assert acc.image == ImagePart("image/jpeg", "B")
        assert acc.description == "second"

    def test_description_concatenates(self):
        acc = fold_description([TextPart("T1"), ImagePart("image/png", "A"), TextPart("T2")])
        assert acc.text == "T1T2"


class TestDecodeGeneration:
    """测试 generate/edit 响应解析。"""

    def test_sunset_example(self, make_payload, image, text):
        payload = make_payload(text("A beautiful sunset"), image("base64encodedimage", "image/png"))
        assert decode_generation(payload) == GeneratedImage(
            mime_type="image/png",
            base64_data="base64encodedimage",
            description="A beautiful sunset",
        )

    def test_image_then_text(self, make_payload, image, text):
        result = decode_generation(make_payload(image("A"), text("T")))
        assert result.base64_data == "A"
        assert result.description == "T"

    def test_two_images_last_wins(self, make_payload, image):
        result = decode_generation(make_payload(image("A"), image("B", "image/jpeg")))
        assert result.base64_data == "B"
        assert result.mime_type == "image/jpeg"
        assert result.description is None

    def test_multiple_texts_keep_only_last(self, make_payload, image, text):
        """与 describe 不同：generate 不拼接文本。"""
        result = decode_generation(make_payload(text("T1"), image("A"), text("T2")))
        assert result.description == "T2"

    def test_text_only_fails(self, make_payload, text):
        with pytest.raises(GeminiMissingPayloadError, match="No image data in Gemini response"):
            decode_generation(make_payload(text("I cannot draw that")))

    def test_empty_candidates(self):
        with pytest.raises(GeminiEmptyResponseError) as exc_info:
            decode_generation({"candidates": []})
        assert str(exc_info.value) == GENERATE_EMPTY_MESSAGE

    def test_missing_candidates(self):
        with pytest.raises(GeminiEmptyResponseError):
            decode_generation({})

    def test_candidate_without_content(self):
        with pytest.raises(GeminiMissingPayloadError):
            decode_generation({"candidates": [{"finishReason": "SAFETY"}]})

    @pytest.mark.parametrize(
        "payload",
        [
            {"candidates": [None]},
            {"candidates": ["oops"]},
            {"candidates": [{"content": "oops"}]},
            {"candidates": [{"content": {"parts": None}}]},
            {"candidates": [{"content": {"parts": [None, 42, "text"]}}]},
            {"candidates": [{"content": {"parts": [{"inlineData": "AAA"}, {"text": 7}]}}]},
        ],
    )
    def test_malformed_candidate_is_missing_payload(self, payload):
        with pytest.raises(GeminiMissingPayloadError, match="No image data in Gemini response"):
            decode_generation(payload)

    def test_candidates_not_a_list(self):
        with pytest.raises(GeminiEmptyResponseError):
            decode_generation({"candidates": {"content": {}}})

    def test_malformed_parts_skipped_around_image(self, image):
        payload = {"candidates": [{"content": {"parts": [None, image("A"), "junk"]}}]}
        assert decode_generation(payload).base64_data == "A"

    def test_only_first_candidate_used(self, image):
        payload = {
            "candidates": [
                {"content": {"parts": [image("FIRST")]}},
                {"content": {"parts": [image("SECOND")]}},
            ]
        }
        assert decode_generation(payload).base64_data == "FIRST"

    def test_error_object(self):
        payload = {"error": {"code": 400, "message": "Invalid request", "status": "INVALID_ARGUMENT"}}
        with pytest.raises(GeminiProviderError) as exc_info:
            decode_generation(payload)
        assert "Invalid request" in str(exc_info.value)
        assert exc_info.value.code == 400
        assert exc_info.value.status == "INVALID_ARGUMENT"

    def test_error_checked_before_candidates(self, make_payload, image):
        payload = make_payload(image("A"))
        payload["error"] = {"code": 500, "message": "boom"}
        with pytest.raises(GeminiProviderError, match="boom"):
            decode_generation(payload)


class TestDecodeDescription:
    """测试 describe 响应解析。"""

    def test_concatenates_in_order_without_separator(self, make_payload, text):
        result = decode_description(make_payload(text("T1"), text("T2")))
        assert result.text == "T1T2"

    def test_images_ignored(self, make_payload, image, text):
        result = decode_description(make_payload(image("A"), text("a red apple")))
        assert result.text == "a red apple"

    def test_no_text_fails(self, make_payload, image):
        with pytest.raises(GeminiMissingPayloadError, match="No description in Gemini response"):
            decode_description(make_payload(image("A")))

    def test_empty_candidates(self):
        with pytest.raises(GeminiEmptyResponseError) as exc_info:
            decode_description({"candidates": []})
        assert str(exc_info.value) == DESCRIBE_EMPTY_MESSAGE

    def test_null_candidate(self):
        with pytest.raises(GeminiMissingPayloadError, match="No description in Gemini response"):
            decode_description({"candidates": [None]})

    def test_error_object(self):
        with pytest.raises(GeminiProviderError, match="quota exceeded"):
            decode_description({"error": {"code": 429, "message": "quota exceeded"}})
