"""Tool Schema 定义。

包含工具描述、参数 schema 和 schema 创建函数。
"""

from __future__ import annotations

from typing import Any

from .gemini.models import ALLOWED_MODELS, DEFAULT_MODEL
from .gemini.types import AspectRatio, ImageSize

__all__ = [
    "TOOL_ORDER",
    "SUPPORTED_TOOLS",
    "TOOL_DESCRIPTIONS",
    "TOOL_ERROR_LABELS",
    "create_tool_schema",
]

# 工具列表（list_tools 按此顺序返回）
TOOL_ORDER = ["generate_image", "edit_image", "describe_image"]

# 支持的工具列表（用于校验）
SUPPORTED_TOOLS = frozenset(TOOL_ORDER)

# 工具描述
TOOL_DESCRIPTIONS = {
    "generate_image": """Generate an image using Google Gemini (Nano Banana Pro).

CAPABILITIES:
- Text-to-image generation
- Optional reference images to guide style or content
- Aspect ratio and resolution (1K/2K/4K) on image-capable models

RESPONSE FORMAT:
- Returns the image inline (base64) that can be displayed or saved
- Followed by the model's text description when it provides one

BEST PRACTICES:
- Be descriptive: describe scenes, lighting, style, composition
- Use negative constraints in prompt: "no text", "no watermark"
- Aspect ratio and size are ignored by models that do not support them""",

    "edit_image": """Edit an existing image using Google Gemini.

CAPABILITIES:
- Modify, extend or restyle one or more input images from an instruction
- Combine several input images into one result

RESPONSE FORMAT:
- Returns the edited image inline (base64)
- Followed by the model's text description when it provides one

BEST PRACTICES:
- Say what to change AND what to keep: "replace the sky, keep the people"
- Pass images in the order you refer to them in the prompt""",

    "describe_image": """Describe or analyze images using Google Gemini.

CAPABILITIES:
- Detailed description of subject, composition, colors, style and text
- Custom analysis with your own prompt (e.g. "list every object")

RESPONSE FORMAT:
- Returns a single text block""",
}

# 错误前缀（handler 渲染失败结果时使用）
TOOL_ERROR_LABELS = {
    "generate_image": "Failed to generate image",
    "edit_image": "Failed to edit image",
    "describe_image": "Failed to describe image",
}

MODEL_PROPERTY = {
    "type": "string",
    "description": f"Gemini model ({', '.join(ALLOWED_MODELS)})",
    "default": DEFAULT_MODEL,
}

IMAGE_ITEM = {
    "type": "object",
    "properties": {
        "data": {
            "type": "string",
            "description": "Base64 encoded image data",
        },
        "mimeType": {
            "type": "string",
            "description": "MIME type of the image (e.g., image/png, image/jpeg)",
        },
    },
    "required": ["data", "mimeType"],
}

GENERATE_PROPERTIES = {
    "prompt": {
        "type": "string",
        "description": "Description of the image to generate",
    },
    "aspectRatio": {
        "type": "string",
        "enum": [r.value for r in AspectRatio],
        "description": "Aspect ratio of the generated image",
        "default": AspectRatio.RATIO_1_1.value,
    },
    "imageSize": {
        "type": "string",
        "enum": [s.value for s in ImageSize],
        "description": "Resolution of the generated image",
        "default": ImageSize.SIZE_1K.value,
    },
    "model": MODEL_PROPERTY,
    "images": {
        "type": "array",
        "items": IMAGE_ITEM,
        "description": "Optional reference images to guide generation",
    },
}

EDIT_PROPERTIES = {
    "prompt": {
        "type": "string",
        "description": "Instruction describing the edit to make",
    },
    "images": {
        "type": "array",
        "items": IMAGE_ITEM,
        "minItems": 1,
        "description": "Images to edit (at least one)",
    },
    "model": MODEL_PROPERTY,
}

DESCRIBE_PROPERTIES = {
    "images": {
        "type": "array",
        "items": IMAGE_ITEM,
        "minItems": 1,
        "description": "Images to describe (at least one)",
    },
    "prompt": {
        "type": "string",
        "description": "Optional custom analysis prompt",
    },
    "model": MODEL_PROPERTY,
}


def create_tool_schema(tool_name: str) -> dict[str, Any]:
    """创建工具的 JSON Schema。

    Raises:
        KeyError: 未知工具
    """
    if tool_name == "generate_image":
        return {
            "type": "object",
            "properties": dict(GENERATE_PROPERTIES),
            "required": ["prompt"],
        }

    if tool_name == "edit_image":
        return {
            "type": "object",
            "properties": dict(EDIT_PROPERTIES),
            "required": ["prompt", "images"],
        }

    if tool_name == "describe_image":
        return {
            "type": "object",
            "properties": dict(DESCRIBE_PROPERTIES),
            "required": ["images"],
        }

    raise KeyError(tool_name)
