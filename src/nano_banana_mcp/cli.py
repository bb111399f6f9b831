"""手动生成图片的命令行工具。

不经过 MCP，直接调用 GeminiImageClient，用于验证 API key 和模型是否可用。

用法:
    GEMINI_API_KEY=your_key nano-banana-generate "a cute cat" -o cat.png
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from .gemini import (
    ALLOWED_MODELS,
    API_KEY_ENV,
    AspectRatio,
    GeminiError,
    GeminiImageClient,
    GenerateImageOptions,
    GeneratedImage,
    ImageSize,
    get_gemini_config,
)
from .gemini.image_codec import decode_image_data, encode_image_file

__all__ = ["build_parser", "generate_to_file", "main"]

DEFAULT_PROMPT = "a beautiful sunset over mountains"
DEFAULT_OUTPUT = "test-output.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nano-banana-generate",
        description="Generate one image with Gemini and save it to a file.",
    )
    parser.add_argument("prompt", nargs="?", default=DEFAULT_PROMPT, help="Image prompt")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="Output file path")
    parser.add_argument("--model", choices=ALLOWED_MODELS, default=None, help="Gemini model")
    parser.add_argument(
        "--aspect-ratio",
        choices=[r.value for r in AspectRatio],
        default=None,
        help="Aspect ratio (image-capable models only)",
    )
    parser.add_argument(
        "--image-size",
        choices=[s.value for s in ImageSize],
        default=None,
        help="Resolution (image-capable models only)",
    )
    parser.add_argument(
        "--image",
        action="append",
        default=[],
        metavar="PATH",
        help="Reference image file (repeatable)",
    )
    return parser


async def generate_to_file(
    client: GeminiImageClient,
    options: GenerateImageOptions,
    output: Path,
) -> tuple[GeneratedImage, int]:
    """生成图片并写入文件。

    Returns:
        (结果, 写入字节数) 元组
    """
    result = await client.generate_image(options)
    data = decode_image_data(result.base64_data)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    return result, len(data)


async def _run(args: argparse.Namespace, api_key: str, base_url: str) -> None:
    options = GenerateImageOptions(
        prompt=args.prompt,
        model=args.model,
        aspect_ratio=AspectRatio(args.aspect_ratio) if args.aspect_ratio else None,
        image_size=ImageSize(args.image_size) if args.image_size else None,
        images=[encode_image_file(path) for path in args.image],
    )
    output = Path(args.output)

    async with GeminiImageClient(api_key, base_url=base_url) as client:
        result, size = await generate_to_file(client, options, output)

    print(f"Image saved to {output}")
    print(f"  MIME type: {result.mime_type}")
    print(f"  Size: {size} bytes")
    if result.description:
        print(f"  Description: {result.description}")


def main(argv: Sequence[str] | None = None) -> int:
    """命令行入口。返回进程退出码。"""
    args = build_parser().parse_args(argv)

    gemini_config = get_gemini_config()
    if not gemini_config.is_configured:
        print(f"Error: Set {API_KEY_ENV} environment variable", file=sys.stderr)
        return 1

    print(f'Generating image for: "{args.prompt}"')
    try:
        asyncio.run(_run(args, gemini_config.api_key, gemini_config.base_url))
    except (GeminiError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
