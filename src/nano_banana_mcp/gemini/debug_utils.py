"""Debug utilities for Gemini request/response logging.

nano-banana-mcp gemini v0.1.0
"""

from __future__ import annotations

import re
from typing import Any

__all__ = ["sanitize_for_debug", "mask_token"]

_BASE64_PREFIX = re.compile(r'^[A-Za-z0-9+/=]+$')


def sanitize_for_debug(data: Any) -> Any:
    """Sanitize data for debug output, replacing base64 strings with summaries."""
    if isinstance(data, dict):
        return {k: sanitize_for_debug(v) for k, v in data.items()}
    if isinstance(data, list):
        return [sanitize_for_debug(item) for item in data]
    if isinstance(data, str) and len(data) > 100:
        if _BASE64_PREFIX.match(data[:100]):
            return f"<base64:{len(data)} bytes>"
    return data


def mask_token(token: str) -> str:
    """Mask an API key for logs. No character of the key is kept."""
    if not token:
        return "(empty)"
    return f"***({len(token)} chars)"
