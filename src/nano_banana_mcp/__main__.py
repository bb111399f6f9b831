"""Nano Banana MCP 入口点。

支持: python -m nano_banana_mcp
"""

from .app import main

if __name__ == "__main__":
    main()
