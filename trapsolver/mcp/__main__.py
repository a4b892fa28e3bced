"""Entry point for running the MCP server.

Usage:
    python -m trapsolver.mcp
"""

import asyncio

from trapsolver.logging_config import configure_from_env
from trapsolver.mcp.server import run_server

if __name__ == "__main__":
    configure_from_env()
    asyncio.run(run_server())
