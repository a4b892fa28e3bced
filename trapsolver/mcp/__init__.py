"""MCP tool server for trapsolver (``python -m trapsolver.mcp``)."""
