"""MCP (Model Context Protocol) integration for nlaction.

This module provides an MCP server that exposes natural-language actions
as tools for AI agents.

Example:
    # Run the MCP server
    python -m nlaction.integrations.mcp.server --dataset ./dataset.json

    # Or via entry point (after pip install)
    nlaction-mcp --dataset ./dataset.json
"""

from nlaction.integrations.mcp.server import create_server, mcp

__all__ = ["mcp", "create_server"]
