"""
Clinical Trial Search MCP Server

Usage as standalone server:
    python -m trial_search.presentation.mcp_server

Or in mcp.json:
    {
        "servers": {
            "clinical-trial-search": {
                "type": "stdio",
                "command": "python",
                "args": ["-m", "trial_search.presentation.mcp_server"],
                "env": {"TRIAL_DATA_PATH": "/data/ctg-studies.json"}
            }
        }
    }
"""

from __future__ import annotations

from .server import create_server, main

__all__ = ["create_server", "main"]
