"""
HTTP API for the trial search engine and chat assistant.

Provides REST endpoints for web frontends that cannot speak MCP.
"""

from .server import create_api_server, run_api_server

__all__ = ["create_api_server", "run_api_server"]
