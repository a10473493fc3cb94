"""Presentation layer - MCP server."""
