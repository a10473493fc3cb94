"""
Tool Registry - central list of MCP tools and their registration.

Usage:
    from .tool_registry import register_all_mcp_tools, list_registered_tools

    register_all_mcp_tools(mcp, engine, assistant)
    tools = list_registered_tools()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from trial_search.application.assistant import TrialAssistant
    from trial_search.application.search import TrialSearchEngine

logger = logging.getLogger(__name__)


TOOL_CATEGORIES: dict[str, dict] = {
    "search": {
        "name": "Search",
        "description": "Structured keyword and filter search",
        "tools": ["search_trials", "get_trial", "explain_trial_score", "get_corpus_info"],
    },
    "assistant": {
        "name": "Assistant",
        "description": "Natural-language questions with generated summaries",
        "tools": ["ask_trials"],
    },
}


def register_all_mcp_tools(
    mcp: FastMCP,
    engine: TrialSearchEngine,
    assistant: TrialAssistant,
) -> dict[str, int]:
    """
    Register all MCP tools.

    Returns:
        Dict with category ids and tool counts
    """
    from .tools import register_assistant_tools, register_search_tools

    stats: dict[str, int] = {}

    logger.info("Registering search tools...")
    register_search_tools(mcp, engine)
    stats["search"] = len(TOOL_CATEGORIES["search"]["tools"])

    logger.info("Registering assistant tools...")
    register_assistant_tools(mcp, assistant)
    stats["assistant"] = len(TOOL_CATEGORIES["assistant"]["tools"])

    logger.info(f"Total registered: {sum(stats.values())} tools")
    return stats


def list_registered_tools() -> dict[str, list[str]]:
    """All defined tools, grouped by category id."""
    return {cat_id: cat_info["tools"] for cat_id, cat_info in TOOL_CATEGORIES.items()}


def get_tool_info(tool_name: str) -> dict[str, str] | None:
    """Category information for one tool, or None if unknown."""
    for cat_id, cat_info in TOOL_CATEGORIES.items():
        if tool_name in cat_info["tools"]:
            return {
                "name": tool_name,
                "category": cat_info["name"],
                "category_id": cat_id,
                "category_description": cat_info["description"],
            }
    return None
