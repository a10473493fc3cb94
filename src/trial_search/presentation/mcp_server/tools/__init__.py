"""
Clinical Trial Search MCP Tools

Search (4):
- search_trials, get_trial, explain_trial_score, get_corpus_info

Assistant (1):
- ask_trials

Registered together by ``tool_registry.register_all_mcp_tools``.
"""

from .assistant import register_assistant_tools
from .search import register_search_tools

__all__ = ["register_assistant_tools", "register_search_tools"]
