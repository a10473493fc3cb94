"""
Assistant MCP Tools - natural-language questions about trials

Tools:
- ask_trials: message -> extracted query -> search -> summary
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from trial_search.core.exceptions import InvalidQueryError

from ._common import format_error, to_json

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from trial_search.application.assistant import TrialAssistant

logger = logging.getLogger(__name__)


def register_assistant_tools(mcp: FastMCP, assistant: TrialAssistant):
    """Register chat assistant tools (1 tool)."""

    @mcp.tool()
    async def ask_trials(message: str) -> str:
        """
        Ask a free-text question about clinical trials.

        The question is turned into keywords and filters, the corpus is
        searched, and a short markdown summary is written. Works without an
        LLM key too (plain keyword search, count-only summary).

        Args:
            message: Question, e.g. "recruiting phase 3 immunotherapy trials for NSCLC"

        Returns:
            JSON with response, trials, totalResults, query and relevanceScores
        """
        try:
            reply = await assistant.ask(message)
        except InvalidQueryError as e:
            return format_error(e, "ask_trials")
        return to_json(reply.to_dict())

    logger.info("Registered assistant tools (1 tool)")
