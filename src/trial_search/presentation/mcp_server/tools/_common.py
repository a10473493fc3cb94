"""
Shared helpers for MCP tool implementations.
"""

from __future__ import annotations

import json
from typing import Any

from trial_search.core.exceptions import TrialSearchError


def normalize_list(value: list[str] | str | None) -> list[str]:
    """
    Accept a list or a comma-separated string from the agent.

    Example:
        normalize_list("RECRUITING, COMPLETED") -> ["RECRUITING", "COMPLETED"]
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [v.strip() for v in value if isinstance(v, str) and v.strip()]


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def format_error(error: TrialSearchError, tool_name: str) -> str:
    """Agent-facing error text, tagged with the failing tool."""
    payload = error.to_dict()
    payload.setdefault("tool", tool_name)
    return to_json(payload)
