"""
Query extraction - free text to StructuredQuery via the LLM.

The model's JSON is trusted as-is (StructuredQuery applies the limit
fallback and drops blank keywords). When the model is unavailable or
returns something unusable, the whole message becomes the single keyword
so that the user still gets a search.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from trial_search.core.exceptions import ParseError, TrialSearchError
from trial_search.domain.entities import DEFAULT_LIMIT, QueryFilters, StructuredQuery

from .prompts import build_extraction_prompt

if TYPE_CHECKING:
    from trial_search.infrastructure.llm import ChatCompletionClient

logger = logging.getLogger(__name__)

EXTRACTION_TEMPERATURE = 0.1


def fallback_query(message: str) -> StructuredQuery:
    """Plain keyword search on the whole message."""
    return StructuredQuery(keywords=(message,), filters=QueryFilters(), limit=DEFAULT_LIMIT)


_LIST_FILTER_KEYS = ("status", "phase", "interventionType", "intervention_type")
_TEXT_FILTER_KEYS = ("sponsor", "country")


def _check_shape(data: dict) -> None:
    keywords = data.get("keywords")
    if keywords is not None and not isinstance(keywords, str | list):
        raise ParseError(f"'keywords' must be a list, got {type(keywords).__name__}", source="llm")

    filters = data.get("filters")
    if filters is None:
        return
    if not isinstance(filters, dict):
        raise ParseError(f"'filters' must be an object, got {type(filters).__name__}", source="llm")
    for key in _LIST_FILTER_KEYS:
        value = filters.get(key)
        if value is not None and not isinstance(value, str | list):
            raise ParseError(f"filter '{key}' must be a list, got {type(value).__name__}", source="llm")
    for key in _TEXT_FILTER_KEYS:
        value = filters.get(key)
        if value is not None and not isinstance(value, str):
            raise ParseError(f"filter '{key}' must be a string, got {type(value).__name__}", source="llm")


def parse_extraction(content: str) -> StructuredQuery:
    """
    Parse the model's JSON answer.

    Raises:
        ParseError: If the content is not a JSON object, or its keywords
            or filters have the wrong types.
    """
    try:
        data = json.loads(content or "{}")
    except json.JSONDecodeError as e:
        raise ParseError(f"query extraction returned invalid JSON: {e.msg}", source="llm") from e
    if not isinstance(data, dict):
        raise ParseError("query extraction did not return a JSON object", source="llm")
    _check_shape(data)

    return StructuredQuery(
        keywords=data.get("keywords") or (),
        filters=QueryFilters.from_dict(data.get("filters")),
        limit=DEFAULT_LIMIT,
    )


class QueryExtractor:
    """Turns a user's chat message into a StructuredQuery."""

    def __init__(self, llm: ChatCompletionClient):
        self.llm = llm

    async def extract(self, message: str) -> StructuredQuery:
        """Extract a query, falling back to a plain keyword query on failure."""
        if not self.llm.is_configured:
            logger.info("LLM not configured, using message as keyword")
            return fallback_query(message)

        try:
            content = await self.llm.complete(
                [{"role": "user", "content": build_extraction_prompt(message)}],
                temperature=EXTRACTION_TEMPERATURE,
                json_mode=True,
            )
            return parse_extraction(content)
        except TrialSearchError as e:
            logger.error(f"Error extracting search query: {e}")
            return fallback_query(message)
