"""
TrialAssistant - one chat turn: message -> query -> search -> summary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from trial_search.core.exceptions import InvalidQueryError

if TYPE_CHECKING:
    from trial_search.application.search import TrialSearchEngine
    from trial_search.domain.entities import ResultEnvelope

    from .query_extractor import QueryExtractor
    from .summarizer import ResultSummarizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatReply:
    """Assistant answer plus the search result it describes."""

    response: str
    result: ResultEnvelope
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        envelope = self.result.to_dict()
        return {
            "response": self.response,
            "trials": envelope["trials"],
            "totalResults": envelope["totalResults"],
            "query": envelope["query"],
            "relevanceScores": envelope["relevanceScores"],
            "timestamp": self.timestamp,
        }


class TrialAssistant:
    """Answers free-text questions about the trial corpus."""

    def __init__(
        self,
        engine: TrialSearchEngine,
        extractor: QueryExtractor,
        summarizer: ResultSummarizer,
    ):
        self.engine = engine
        self.extractor = extractor
        self.summarizer = summarizer

    async def ask(self, message: str) -> ChatReply:
        """
        Handle one user turn.

        Raises:
            InvalidQueryError: If the message is empty or blank.
        """
        if not isinstance(message, str) or not message.strip():
            raise InvalidQueryError(message, "Message cannot be empty")

        message = message.strip()
        query = await self.extractor.extract(message)
        logger.info(f"Extracted query: {query.to_dict()}")

        result = self.engine.search(query)
        response = await self.summarizer.summarize(result)

        return ChatReply(
            response=response,
            result=result,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
