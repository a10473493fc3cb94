"""
Result summarization - ResultEnvelope to a short markdown answer.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from trial_search.core.exceptions import TrialSearchError

from .prompts import SUMMARY_PROMPT

if TYPE_CHECKING:
    from trial_search.domain.entities import ResultEnvelope
    from trial_search.infrastructure.llm import ChatCompletionClient

logger = logging.getLogger(__name__)

SUMMARY_TEMPERATURE = 0.7
SUMMARY_MAX_TOKENS = 200
TRIALS_TO_SUMMARIZE = 10
MAX_LISTED = 5

NO_RESULTS_MESSAGE = (
    "I couldn't find any clinical trials matching your search criteria. "
    "Try broadening your search terms or removing some filters."
)
EMPTY_SUMMARY_MESSAGE = "Found clinical trials matching your search."


def fallback_summary(total_results: int) -> str:
    return f"Found {total_results} clinical trials matching your search."


@dataclass
class ResultDigest:
    """Distinct values seen in the top trials, in first-seen order."""

    statuses: list[str] = field(default_factory=list)
    phases: list[str] = field(default_factory=list)
    conditions: list[str] = field(default_factory=list)
    sponsors: list[str] = field(default_factory=list)

    @classmethod
    def from_result(cls, result: ResultEnvelope, top: int = TRIALS_TO_SUMMARIZE) -> ResultDigest:
        statuses: dict[str, None] = {}
        phases: dict[str, None] = {}
        conditions: dict[str, None] = {}
        sponsors: dict[str, None] = {}

        for trial in result.trials[:top]:
            if trial.status:
                statuses[trial.status] = None
            phases.update(dict.fromkeys(trial.phases))
            conditions.update(dict.fromkeys(trial.conditions))
            if trial.sponsor_name:
                sponsors[trial.sponsor_name] = None

        return cls(
            statuses=list(statuses),
            phases=list(phases),
            conditions=list(conditions),
            sponsors=list(sponsors),
        )


def build_summary_prompt(result: ResultEnvelope) -> str:
    digest = ResultDigest.from_result(result)
    return SUMMARY_PROMPT.format(
        query=json.dumps(result.query.to_dict()),
        total=result.total_results,
        statuses=", ".join(digest.statuses),
        phases=", ".join(digest.phases),
        conditions=", ".join(digest.conditions[:MAX_LISTED]),
        sponsors=", ".join(digest.sponsors[:MAX_LISTED]),
    )


class ResultSummarizer:
    """Writes the assistant's answer for a search result."""

    def __init__(self, llm: ChatCompletionClient):
        self.llm = llm

    async def summarize(self, result: ResultEnvelope) -> str:
        if result.total_results == 0:
            return NO_RESULTS_MESSAGE

        if not self.llm.is_configured:
            return fallback_summary(result.total_results)

        try:
            content = await self.llm.complete(
                [{"role": "user", "content": build_summary_prompt(result)}],
                temperature=SUMMARY_TEMPERATURE,
                max_tokens=SUMMARY_MAX_TOKENS,
            )
        except TrialSearchError as e:
            logger.error(f"Error summarizing results: {e}")
            return fallback_summary(result.total_results)

        return content.strip() or EMPTY_SUMMARY_MESSAGE
