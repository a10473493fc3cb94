"""
TrialSearchEngine - filter, score, rank and truncate the trial corpus.

Pipeline (full scan per query, no index):
    1. Filter   - drop trials failing any supplied criterion
    2. Score    - keyword relevance (only when keywords are present);
                  trials scoring 0 are dropped
    3. Rank     - stable sort by score, highest first; ties keep corpus order.
                  Without keywords the filtered corpus order is kept as-is
    4. Truncate - total_results is counted before truncation; the score map
                  covers only the returned trials

Architecture Decision:
    ``search()`` is a pure function over an immutable corpus, so any number
    of searches may run concurrently. TrialSearchEngine only binds it to the
    CorpusStore instance and the configured weights.

Example:
    >>> engine = TrialSearchEngine(CorpusStore("trials.json"))
    >>> result = engine.search(StructuredQuery(keywords=["lung cancer"], limit=10))
    >>> result.total_results, [t.id for t in result.trials]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from trial_search.domain.entities import ResultEnvelope, StructuredQuery

from .filters import apply_filters
from .relevance import DEFAULT_WEIGHTS, KeywordMatch, RelevanceWeights, explain_relevance, score_trial

if TYPE_CHECKING:
    from collections.abc import Sequence

    from trial_search.domain.entities import TrialRecord
    from trial_search.infrastructure.corpus import CorpusStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Scored:
    trial: TrialRecord
    score: int


def search(
    corpus: Sequence[TrialRecord],
    query: StructuredQuery,
    weights: RelevanceWeights = DEFAULT_WEIGHTS,
) -> ResultEnvelope:
    """
    Run one structured query against a corpus.

    Args:
        corpus: Trials in corpus order
        query: Keywords, filters and limit
        weights: Field weights for keyword scoring

    Returns:
        ResultEnvelope with the ranked, truncated trials
    """
    filtered = apply_filters(corpus, query.filters)

    if query.keywords:
        scored = [_Scored(t, score_trial(t, query.keywords, weights)) for t in filtered]
        # sorted() is stable, also with reverse=True
        ranked = sorted((s for s in scored if s.score > 0), key=lambda s: s.score, reverse=True)
    else:
        ranked = [_Scored(t, 0) for t in filtered]

    returned = ranked[: query.limit]

    return ResultEnvelope(
        trials=tuple(s.trial for s in returned),
        total_results=len(ranked),
        query=query,
        relevance_scores={s.trial.id: s.score for s in returned},
    )


class TrialSearchEngine:
    """Query engine bound to one corpus store."""

    def __init__(self, store: CorpusStore, weights: RelevanceWeights | None = None):
        self.store = store
        self.weights = weights or DEFAULT_WEIGHTS

    def search(self, query: StructuredQuery) -> ResultEnvelope:
        """Search the store's corpus (loading it on first use)."""
        result = search(self.store.get_all(), query, self.weights)
        logger.debug(
            f"Search keywords={list(query.keywords)} filters={query.filters.to_dict()} "
            f"-> {result.returned}/{result.total_results} trials"
        )
        return result

    def get_trial(self, trial_id: str) -> TrialRecord | None:
        return self.store.get(trial_id)

    def explain(self, trial: TrialRecord, keywords: Sequence[str]) -> list[KeywordMatch]:
        """Per-keyword breakdown of ``trial``'s score under this engine's weights."""
        return explain_relevance(trial, keywords, self.weights)
