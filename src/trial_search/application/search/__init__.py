"""
Search application layer.

Exports:
- TrialSearchEngine / search: filter -> score -> rank -> truncate
- RelevanceWeights: configurable field weights for keyword scoring
- apply_filters / matches_filters: AND-combined structured criteria
"""

from .engine import TrialSearchEngine, search
from .filters import apply_filters, matches_filters
from .relevance import DEFAULT_WEIGHTS, KeywordMatch, RelevanceWeights, explain_relevance, score_trial

__all__ = [
    "DEFAULT_WEIGHTS",
    "KeywordMatch",
    "RelevanceWeights",
    "TrialSearchEngine",
    "apply_filters",
    "explain_relevance",
    "matches_filters",
    "score_trial",
    "search",
]
