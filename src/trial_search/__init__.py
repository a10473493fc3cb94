"""
Clinical Trial Search

Keyword and filter search over an in-memory clinical trial corpus, with
an LLM chat assistant on top. Served as an MCP server and an HTTP API.

Usage:
    from trial_search import CorpusStore, StructuredQuery, TrialSearchEngine

    engine = TrialSearchEngine(CorpusStore("ctg-studies.json"))
    result = engine.search(StructuredQuery(keywords=["lung cancer"], limit=10))
"""

from .application.search import RelevanceWeights, TrialSearchEngine, search
from .domain.entities import QueryFilters, ResultEnvelope, StructuredQuery, TrialRecord
from .infrastructure.corpus import CorpusStore

__version__ = "0.1.0"

__all__ = [
    "CorpusStore",
    "QueryFilters",
    "RelevanceWeights",
    "ResultEnvelope",
    "StructuredQuery",
    "TrialRecord",
    "TrialSearchEngine",
    "search",
]
