"""
Chat assistant on top of the search engine.

The language model is only used at the edges: turning a message into a
StructuredQuery and turning a ResultEnvelope into a short answer. Both
steps fall back to deterministic output when the model is unavailable.
"""

from .query_extractor import QueryExtractor, fallback_query, parse_extraction
from .service import ChatReply, TrialAssistant
from .summarizer import NO_RESULTS_MESSAGE, ResultDigest, ResultSummarizer, fallback_summary

__all__ = [
    "NO_RESULTS_MESSAGE",
    "ChatReply",
    "QueryExtractor",
    "ResultDigest",
    "ResultSummarizer",
    "TrialAssistant",
    "fallback_query",
    "fallback_summary",
    "parse_extraction",
]
