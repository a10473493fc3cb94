"""
Domain layer - trial records, structured queries and result envelopes.

Pure data: no I/O, no framework imports.
"""

from .entities import (
    DEFAULT_LIMIT,
    Intervention,
    Location,
    QueryFilters,
    ResultEnvelope,
    StructuredQuery,
    TrialRecord,
)

__all__ = [
    "DEFAULT_LIMIT",
    "Intervention",
    "Location",
    "QueryFilters",
    "ResultEnvelope",
    "StructuredQuery",
    "TrialRecord",
]
