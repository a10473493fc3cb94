"""Domain entities for clinical trial search."""

from .query import DEFAULT_LIMIT, QueryFilters, ResultEnvelope, StructuredQuery, normalize_limit
from .trial import Intervention, Location, TrialRecord

__all__ = [
    "DEFAULT_LIMIT",
    "Intervention",
    "Location",
    "QueryFilters",
    "ResultEnvelope",
    "StructuredQuery",
    "TrialRecord",
    "normalize_limit",
]
