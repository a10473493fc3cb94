"""
Query Entities - structured search input and result envelope.

A StructuredQuery is the machine-readable form of a user's request
(usually produced by the query-extraction collaborator). Its inputs are
trusted as-is, with a small amount of normalization so that the engine
always sees a well-defined query:

- blank or non-string keywords are dropped (order is kept); a keyword or
  filter list that is not a list at all counts as empty
- empty filter lists / empty strings impose no constraint
- a missing, non-integer or non-positive limit falls back to DEFAULT_LIMIT
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .trial import TrialRecord

DEFAULT_LIMIT = 50


def normalize_limit(value: Any) -> int:
    """Return ``value`` as a positive int, or DEFAULT_LIMIT."""
    if isinstance(value, bool):
        return DEFAULT_LIMIT
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return DEFAULT_LIMIT


def _normalize_keywords(keywords: Iterable[Any] | str | None) -> tuple[str, ...]:
    if keywords is None:
        return ()
    if isinstance(keywords, str):
        keywords = [keywords]
    elif not isinstance(keywords, Iterable):
        return ()
    return tuple(kw.strip() for kw in keywords if isinstance(kw, str) and kw.strip())


def _normalize_list(values: Iterable[Any] | str | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, Iterable):
        return ()
    return tuple(v for v in values if isinstance(v, str) and v)


def _normalize_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class QueryFilters:
    """
    Named filter criteria, AND-combined by the engine.

    Attributes:
        status: Trial status must be one of these (exact match)
        phase: Trial phases must intersect this list (exact match)
        intervention_type: Some intervention type must be in this list
        sponsor: Case-insensitive substring of the lead sponsor name
        country: Case-insensitive exact match on any location country
    """

    status: tuple[str, ...] = ()
    phase: tuple[str, ...] = ()
    intervention_type: tuple[str, ...] = ()
    sponsor: str | None = None
    country: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", _normalize_list(self.status))
        object.__setattr__(self, "phase", _normalize_list(self.phase))
        object.__setattr__(self, "intervention_type", _normalize_list(self.intervention_type))
        object.__setattr__(self, "sponsor", _normalize_text(self.sponsor))
        object.__setattr__(self, "country", _normalize_text(self.country))

    @property
    def is_empty(self) -> bool:
        return not (self.status or self.phase or self.intervention_type or self.sponsor or self.country)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> QueryFilters:
        if not isinstance(data, dict):
            return cls()
        return cls(
            status=data.get("status"),
            phase=data.get("phase"),
            intervention_type=data.get("interventionType", data.get("intervention_type")),
            sponsor=data.get("sponsor"),
            country=data.get("country"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire shape, containing only the supplied criteria."""
        result: dict[str, Any] = {}
        if self.status:
            result["status"] = list(self.status)
        if self.phase:
            result["phase"] = list(self.phase)
        if self.intervention_type:
            result["interventionType"] = list(self.intervention_type)
        if self.sponsor:
            result["sponsor"] = self.sponsor
        if self.country:
            result["country"] = self.country
        return result


@dataclass(frozen=True)
class StructuredQuery:
    """Keywords + filters + limit."""

    keywords: tuple[str, ...] = ()
    filters: QueryFilters = field(default_factory=QueryFilters)
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", _normalize_keywords(self.keywords))
        if not isinstance(self.filters, QueryFilters):
            object.__setattr__(self, "filters", QueryFilters.from_dict(self.filters))
        object.__setattr__(self, "limit", normalize_limit(self.limit))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> StructuredQuery:
        """
        Build a query from the wire shape.

        Example:
            >>> StructuredQuery.from_dict({"keywords": ["lung cancer"], "filters": {"status": ["RECRUITING"]}})
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            keywords=data.get("keywords"),
            filters=QueryFilters.from_dict(data.get("filters")),
            limit=data.get("limit"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "keywords": list(self.keywords),
            "filters": self.filters.to_dict(),
            "limit": self.limit,
        }


@dataclass(frozen=True)
class ResultEnvelope:
    """
    Full response of one search.

    Attributes:
        trials: Returned trials (post-filter, post-rank, post-truncation)
        total_results: Matching trials before truncation ("showing N of M")
        query: The query that produced this result
        relevance_scores: Trial id -> score, for the returned trials only
    """

    trials: tuple[TrialRecord, ...]
    total_results: int
    query: StructuredQuery
    relevance_scores: dict[str, int] = field(default_factory=dict)

    @property
    def returned(self) -> int:
        return len(self.trials)

    def to_dict(self) -> dict[str, Any]:
        return {
            "trials": [t.to_dict() for t in self.trials],
            "totalResults": self.total_results,
            "query": self.query.to_dict(),
            "relevanceScores": dict(self.relevance_scores),
        }
