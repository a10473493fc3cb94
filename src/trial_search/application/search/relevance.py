"""
Keyword Relevance Scoring - weighted field matching.

Each keyword is matched (lower-cased substring) against six trial fields.
A field contributes its weight at most once per keyword, however many
times the keyword occurs in it:

    | field          | weight | rule                                   |
    |----------------|--------|----------------------------------------|
    | conditions     | 10     | any condition contains the keyword     |
    | title          | 8      | title contains the keyword             |
    | official_title | 7      | official title contains the keyword    |
    | interventions  | 5      | any intervention name contains keyword |
    | sponsor_name   | 4      | sponsor name contains the keyword      |
    | summary_text   | 2      | summary contains the keyword           |

A trial's score is the sum over all keywords of the weights of the
fields that keyword matched. Absent fields never match.

Weights are configuration (RelevanceWeights); the table above holds the
defaults.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from typing import TYPE_CHECKING, Any

from trial_search.core.exceptions import InvalidParameterError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from trial_search.domain.entities import TrialRecord


@dataclass(frozen=True)
class RelevanceWeights:
    """
    Per-field weights for keyword matches.

    Presets:
    - DEFAULT: conditions 10, title 8, official_title 7,
      interventions 5, sponsor_name 4, summary_text 2
    """

    conditions: int = 10
    title: int = 8
    official_title: int = 7
    interventions: int = 5
    sponsor_name: int = 4
    summary_text: int = 2

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidParameterError(f"weights.{f.name}", value, "a non-negative integer")

    @classmethod
    def default(cls) -> RelevanceWeights:
        return cls()

    @classmethod
    def from_mapping(cls, overrides: dict[str, Any] | None) -> RelevanceWeights:
        """
        Build weights from a partial mapping; unknown keys are rejected.

        camelCase keys (``officialTitle``, ``sponsorName``, ``summaryText``)
        are accepted alongside the snake_case field names.
        """
        if not overrides:
            return cls()
        aliases = {"officialTitle": "official_title", "sponsorName": "sponsor_name", "summaryText": "summary_text"}
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in overrides.items():
            name = aliases.get(key, key)
            if name not in known:
                raise InvalidParameterError("weights", key, f"one of {sorted(known)}")
            values[name] = value
        return cls(**values)

    @classmethod
    def from_json(cls, raw: str | None) -> RelevanceWeights:
        """Parse the TRIAL_SEARCH_WEIGHTS environment value."""
        if not raw or not raw.strip():
            return cls()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidParameterError("TRIAL_SEARCH_WEIGHTS", raw, "a JSON object") from e
        if not isinstance(data, dict):
            raise InvalidParameterError("TRIAL_SEARCH_WEIGHTS", raw, "a JSON object")
        return cls.from_mapping(data)

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


DEFAULT_WEIGHTS = RelevanceWeights()


@dataclass(frozen=True)
class KeywordMatch:
    """Fields matched by one keyword and the points they earned."""

    keyword: str
    fields: tuple[str, ...] = field(default_factory=tuple)
    score: int = 0


def _lowered(value: str | None) -> str | None:
    return value.lower() if value else None


def _matched_fields(trial: TrialRecord, kw: str) -> list[str]:
    """Names of the fields in which the lower-cased keyword occurs."""
    matched: list[str] = []

    if any(kw in c.lower() for c in trial.conditions):
        matched.append("conditions")

    title = _lowered(trial.title)
    if title is not None and kw in title:
        matched.append("title")

    official_title = _lowered(trial.official_title)
    if official_title is not None and kw in official_title:
        matched.append("official_title")

    if any(i.name is not None and kw in i.name.lower() for i in trial.interventions):
        matched.append("interventions")

    sponsor = _lowered(trial.sponsor_name)
    if sponsor is not None and kw in sponsor:
        matched.append("sponsor_name")

    summary = _lowered(trial.summary_text)
    if summary is not None and kw in summary:
        matched.append("summary_text")

    return matched


def explain_relevance(
    trial: TrialRecord,
    keywords: Iterable[str],
    weights: RelevanceWeights = DEFAULT_WEIGHTS,
) -> list[KeywordMatch]:
    """
    Break a trial's score down per keyword.

    Returns:
        One KeywordMatch per keyword, in keyword order. Blank keywords
        are skipped.
    """
    result: list[KeywordMatch] = []
    for keyword in keywords:
        kw = keyword.lower()
        if not kw.strip():
            continue
        matched = _matched_fields(trial, kw)
        score = sum(getattr(weights, name) for name in matched)
        result.append(KeywordMatch(keyword=keyword, fields=tuple(matched), score=score))
    return result


def score_trial(
    trial: TrialRecord,
    keywords: Iterable[str],
    weights: RelevanceWeights = DEFAULT_WEIGHTS,
) -> int:
    """Total relevance score of a trial for the given keywords."""
    return sum(m.score for m in explain_relevance(trial, keywords, weights))
