"""
Search MCP Tools - structured trial search over the in-memory corpus

Tools:
- search_trials: keywords + filters -> ranked, truncated trials
- get_trial: one trial by id
- explain_trial_score: per-keyword breakdown of a trial's relevance score
- get_corpus_info: corpus size and value distributions
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from trial_search.core.exceptions import InvalidParameterError, NotFoundError
from trial_search.domain.entities import DEFAULT_LIMIT, QueryFilters, StructuredQuery

from ._common import format_error, normalize_list, to_json

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from trial_search.application.search import TrialSearchEngine

logger = logging.getLogger(__name__)


def register_search_tools(mcp: FastMCP, engine: TrialSearchEngine):
    """Register structured search tools (4 tools)."""

    @mcp.tool()
    def search_trials(
        keywords: list[str] | str | None = None,
        status: list[str] | str | None = None,
        phase: list[str] | str | None = None,
        intervention_type: list[str] | str | None = None,
        sponsor: str | None = None,
        country: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> str:
        """
        Search clinical trials by keywords and structured filters.

        Keywords are matched case-insensitively against conditions (10 pts),
        title (8), official title (7), intervention names (5), sponsor (4)
        and summary (2). Trials matching no keyword are dropped. Without
        keywords, all trials passing the filters are returned in corpus order.

        Args:
            keywords: Search terms, list or comma-separated (e.g., "lung cancer, pembrolizumab")
            status: Overall status values (e.g., "RECRUITING,ACTIVE_NOT_RECRUITING")
            phase: Phase values (e.g., "PHASE2,PHASE3")
            intervention_type: Intervention types (e.g., "DRUG,BIOLOGICAL")
            sponsor: Part of the lead sponsor name (case-insensitive)
            country: Exact location country (case-insensitive)
            limit: Maximum trials returned (default 50; non-positive -> 50)

        Returns:
            JSON with trials, totalResults, query and relevanceScores

        Example:
            search_trials(keywords="lung cancer", status="RECRUITING", limit=10)
        """
        query = StructuredQuery(
            keywords=tuple(normalize_list(keywords)),
            filters=QueryFilters(
                status=tuple(normalize_list(status)),
                phase=tuple(normalize_list(phase)),
                intervention_type=tuple(normalize_list(intervention_type)),
                sponsor=sponsor,
                country=country,
            ),
            limit=limit,
        )
        result = engine.search(query)
        payload = result.to_dict()
        payload["showing"] = f"Showing {result.returned} of {result.total_results} trials"
        return to_json(payload)

    @mcp.tool()
    def get_trial(trial_id: str) -> str:
        """
        Get one clinical trial by its registry id.

        Args:
            trial_id: Trial identifier (e.g., "NCT90000001")

        Returns:
            JSON trial record, or an error if unknown
        """
        trial = engine.get_trial(trial_id.strip())
        if trial is None:
            return format_error(NotFoundError("Trial", trial_id), "get_trial")
        return to_json(trial.to_dict())

    @mcp.tool()
    def explain_trial_score(trial_id: str, keywords: list[str] | str) -> str:
        """
        Explain how a trial's relevance score is built from keyword matches.

        Args:
            trial_id: Trial identifier
            keywords: Keywords to score, list or comma-separated

        Returns:
            JSON with per-keyword matched fields and points, plus the total
        """
        terms = normalize_list(keywords)
        if not terms:
            return format_error(
                InvalidParameterError("keywords", keywords, "at least one keyword"),
                "explain_trial_score",
            )

        trial = engine.get_trial(trial_id.strip())
        if trial is None:
            return format_error(NotFoundError("Trial", trial_id), "explain_trial_score")

        matches = engine.explain(trial, terms)
        return to_json(
            {
                "trial_id": trial.id,
                "weights": engine.weights.to_dict(),
                "keywords": [{"keyword": m.keyword, "fields": list(m.fields), "score": m.score} for m in matches],
                "total_score": sum(m.score for m in matches),
            }
        )

    @mcp.tool()
    def get_corpus_info() -> str:
        """
        Describe the loaded trial corpus.

        Returns:
            JSON with trial count and status / phase / intervention type counts
        """
        trials = engine.store.get_all()
        statuses = Counter(t.status or "UNKNOWN" for t in trials)
        phases = Counter(p for t in trials for p in t.phases)
        types = Counter(i.type for t in trials for i in t.interventions if i.type)
        return to_json(
            {
                "total_trials": len(trials),
                "statuses": dict(statuses.most_common()),
                "phases": dict(phases.most_common()),
                "intervention_types": dict(types.most_common()),
                "weights": engine.weights.to_dict(),
            }
        )

    logger.info("Registered search tools (4 tools)")
