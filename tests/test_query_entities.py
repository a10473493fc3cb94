"""Tests for StructuredQuery / QueryFilters normalization and ResultEnvelope."""

from __future__ import annotations

import pytest

from trial_search.domain.entities import (
    DEFAULT_LIMIT,
    QueryFilters,
    ResultEnvelope,
    StructuredQuery,
    normalize_limit,
)


class TestNormalizeLimit:
    @pytest.mark.parametrize("value", [None, 0, -5, "10", 2.5, True, False, [3]])
    def test_falls_back_to_default(self, value):
        assert normalize_limit(value) == DEFAULT_LIMIT

    @pytest.mark.parametrize(("value", "expected"), [(1, 1), (10, 10), (500, 500), (3.0, 3)])
    def test_keeps_positive_integers(self, value, expected):
        assert normalize_limit(value) == expected

    def test_default_is_fifty(self):
        assert DEFAULT_LIMIT == 50


class TestQueryFilters:
    def test_empty_by_default(self):
        assert QueryFilters().is_empty

    def test_single_string_becomes_list(self):
        filters = QueryFilters(status="RECRUITING")
        assert filters.status == ("RECRUITING",)
        assert not filters.is_empty

    def test_empty_values_impose_nothing(self):
        filters = QueryFilters(status=[], phase=[""], sponsor="", country=None)
        assert filters.is_empty
        assert filters.to_dict() == {}

    def test_from_dict_accepts_both_spellings(self):
        assert QueryFilters.from_dict({"interventionType": ["DRUG"]}).intervention_type == ("DRUG",)
        assert QueryFilters.from_dict({"intervention_type": ["DEVICE"]}).intervention_type == ("DEVICE",)

    def test_from_dict_non_dict(self):
        assert QueryFilters.from_dict(None).is_empty
        assert QueryFilters.from_dict(["RECRUITING"]).is_empty

    def test_non_list_values_impose_nothing(self):
        filters = QueryFilters.from_dict({"status": 3, "phase": True, "sponsor": 7})
        assert filters.is_empty

    def test_to_dict_only_supplied_criteria(self):
        filters = QueryFilters(phase=["PHASE3"], country="Japan")
        assert filters.to_dict() == {"phase": ["PHASE3"], "country": "Japan"}


class TestStructuredQuery:
    def test_blank_keywords_dropped(self):
        query = StructuredQuery(keywords=["  lung cancer ", "", "   ", "EGFR"])
        assert query.keywords == ("lung cancer", "EGFR")

    def test_non_list_keywords_ignored(self):
        assert StructuredQuery(keywords=5).keywords == ()
        assert StructuredQuery(keywords="asthma").keywords == ("asthma",)

    def test_dict_filters_converted(self):
        query = StructuredQuery(filters={"status": ["RECRUITING"]})
        assert isinstance(query.filters, QueryFilters)
        assert query.filters.status == ("RECRUITING",)

    def test_limit_normalized(self):
        assert StructuredQuery(limit=-5).limit == 50
        assert StructuredQuery(limit=None).limit == 50

    def test_from_dict_wire_shape(self):
        query = StructuredQuery.from_dict(
            {
                "keywords": ["lung cancer"],
                "filters": {"status": ["RECRUITING"], "interventionType": ["DRUG"]},
                "limit": 10,
            }
        )
        assert query.keywords == ("lung cancer",)
        assert query.filters.intervention_type == ("DRUG",)
        assert query.limit == 10

    def test_to_dict(self):
        query = StructuredQuery(keywords=["x"], filters=QueryFilters(status=["COMPLETED"]), limit=5)
        assert query.to_dict() == {"keywords": ["x"], "filters": {"status": ["COMPLETED"]}, "limit": 5}

    def test_equal_queries_compare_equal(self):
        assert StructuredQuery(keywords=["a"], limit=0) == StructuredQuery(keywords=("a",), limit=50)


class TestResultEnvelope:
    def test_to_dict(self, two_trial_corpus):
        query = StructuredQuery(keywords=["lung"])
        envelope = ResultEnvelope(
            trials=two_trial_corpus[:1],
            total_results=1,
            query=query,
            relevance_scores={"T1": 18},
        )
        data = envelope.to_dict()
        assert [t["id"] for t in data["trials"]] == ["T1"]
        assert data["totalResults"] == 1
        assert data["query"] == query.to_dict()
        assert data["relevanceScores"] == {"T1": 18}
        assert envelope.returned == 1
