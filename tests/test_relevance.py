"""Tests for keyword relevance scoring and configurable weights."""

from __future__ import annotations

import pytest

from trial_search.application.search import (
    DEFAULT_WEIGHTS,
    KeywordMatch,
    RelevanceWeights,
    explain_relevance,
    score_trial,
)
from trial_search.core.exceptions import InvalidParameterError
from trial_search.domain.entities import TrialRecord

# ============================================================================
# Weights
# ============================================================================


class TestRelevanceWeights:
    def test_defaults(self):
        assert DEFAULT_WEIGHTS.to_dict() == {
            "conditions": 10,
            "title": 8,
            "official_title": 7,
            "interventions": 5,
            "sponsor_name": 4,
            "summary_text": 2,
        }
        assert RelevanceWeights.default() == DEFAULT_WEIGHTS

    def test_from_mapping_partial_override(self):
        weights = RelevanceWeights.from_mapping({"title": 20, "summaryText": 0})
        assert weights.title == 20
        assert weights.summary_text == 0
        assert weights.conditions == 10

    def test_from_mapping_empty(self):
        assert RelevanceWeights.from_mapping(None) == DEFAULT_WEIGHTS
        assert RelevanceWeights.from_mapping({}) == DEFAULT_WEIGHTS

    def test_from_mapping_unknown_key(self):
        with pytest.raises(InvalidParameterError, match="'weights'"):
            RelevanceWeights.from_mapping({"abstract": 3})

    @pytest.mark.parametrize("value", [-1, 1.5, "3", True, None])
    def test_rejects_invalid_values(self, value):
        with pytest.raises(InvalidParameterError, match="non-negative integer"):
            RelevanceWeights(title=value)

    def test_from_json(self):
        assert RelevanceWeights.from_json('{"conditions": 12}').conditions == 12
        assert RelevanceWeights.from_json(None) == DEFAULT_WEIGHTS
        assert RelevanceWeights.from_json("  ") == DEFAULT_WEIGHTS

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"title"'])
    def test_from_json_rejects_non_objects(self, raw):
        with pytest.raises(InvalidParameterError, match="TRIAL_SEARCH_WEIGHTS"):
            RelevanceWeights.from_json(raw)


# ============================================================================
# Scoring
# ============================================================================


class TestScoreTrial:
    def test_two_field_match(self, two_trial_corpus):
        t1, t2 = two_trial_corpus
        assert score_trial(t1, ["lung cancer"]) == 18
        assert score_trial(t2, ["lung cancer"]) == 0

    def test_all_fields(self, sample_records):
        # conditions + title + official title + summary
        assert score_trial(sample_records[0], ["lung cancer"]) == 10 + 8 + 7 + 2
        # title + official title + interventions
        assert score_trial(sample_records[0], ["pembrolizumab"]) == 8 + 7 + 5
        assert score_trial(sample_records[0], ["merck"]) == 4

    def test_case_insensitive_substring(self, two_trial_corpus):
        assert score_trial(two_trial_corpus[0], ["LUNG"]) == 18
        assert score_trial(two_trial_corpus[0], ["canc"]) == 18

    def test_field_counts_once_per_keyword(self):
        trial = TrialRecord(id="X", conditions=("Lung Cancer", "Cancer Pain", "Cancer Fatigue"))
        assert score_trial(trial, ["cancer"]) == 10

    def test_scores_sum_over_keywords(self, two_trial_corpus):
        assert score_trial(two_trial_corpus[0], ["lung", "drug"]) == 18 + 8

    def test_absent_fields_never_match(self):
        trial = TrialRecord(id="EMPTY")
        assert score_trial(trial, ["anything"]) == 0

    def test_intervention_without_name(self):
        trial = TrialRecord.from_dict({"id": "X", "interventions": [{"type": "DRUG"}]})
        assert score_trial(trial, ["drug"]) == 0

    def test_custom_weights(self, two_trial_corpus):
        weights = RelevanceWeights(conditions=1, title=1)
        assert score_trial(two_trial_corpus[0], ["lung cancer"], weights) == 2

    def test_no_keywords_scores_zero(self, two_trial_corpus):
        assert score_trial(two_trial_corpus[0], []) == 0


class TestExplainRelevance:
    def test_breakdown_per_keyword(self, sample_records):
        matches = explain_relevance(sample_records[0], ["pembrolizumab", "merck", "insulin"])
        assert matches == [
            KeywordMatch("pembrolizumab", ("title", "official_title", "interventions"), 20),
            KeywordMatch("merck", ("sponsor_name",), 4),
            KeywordMatch("insulin", (), 0),
        ]

    def test_blank_keywords_skipped(self, two_trial_corpus):
        matches = explain_relevance(two_trial_corpus[0], ["", "   ", "lung"])
        assert [m.keyword for m in matches] == ["lung"]

    def test_total_matches_score(self, sample_records):
        keywords = ["lung cancer", "pembrolizumab"]
        for trial in sample_records:
            assert sum(m.score for m in explain_relevance(trial, keywords)) == score_trial(trial, keywords)
