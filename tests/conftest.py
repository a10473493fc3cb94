"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from trial_search.domain.entities import TrialRecord
from trial_search.infrastructure.corpus import CorpusStore

# ============================================================
# Corpus Fixtures
# ============================================================


@pytest.fixture
def two_trial_corpus() -> tuple[TrialRecord, ...]:
    """The two-trial lung cancer / diabetes corpus."""
    return (
        TrialRecord.from_dict(
            {
                "id": "T1",
                "title": "lung cancer drug trial",
                "conditions": ["Lung Cancer"],
                "status": "RECRUITING",
            }
        ),
        TrialRecord.from_dict(
            {
                "id": "T2",
                "title": "diabetes study",
                "conditions": ["Diabetes"],
                "status": "COMPLETED",
            }
        ),
    )


@pytest.fixture
def flat_documents() -> list[dict]:
    """Flat trial documents covering every searchable field."""
    return [
        {
            "id": "NCT001",
            "title": "Pembrolizumab in Lung Cancer",
            "officialTitle": "A Phase 3 Study of Pembrolizumab for Non-Small Cell Lung Cancer",
            "status": "RECRUITING",
            "sponsorName": "Merck Sharp & Dohme LLC",
            "summaryText": "Immunotherapy for advanced lung cancer.",
            "conditions": ["Non-Small Cell Lung Cancer"],
            "phases": ["PHASE3"],
            "interventions": [{"type": "BIOLOGICAL", "name": "Pembrolizumab"}],
            "locations": [{"country": "United States"}, {"country": "Germany"}],
        },
        {
            "id": "NCT002",
            "title": "Semaglutide and Glycemic Control",
            "status": "COMPLETED",
            "sponsorName": "Novo Nordisk A/S",
            "summaryText": "Weekly injections in type 2 diabetes.",
            "conditions": ["Type 2 Diabetes"],
            "phases": ["PHASE3"],
            "interventions": [{"type": "DRUG", "name": "Semaglutide"}],
            "locations": [{"country": "Denmark"}],
        },
        {
            "id": "NCT003",
            "title": "Osimertinib After Surgery",
            "status": "ACTIVE_NOT_RECRUITING",
            "sponsorName": "AstraZeneca",
            "summaryText": "Adjuvant therapy in EGFR-mutated lung cancer.",
            "conditions": ["EGFR Positive Lung Cancer"],
            "phases": ["PHASE2", "PHASE3"],
            "interventions": [{"type": "DRUG", "name": "Osimertinib"}],
            "locations": [{"country": "Japan"}, {"country": "Canada"}],
        },
        {
            "id": "NCT004",
            "title": "Sleep Coaching App",
        },
    ]


@pytest.fixture
def sample_records(flat_documents) -> tuple[TrialRecord, ...]:
    return tuple(TrialRecord.from_dict(d) for d in flat_documents)


@pytest.fixture
def sample_store(flat_documents) -> CorpusStore:
    """An already-loaded in-memory store."""
    return CorpusStore.from_records(flat_documents)


@pytest.fixture
def data_file(tmp_path, flat_documents):
    """Write the flat documents to a JSON file and return its path."""
    path = tmp_path / "trials.json"
    path.write_text(json.dumps(flat_documents), encoding="utf-8")
    return path


# ============================================================
# LLM Fixtures
# ============================================================


@pytest.fixture
def mock_llm():
    """A configured LLM client whose completions are scripted per test."""
    llm = MagicMock()
    llm.is_configured = True
    llm.complete = AsyncMock(return_value="")
    llm.close = AsyncMock()
    return llm


@pytest.fixture
def unconfigured_llm():
    llm = MagicMock()
    llm.is_configured = False
    llm.complete = AsyncMock(side_effect=AssertionError("LLM must not be called"))
    llm.close = AsyncMock()
    return llm


@pytest.fixture
def test_settings(data_file) -> dict:
    """Container settings pointing at the temporary data file, no LLM key."""
    return {
        "data_path": str(data_file),
        "weights": None,
        "llm": {
            "api_key": None,
            "base_url": "https://llm.example.test/v1",
            "model": "test-model",
            "timeout": 5.0,
        },
    }
