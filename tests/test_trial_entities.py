"""Tests for TrialRecord ingestion from flat and ClinicalTrials.gov documents."""

from __future__ import annotations

import pytest

from trial_search.domain.entities import Intervention, Location, TrialRecord


@pytest.fixture
def ctgov_study():
    return {
        "protocolSection": {
            "identificationModule": {
                "nctId": "NCT05123456",
                "briefTitle": "Test Trial for Diabetes",
                "officialTitle": "A Randomized Study of Test Drug",
            },
            "statusModule": {"overallStatus": "RECRUITING"},
            "sponsorCollaboratorsModule": {"leadSponsor": {"name": "Test Pharma"}},
            "descriptionModule": {"briefSummary": "A short summary."},
            "conditionsModule": {"conditions": ["Type 2 Diabetes"]},
            "designModule": {"phases": ["PHASE2", "PHASE3"]},
            "armsInterventionsModule": {"interventions": [{"type": "DRUG", "name": "Test Drug"}]},
            "contactsLocationsModule": {
                "locations": [{"facility": "Test Hospital", "city": "Boston", "country": "United States"}]
            },
        }
    }


class TestTrialRecordFromDict:
    def test_flat_document(self, flat_documents):
        trial = TrialRecord.from_dict(flat_documents[0])
        assert trial.id == "NCT001"
        assert trial.official_title.startswith("A Phase 3 Study")
        assert trial.sponsor_name == "Merck Sharp & Dohme LLC"
        assert trial.phases == ("PHASE3",)
        assert trial.interventions == (Intervention(type="BIOLOGICAL", name="Pembrolizumab"),)
        assert [loc.country for loc in trial.locations] == ["United States", "Germany"]

    def test_absent_fields_default_to_empty(self):
        trial = TrialRecord.from_dict({"id": "T9"})
        assert trial.title is None
        assert trial.status is None
        assert trial.conditions == ()
        assert trial.interventions == ()
        assert trial.locations == ()

    def test_malformed_optional_fields_are_ignored(self):
        trial = TrialRecord.from_dict(
            {
                "id": "T9",
                "title": 42,
                "conditions": "not a list",
                "phases": ["PHASE1", None, 3],
                "interventions": [{"name": "Drug A"}, "junk"],
                "locations": None,
            }
        )
        assert trial.title is None
        assert trial.conditions == ()
        assert trial.phases == ("PHASE1",)
        assert trial.interventions == (Intervention(type=None, name="Drug A"),)
        assert trial.locations == ()

    def test_missing_id_raises(self):
        with pytest.raises(ValueError, match="id"):
            TrialRecord.from_dict({"title": "no id"})

    def test_ctgov_study(self, ctgov_study):
        trial = TrialRecord.from_dict(ctgov_study)
        assert trial.id == "NCT05123456"
        assert trial.title == "Test Trial for Diabetes"
        assert trial.official_title == "A Randomized Study of Test Drug"
        assert trial.status == "RECRUITING"
        assert trial.sponsor_name == "Test Pharma"
        assert trial.summary_text == "A short summary."
        assert trial.conditions == ("Type 2 Diabetes",)
        assert trial.phases == ("PHASE2", "PHASE3")
        assert trial.interventions[0].type == "DRUG"
        assert trial.locations[0] == Location(country="United States", facility="Test Hospital", city="Boston")

    def test_ctgov_study_without_nct_id_raises(self):
        with pytest.raises(ValueError, match="nctId"):
            TrialRecord.from_dict({"protocolSection": {"identificationModule": {}}})

    def test_ctgov_study_with_missing_modules(self):
        trial = TrialRecord.from_study({"protocolSection": {"identificationModule": {"nctId": "NCT1"}}})
        assert trial.id == "NCT1"
        assert trial.sponsor_name is None
        assert trial.phases == ()


class TestTrialRecordSerialization:
    def test_to_dict_shape(self, sample_records):
        data = sample_records[0].to_dict()
        assert data["id"] == "NCT001"
        assert data["officialTitle"].startswith("A Phase 3")
        assert data["sponsorName"] == "Merck Sharp & Dohme LLC"
        assert data["interventions"] == [{"type": "BIOLOGICAL", "name": "Pembrolizumab"}]
        assert data["url"] == "https://clinicaltrials.gov/study/NCT001"

    def test_to_dict_feeds_from_dict(self, sample_records):
        for record in sample_records:
            assert TrialRecord.from_dict(record.to_dict()) == record

    def test_records_are_immutable(self, sample_records):
        with pytest.raises(AttributeError):
            sample_records[0].title = "changed"
