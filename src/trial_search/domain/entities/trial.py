"""
Trial Entities - Clinical Trial Domain Model

A TrialRecord is one clinical study in the in-memory corpus. Every field
except ``id`` is optional: an absent section is kept as ``None`` (or an
empty tuple) and is treated as "no match" by the search engine, never as
an error.

Two document shapes are accepted on ingestion:

- Flat records::

    {"id": "NCT001", "title": "...", "officialTitle": "...", "status": "RECRUITING",
     "sponsorName": "...", "summaryText": "...", "conditions": [...], "phases": [...],
     "interventions": [{"type": "DRUG", "name": "..."}], "locations": [{"country": "..."}]}

- ClinicalTrials.gov API v2 studies (``protocolSection`` with its modules).

Example:
    >>> trial = TrialRecord.from_dict({"id": "T1", "title": "lung cancer drug trial"})
    >>> trial.conditions
    ()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _opt_str(value: Any) -> str | None:
    """Keep non-empty strings, drop everything else."""
    if isinstance(value, str) and value:
        return value
    return None


def _str_tuple(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list | tuple):
        return ()
    return tuple(v for v in values if isinstance(v, str))


def _dict_list(values: Any) -> list[dict[str, Any]]:
    if not isinstance(values, list | tuple):
        return []
    return [v for v in values if isinstance(v, dict)]


def _module(section: dict[str, Any], name: str) -> dict[str, Any]:
    value = section.get(name)
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True, slots=True)
class Intervention:
    """A drug, device, procedure or other intervention studied by a trial."""

    type: str | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Intervention:
        return cls(type=_opt_str(data.get("type")), name=_opt_str(data.get("name")))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "name": self.name}


@dataclass(frozen=True, slots=True)
class Location:
    """A trial site. Only ``country`` takes part in filtering."""

    country: str | None = None
    facility: str | None = None
    city: str | None = None
    state: str | None = None
    status: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Location:
        return cls(
            country=_opt_str(data.get("country")),
            facility=_opt_str(data.get("facility")),
            city=_opt_str(data.get("city")),
            state=_opt_str(data.get("state")),
            status=_opt_str(data.get("status")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "facility": self.facility,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "status": self.status,
        }


@dataclass(frozen=True, slots=True)
class TrialRecord:
    """
    One clinical study.

    Immutable so that the corpus can be shared between concurrent
    searches without copying or locking.
    """

    id: str
    title: str | None = None
    official_title: str | None = None
    status: str | None = None
    sponsor_name: str | None = None
    summary_text: str | None = None
    conditions: tuple[str, ...] = field(default_factory=tuple)
    phases: tuple[str, ...] = field(default_factory=tuple)
    interventions: tuple[Intervention, ...] = field(default_factory=tuple)
    locations: tuple[Location, ...] = field(default_factory=tuple)

    @property
    def url(self) -> str:
        return f"https://clinicaltrials.gov/study/{self.id}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrialRecord:
        """
        Build a record from either supported document shape.

        Raises:
            ValueError: If the document carries no usable id.
        """
        if isinstance(data.get("protocolSection"), dict):
            return cls.from_study(data)

        trial_id = _opt_str(data.get("id"))
        if trial_id is None:
            raise ValueError("trial record has no 'id'")

        return cls(
            id=trial_id,
            title=_opt_str(data.get("title")),
            official_title=_opt_str(data.get("officialTitle")),
            status=_opt_str(data.get("status")),
            sponsor_name=_opt_str(data.get("sponsorName")),
            summary_text=_opt_str(data.get("summaryText")),
            conditions=_str_tuple(data.get("conditions")),
            phases=_str_tuple(data.get("phases")),
            interventions=tuple(Intervention.from_dict(i) for i in _dict_list(data.get("interventions"))),
            locations=tuple(Location.from_dict(loc) for loc in _dict_list(data.get("locations"))),
        )

    @classmethod
    def from_study(cls, study: dict[str, Any]) -> TrialRecord:
        """Build a record from a ClinicalTrials.gov API v2 study document."""
        protocol = _module(study, "protocolSection")
        id_module = _module(protocol, "identificationModule")
        status_module = _module(protocol, "statusModule")
        sponsor_module = _module(protocol, "sponsorCollaboratorsModule")
        description_module = _module(protocol, "descriptionModule")
        conditions_module = _module(protocol, "conditionsModule")
        design_module = _module(protocol, "designModule")
        arms_module = _module(protocol, "armsInterventionsModule")
        contacts_module = _module(protocol, "contactsLocationsModule")

        nct_id = _opt_str(id_module.get("nctId"))
        if nct_id is None:
            raise ValueError("study has no 'protocolSection.identificationModule.nctId'")

        return cls(
            id=nct_id,
            title=_opt_str(id_module.get("briefTitle")),
            official_title=_opt_str(id_module.get("officialTitle")),
            status=_opt_str(status_module.get("overallStatus")),
            sponsor_name=_opt_str(_module(sponsor_module, "leadSponsor").get("name")),
            summary_text=_opt_str(description_module.get("briefSummary")),
            conditions=_str_tuple(conditions_module.get("conditions")),
            phases=_str_tuple(design_module.get("phases")),
            interventions=tuple(Intervention.from_dict(i) for i in _dict_list(arms_module.get("interventions"))),
            locations=tuple(Location.from_dict(loc) for loc in _dict_list(contacts_module.get("locations"))),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the flat camelCase shape."""
        return {
            "id": self.id,
            "title": self.title,
            "officialTitle": self.official_title,
            "status": self.status,
            "sponsorName": self.sponsor_name,
            "summaryText": self.summary_text,
            "conditions": list(self.conditions),
            "phases": list(self.phases),
            "interventions": [i.to_dict() for i in self.interventions],
            "locations": [loc.to_dict() for loc in self.locations],
            "url": self.url,
        }
