"""
Structured filters - AND-combined trial criteria.

Only supplied criteria constrain the result; a trial failing any active
criterion is dropped before scoring. Missing trial fields fail the
criterion that needs them instead of raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from trial_search.domain.entities import QueryFilters, TrialRecord


def matches_status(trial: TrialRecord, statuses: tuple[str, ...]) -> bool:
    return trial.status is not None and trial.status in statuses


def matches_phase(trial: TrialRecord, phases: tuple[str, ...]) -> bool:
    return any(p in trial.phases for p in phases)


def matches_intervention_type(trial: TrialRecord, types: tuple[str, ...]) -> bool:
    return any(i.type is not None and i.type in types for i in trial.interventions)


def matches_sponsor(trial: TrialRecord, sponsor: str) -> bool:
    """Case-insensitive substring match on the lead sponsor name."""
    if not trial.sponsor_name:
        return False
    return sponsor.lower() in trial.sponsor_name.lower()


def matches_country(trial: TrialRecord, country: str) -> bool:
    """Case-insensitive exact match on any location country."""
    wanted = country.lower()
    return any(loc.country is not None and loc.country.lower() == wanted for loc in trial.locations)


def matches_filters(trial: TrialRecord, filters: QueryFilters) -> bool:
    """True if the trial satisfies every supplied criterion."""
    if filters.status and not matches_status(trial, filters.status):
        return False
    if filters.phase and not matches_phase(trial, filters.phase):
        return False
    if filters.intervention_type and not matches_intervention_type(trial, filters.intervention_type):
        return False
    if filters.sponsor and not matches_sponsor(trial, filters.sponsor):
        return False
    if filters.country and not matches_country(trial, filters.country):
        return False
    return True


def apply_filters(trials: Iterable[TrialRecord], filters: QueryFilters) -> list[TrialRecord]:
    """Keep the trials passing all filters, in their original order."""
    if filters.is_empty:
        return list(trials)
    return [t for t in trials if matches_filters(t, filters)]
