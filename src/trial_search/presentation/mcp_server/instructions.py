"""
MCP Server Instructions - usage guide for AI agents.
"""

from __future__ import annotations

SERVER_INSTRUCTIONS = """
Clinical Trial Search MCP Server - search an in-memory clinical trials corpus

## Which tool?

- The user asks in plain language ("recruiting phase 3 trials for NSCLC"):
  ask_trials(message=...) returns a summary plus the matching trials.

- You already know the keywords and filters:
  search_trials(keywords="lung cancer, NSCLC", status="RECRUITING", phase="PHASE3", limit=10)

- Details of one trial: get_trial(trial_id="NCT...")
- Why a trial ranks where it does: explain_trial_score(trial_id, keywords)
- What the corpus contains: get_corpus_info()

## Search semantics

- Filters are AND-combined. List filters (status, phase, intervention_type)
  match any listed value. sponsor is a case-insensitive substring,
  country a case-insensitive exact name.
- Keywords score per field: conditions 10, title 8, official title 7,
  interventions 5, sponsor 4, summary 2. A trial matching no keyword is
  dropped. Add synonyms and acronym expansions as separate keywords.
- Without keywords, results keep corpus order.
- totalResults counts all matches; only `limit` (default 50) are returned.

## Vocabularies

status: RECRUITING, ACTIVE_NOT_RECRUITING, COMPLETED, TERMINATED, WITHDRAWN,
        SUSPENDED, NOT_YET_RECRUITING
phase: EARLY_PHASE1, PHASE1, PHASE2, PHASE3, PHASE4, NA
intervention_type: DRUG, BIOLOGICAL, DEVICE, PROCEDURE, BEHAVIORAL, OTHER
"""
