"""
Prompt templates for the trial-search assistant.
"""

from __future__ import annotations

STATUS_VALUES = (
    "RECRUITING",
    "ACTIVE_NOT_RECRUITING",
    "COMPLETED",
    "TERMINATED",
    "WITHDRAWN",
    "SUSPENDED",
    "NOT_YET_RECRUITING",
)
PHASE_VALUES = ("EARLY_PHASE1", "PHASE1", "PHASE2", "PHASE3", "PHASE4", "NA")
INTERVENTION_TYPE_VALUES = ("DRUG", "BIOLOGICAL", "DEVICE", "PROCEDURE", "BEHAVIORAL", "OTHER")


QUERY_EXTRACTION_PROMPT = """You are a clinical trials search assistant. Extract a structured search query from the user's message.

User message: "{message}"

Return ONLY valid JSON in this format:
{{
  "keywords": ["keyword1", "keyword2"],
  "filters": {{
    "status": ["RECRUITING", "ACTIVE_NOT_RECRUITING"],
    "phase": ["PHASE3"],
    "interventionType": ["DRUG"],
    "sponsor": "sponsor name",
    "country": "country name"
  }}
}}

Rules:
1. Expand medical acronyms (NSCLC -> "non small cell lung cancer", add both forms)
2. Include synonyms for diseases (e.g., "lung cancer" and "pulmonary carcinoma")
3. "Active" or "recruiting" means status: ["RECRUITING", "ACTIVE_NOT_RECRUITING"]
4. "Completed" means status: ["COMPLETED"]
5. If user mentions phase (phase 1, 2, 3, 4), add to filters.phase as ["PHASE1"], ["PHASE2"], etc.
6. If user says "drug trials", add filters.interventionType: ["DRUG"]
7. If user says "immunotherapy", include it as keyword
8. Only set sponsor or country when the user names one

Available status values: {statuses}
Available phase values: {phases}
Available interventionType values: {intervention_types}

Only include filters that are explicitly mentioned or clearly implied. Return empty filters object if none apply."""


SUMMARY_PROMPT = """Summarize the clinical trials search results in 2-3 sentences using markdown formatting.

Search Query: {query}
Total Results: {total}
Statuses: {statuses}
Phases: {phases}
Top Conditions: {conditions}
Sample Sponsors: {sponsors}

FORMATTING RULES:
- Use **bold** for important keywords: numbers, conditions, phases, statuses, sponsors
- Use natural, conversational language
- Keep it concise (2-3 sentences)

EXAMPLES:
- "I found **15 clinical trials** for **NSCLC**. Most are in **Phase 2/3** and actively **recruiting**. Key sponsors include **Pfizer**, **Roche**, and **Merck**."
- "There are **8 active trials** studying **Type 2 Diabetes**. The majority are **Phase 3 drug trials** with statuses of **recruiting** or **active**."

Write a helpful summary mentioning:
- How many trials found (bold the number)
- Common trial phases and statuses (bold key terms)
- Main conditions being studied (bold condition names)
- Notable sponsors if interesting (bold sponsor names)"""


def build_extraction_prompt(message: str) -> str:
    return QUERY_EXTRACTION_PROMPT.format(
        message=message,
        statuses=", ".join(STATUS_VALUES),
        phases=", ".join(PHASE_VALUES),
        intervention_types=", ".join(INTERVENTION_TYPE_VALUES),
    )
