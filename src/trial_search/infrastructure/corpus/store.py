"""
Corpus Store - load-once, read-many trial corpus.

The store owns the only copy of the corpus. It reads the JSON source
exactly once (lazily, on first access, or eagerly via ``load()``) and
serves an immutable tuple of TrialRecord afterwards. There is no reload
or invalidation: the corpus lives until the process exits.

Accepted source layouts:
    - a JSON array of study documents
    - a single study document
    - an object with a ``"studies"`` array (ClinicalTrials.gov export)

Any failure (missing file, invalid JSON, entry without id, duplicate id)
raises DataLoadError and leaves the store unloaded; a partial corpus is
never kept.

Usage:
    store = CorpusStore("data/ctg-studies.json")
    store.load()               # optional, fails fast at startup
    trials = store.get_all()   # lazy-loads on first access
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from trial_search.core.exceptions import DataLoadError
from trial_search.domain.entities import TrialRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "sample_trials.json"


def parse_documents(payload: Any, source: str | None = None) -> tuple[TrialRecord, ...]:
    """
    Turn decoded JSON into an ordered tuple of records.

    Raises:
        DataLoadError: On unsupported layout, malformed entries or duplicate ids.
    """
    if isinstance(payload, dict) and isinstance(payload.get("studies"), list):
        documents = payload["studies"]
    elif isinstance(payload, list):
        documents = payload
    elif isinstance(payload, dict):
        documents = [payload]
    else:
        raise DataLoadError(f"expected a JSON array or object, got {type(payload).__name__}", source=source)

    records: list[TrialRecord] = []
    seen: set[str] = set()
    for index, document in enumerate(documents):
        if not isinstance(document, dict):
            raise DataLoadError(f"entry {index} is not an object", source=source)
        try:
            record = TrialRecord.from_dict(document)
        except ValueError as e:
            raise DataLoadError(f"entry {index}: {e}", source=source) from e
        if record.id in seen:
            raise DataLoadError(f"duplicate trial id {record.id!r} at entry {index}", source=source)
        seen.add(record.id)
        records.append(record)

    return tuple(records)


class CorpusStore:
    """Read-only, lazily loaded trial corpus."""

    def __init__(self, data_path: str | Path | None = None):
        """
        Initialize the store. Nothing is read until first access.

        Args:
            data_path: JSON file holding the studies. Defaults to the
                packaged sample dataset.
        """
        self.data_path: Path | None = Path(data_path) if data_path else DEFAULT_DATA_PATH
        self._trials: tuple[TrialRecord, ...] | None = None
        self._by_id: dict[str, TrialRecord] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_records(cls, records: Iterable[TrialRecord | dict[str, Any]]) -> CorpusStore:
        """Build an already-loaded store from records or raw documents."""
        documents = [r.to_dict() if isinstance(r, TrialRecord) else r for r in records]
        store = cls()
        store.data_path = None
        store._install(parse_documents(documents, source="<memory>"))
        return store

    @property
    def is_loaded(self) -> bool:
        return self._trials is not None

    def load(self) -> tuple[TrialRecord, ...]:
        """
        Load the corpus if it is not loaded yet and return it.

        Idempotent; concurrent first callers block on one read.

        Raises:
            DataLoadError: If the source is missing or malformed.
        """
        trials = self._trials
        if trials is not None:
            return trials

        with self._lock:
            if self._trials is None:
                self._install(self._read())
                logger.info(f"Loaded {len(self._trials)} clinical trials into memory from {self.data_path}")
            return self._trials

    def get_all(self) -> tuple[TrialRecord, ...]:
        """Return the whole corpus in source order, loading it on first access."""
        return self.load()

    def get(self, trial_id: str) -> TrialRecord | None:
        """Look up one trial by id."""
        self.load()
        return self._by_id.get(trial_id)

    def __len__(self) -> int:
        return len(self.load())

    def _install(self, trials: tuple[TrialRecord, ...]) -> None:
        self._by_id = {t.id: t for t in trials}
        self._trials = trials

    def _read(self) -> tuple[TrialRecord, ...]:
        source = str(self.data_path)
        try:
            with open(self.data_path, encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError as e:
            logger.error(f"Clinical trials data file not found: {source}")
            raise DataLoadError("file not found", source=source) from e
        except json.JSONDecodeError as e:
            logger.error(f"Clinical trials data is not valid JSON: {source}: {e}")
            raise DataLoadError(f"invalid JSON ({e.msg} at line {e.lineno})", source=source) from e
        except UnicodeDecodeError as e:
            logger.error(f"Clinical trials data is not valid UTF-8: {source}: {e}")
            raise DataLoadError(f"invalid encoding ({e.reason} at byte {e.start})", source=source) from e
        except OSError as e:
            logger.error(f"Error reading clinical trials data {source}: {e}")
            raise DataLoadError(str(e), source=source) from e

        return parse_documents(payload, source=source)
