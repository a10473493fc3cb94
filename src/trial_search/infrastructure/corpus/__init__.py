"""In-memory trial corpus."""

from .store import DEFAULT_DATA_PATH, CorpusStore, parse_documents

__all__ = ["DEFAULT_DATA_PATH", "CorpusStore", "parse_documents"]
