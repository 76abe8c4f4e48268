from typing import Optional

from vibematch.config import STORE_FILE
from vibematch.data import DocumentStore, JsonDocumentStore
from vibematch.matching import MatchEngine

_store: Optional[DocumentStore] = None


def get_store() -> DocumentStore:
    """Process-wide document store, opened on first use."""
    global _store
    if _store is None:
        _store = JsonDocumentStore(STORE_FILE)
    return _store


def get_engine() -> MatchEngine:
    return MatchEngine(get_store())
