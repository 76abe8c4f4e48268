"""Public façade for the vibematch.data package.

This module exposes the document store contract, its JSON-backed
implementation and the per-entity repositories built on top of it. Callers
should use this façade instead of importing from the internal store or
repositories modules directly.
"""

from .repositories import (
    MatchRepository,
    MessageRepository,
    PlaylistRepository,
    PresenceRepository,
    SwipeRepository,
    UserRepository,
)
from .store import Document, DocumentStore, JsonDocumentStore

__all__ = [
    "Document",
    "DocumentStore",
    "JsonDocumentStore",
    "UserRepository",
    "PlaylistRepository",
    "SwipeRepository",
    "MatchRepository",
    "MessageRepository",
    "PresenceRepository",
]
