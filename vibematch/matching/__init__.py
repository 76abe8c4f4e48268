"""Public façade for the vibematch.matching package.

This module exposes the matching core: mood aggregation and tag extraction for
playlists, compatibility scoring, shared-attribute derivation, and the
services that persist swipes, matches, messages and presence. Other packages
should import matching behaviour from this façade instead of the internal
submodules.
"""

from .detailed import (
    artist_overlap,
    detailed_compatibility,
    emotion_vector,
    genre_match,
    quick_compatibility,
)
from .engine import MatchEngine
from .messages import MessageService
from .mood import aggregate_mood
from .playlists import enrich_playlist
from .presence import PresenceService
from .scoring import (
    NEUTRAL_SCORE,
    compatibility_breakdown,
    compatibility_score,
    score_compatibility,
)
from .shared import derive_shared_attributes
from .tags import TAG_VOCABULARY, extract_tags

__all__ = [
    "aggregate_mood",
    "extract_tags",
    "TAG_VOCABULARY",
    "enrich_playlist",
    "score_compatibility",
    "compatibility_breakdown",
    "compatibility_score",
    "detailed_compatibility",
    "quick_compatibility",
    "genre_match",
    "artist_overlap",
    "emotion_vector",
    "NEUTRAL_SCORE",
    "derive_shared_attributes",
    "MatchEngine",
    "MessageService",
    "PresenceService",
]
