from typing import List, Optional

from vibematch.core import Playlist

from .tags import TAG_VOCABULARY

# Strict "<" comparisons on the mood-vector coordinates.
ENERGY_THRESHOLD = 0.2
DANCEABILITY_THRESHOLD = 0.2


def _common_tags(playlist_a: Playlist, playlist_b: Playlist) -> List[str]:
    common = set(playlist_a.tags) & set(playlist_b.tags)
    ordered = [tag for tag in TAG_VOCABULARY if tag in common]
    ordered += sorted(common - set(TAG_VOCABULARY))
    return ordered


def derive_shared_attributes(
    playlist_a: Optional[Playlist],
    playlist_b: Optional[Playlist],
) -> List[str]:
    """
    Human-readable "why you matched" lines for two playlists.

    Returns an empty list when either playlist is absent. Otherwise, in order:
      - "Both love {tag}" for each tag both playlists carry
      - "Similar energy vibes" when the energy coordinates differ by < 0.2
      - "Matching dance vibes" when danceability differs by < 0.2

    The result is presentational only; it is frozen into a Match when the
    match is created but never feeds the compatibility score.
    """
    if playlist_a is None or playlist_b is None:
        return []

    attributes = [f"Both love {tag}" for tag in _common_tags(playlist_a, playlist_b)]

    mood_a = playlist_a.mood_vector
    mood_b = playlist_b.mood_vector

    if abs(mood_a.energy - mood_b.energy) < ENERGY_THRESHOLD:
        attributes.append("Similar energy vibes")

    if abs(mood_a.danceability - mood_b.danceability) < DANCEABILITY_THRESHOLD:
        attributes.append("Matching dance vibes")

    return attributes
