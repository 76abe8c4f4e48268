from vibematch.core import Playlist

from .mood import aggregate_mood
from .tags import extract_tags


def enrich_playlist(playlist: Playlist) -> Playlist:
    """
    Return a copy of the playlist with its derived data recomputed.

    The mood vector is aggregated from the tracks and the tags extracted from
    name + description. Called every time a playlist is loaded or refreshed;
    the input playlist is left untouched.
    """
    return playlist.model_copy(
        update={
            "mood_vector": aggregate_mood(playlist.tracks),
            "tags": extract_tags(playlist.name, playlist.description),
        }
    )
