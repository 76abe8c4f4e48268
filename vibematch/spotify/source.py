from abc import ABC, abstractmethod
from typing import List, Sequence

from vibematch.core import Playlist, Track


class MusicDataSource(ABC):
    """
    Abstract provider of tracks and playlists for the matching core.

    Implementations return Track objects carrying audio features and Playlist
    objects whose tracks are embedded and whose mood vector and tags have
    already been derived (see vibematch.matching.enrich_playlist).
    """

    id: str

    @abstractmethod
    def get_tracks(self, track_ids: Sequence[str]) -> List[Track]:
        raise NotImplementedError

    @abstractmethod
    def get_playlists(self, user_token: str, limit: int) -> List[Playlist]:
        raise NotImplementedError
