"""Public façade for the vibematch.spotify package.

This module exposes the music-data source contract and its Spotify Web API
implementation. Callers should import these symbols from this façade instead
of the internal source or client modules.
"""

from .client import SpotifyMusicSource, spotify_headers
from .source import MusicDataSource

__all__ = [
    "MusicDataSource",
    "SpotifyMusicSource",
    "spotify_headers",
]
