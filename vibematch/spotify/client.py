"""Spotify Web API as a music-data source.

Only the read endpoints the matching core needs are used:

  - GET /me/playlists                 the user's playlists
  - GET /playlists/{id}/tracks        track ids of one playlist
  - GET /tracks?ids=...               track metadata
  - GET /audio-features?ids=...       audio features for the same ids

Every playlist is enriched (mood vector + tags) as it is loaded. Network
failures, rate limiting and 5xx answers raise TransientError; other HTTP
errors propagate as requests.HTTPError.
"""

from typing import Any, Dict, List, Optional, Sequence

import requests

from vibematch.config import (
    SPOTIFY_API_BASE,
    SPOTIFY_PLAYLIST_LIMIT,
    SPOTIFY_PLAYLIST_TRACKS_PAGE,
    SPOTIFY_REQUEST_TIMEOUT,
    SPOTIFY_TRACKS_PER_PLAYLIST,
)
from vibematch.core import (
    MOOD_FEATURES,
    AudioFeatures,
    Playlist,
    Track,
    TransientError,
    ValidationError,
    log_info,
    log_step,
)
from vibematch.matching import enrich_playlist

from .source import MusicDataSource

# /tracks accepts at most 50 ids per request
TRACKS_BATCH_SIZE = 50


def spotify_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _get(path_or_url: str, access_token: str, params: Optional[Dict] = None) -> Dict[str, Any]:
    url = path_or_url if path_or_url.startswith("http") else f"{SPOTIFY_API_BASE}{path_or_url}"
    try:
        r = requests.get(
            url,
            headers=spotify_headers(access_token),
            params=params,
            timeout=SPOTIFY_REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise TransientError(f"Spotify request failed: {e}") from e

    if r.status_code == 429 or r.status_code >= 500:
        raise TransientError(f"Spotify unavailable ({r.status_code}) for {url}")
    r.raise_for_status()
    return r.json()


def _parse_audio_features(raw: Optional[Dict[str, Any]]) -> AudioFeatures:
    """Map a Spotify audio-features object; absent values stay None."""
    if not raw:
        return AudioFeatures()

    values: Dict[str, Any] = {name: raw.get(name) for name in MOOD_FEATURES}
    values["tempo"] = raw.get("tempo")
    key = raw.get("key")
    # Spotify reports an undetected key as -1
    values["key"] = key if isinstance(key, int) and 0 <= key <= 11 else None
    return AudioFeatures(**values)


def _parse_track(raw: Dict[str, Any], features: Optional[Dict[str, Any]]) -> Track:
    album = raw.get("album") or {}
    images = album.get("images") or []
    artists = raw.get("artists") or []
    return Track(
        id=raw["id"],
        name=raw.get("name", ""),
        artist=artists[0]["name"] if artists else "",
        album=album.get("name", ""),
        artwork_url=images[0]["url"] if images else None,
        preview_url=raw.get("preview_url"),
        audio_features=_parse_audio_features(features),
    )


class SpotifyMusicSource(MusicDataSource):
    """MusicDataSource backed by the Spotify Web API."""

    id = "spotify"

    def __init__(self, access_token: Optional[str] = None) -> None:
        self.access_token = access_token

    def _fetch_tracks(self, track_ids: Sequence[str], access_token: str) -> List[Track]:
        tracks: List[Track] = []
        ids = [track_id for track_id in track_ids if track_id]

        for start in range(0, len(ids), TRACKS_BATCH_SIZE):
            batch = ",".join(ids[start:start + TRACKS_BATCH_SIZE])
            tracks_data = _get("/tracks", access_token, {"ids": batch})
            features_data = _get("/audio-features", access_token, {"ids": batch})

            raw_tracks = tracks_data.get("tracks") or []
            raw_features = features_data.get("audio_features") or []
            for index, raw in enumerate(raw_tracks):
                if not raw or not raw.get("id"):
                    continue
                features = raw_features[index] if index < len(raw_features) else None
                tracks.append(_parse_track(raw, features))

        return tracks

    def get_tracks(self, track_ids: Sequence[str]) -> List[Track]:
        if not self.access_token:
            raise ValidationError("SpotifyMusicSource needs an access token to fetch tracks.")
        return self._fetch_tracks(track_ids, self.access_token)

    def _playlist_track_ids(self, playlist_id: str, access_token: str) -> List[str]:
        data = _get(
            f"/playlists/{playlist_id}/tracks",
            access_token,
            {"limit": SPOTIFY_PLAYLIST_TRACKS_PAGE},
        )
        ids = [
            (item.get("track") or {}).get("id")
            for item in data.get("items", [])
        ]
        return [track_id for track_id in ids if track_id][:SPOTIFY_TRACKS_PER_PLAYLIST]

    def get_playlists(
        self,
        user_token: str,
        limit: int = SPOTIFY_PLAYLIST_LIMIT,
    ) -> List[Playlist]:
        log_step("Fetching playlists from Spotify...")
        data = _get("/me/playlists", user_token, {"limit": limit})

        playlists: List[Playlist] = []
        for item in data.get("items", []):
            if not item or not item.get("id"):
                continue
            track_ids = self._playlist_track_ids(item["id"], user_token)
            tracks = self._fetch_tracks(track_ids, user_token) if track_ids else []
            owner = item.get("owner") or {}
            playlists.append(
                enrich_playlist(
                    Playlist(
                        id=item["id"],
                        name=item.get("name") or "",
                        description=item.get("description"),
                        owner_id=owner.get("id"),
                        tracks=tracks,
                    )
                )
            )

        log_info(f"{len(playlists)} playlists loaded from Spotify.")
        return playlists
