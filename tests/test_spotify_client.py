from typing import Any, Dict, List, Optional

import pytest
import requests

from vibematch.config import SPOTIFY_API_BASE
from vibematch.core import TransientError, ValidationError
from vibematch.spotify import SpotifyMusicSource, spotify_headers


class FakeResponse:
    def __init__(self, payload: Dict[str, Any], status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> Dict[str, Any]:
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def _raw_track(track_id: str, name: str) -> Dict[str, Any]:
    return {
        "id": track_id,
        "name": name,
        "artists": [{"name": "Artist"}],
        "album": {"name": "Album", "images": [{"url": f"https://img/{track_id}"}]},
        "preview_url": None,
    }


def _raw_features(energy: float, danceability: float, key: int = 5) -> Dict[str, Any]:
    return {
        "energy": energy,
        "danceability": danceability,
        "valence": 0.5,
        "acousticness": 0.1,
        "instrumentalness": 0.0,
        "tempo": 120.0,
        "key": key,
    }


def _install_fake_api(monkeypatch, routes: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []

    def fake_get(url: str, headers=None, params: Optional[Dict] = None, timeout=None):
        calls.append({"url": url, "headers": headers, "params": params})
        path = url[len(SPOTIFY_API_BASE):]
        return FakeResponse(routes[path])

    monkeypatch.setattr("vibematch.spotify.client.requests.get", fake_get)
    return calls


def test_spotify_headers_use_bearer_token() -> None:
    assert spotify_headers("tok") == {"Authorization": "Bearer tok"}


def test_get_tracks_merges_metadata_and_audio_features(monkeypatch) -> None:
    calls = _install_fake_api(
        monkeypatch,
        {
            "/tracks": {"tracks": [_raw_track("t1", "One"), None, _raw_track("t2", "Two")]},
            "/audio-features": {
                "audio_features": [_raw_features(0.8, 0.6), None, _raw_features(0.2, 0.4, key=-1)]
            },
        },
    )
    source = SpotifyMusicSource(access_token="tok")

    tracks = source.get_tracks(["t1", "missing", "t2"])

    assert [t.id for t in tracks] == ["t1", "t2"]
    assert tracks[0].artwork_url == "https://img/t1"
    assert tracks[0].audio_features.energy == 0.8
    assert tracks[0].audio_features.key == 5
    assert tracks[1].audio_features.key is None
    assert calls[0]["params"] == {"ids": "t1,missing,t2"}
    assert calls[0]["headers"] == {"Authorization": "Bearer tok"}


def test_get_tracks_requires_a_token() -> None:
    with pytest.raises(ValidationError):
        SpotifyMusicSource().get_tracks(["t1"])


def test_get_playlists_returns_enriched_playlists(monkeypatch) -> None:
    _install_fake_api(
        monkeypatch,
        {
            "/me/playlists": {
                "items": [
                    {
                        "id": "p1",
                        "name": "Chill Indie Evenings",
                        "description": "soft folk for late nights",
                        "owner": {"id": "u1"},
                    }
                ]
            },
            "/playlists/p1/tracks": {
                "items": [{"track": {"id": "t1"}}, {"track": None}, {"track": {"id": "t2"}}]
            },
            "/tracks": {"tracks": [_raw_track("t1", "One"), _raw_track("t2", "Two")]},
            "/audio-features": {
                "audio_features": [_raw_features(0.8, 0.6), _raw_features(0.6, 0.4)]
            },
        },
    )

    playlists = SpotifyMusicSource().get_playlists("user-token", limit=10)

    assert len(playlists) == 1
    playlist = playlists[0]
    assert playlist.owner_id == "u1"
    assert [t.id for t in playlist.tracks] == ["t1", "t2"]
    assert playlist.tags == ["indie", "folk", "chill"]
    assert playlist.mood_vector.energy == pytest.approx(0.7)
    assert playlist.mood_vector.danceability == pytest.approx(0.5)


def test_network_failure_is_transient(monkeypatch) -> None:
    def failing_get(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr("vibematch.spotify.client.requests.get", failing_get)

    with pytest.raises(TransientError):
        SpotifyMusicSource(access_token="tok").get_tracks(["t1"])


@pytest.mark.parametrize("status_code", [429, 500, 503])
def test_rate_limit_and_server_errors_are_transient(monkeypatch, status_code: int) -> None:
    monkeypatch.setattr(
        "vibematch.spotify.client.requests.get",
        lambda *args, **kwargs: FakeResponse({}, status_code=status_code),
    )

    with pytest.raises(TransientError):
        SpotifyMusicSource().get_playlists("tok")


def test_client_errors_propagate_as_http_errors(monkeypatch) -> None:
    monkeypatch.setattr(
        "vibematch.spotify.client.requests.get",
        lambda *args, **kwargs: FakeResponse({}, status_code=401),
    )

    with pytest.raises(requests.HTTPError):
        SpotifyMusicSource().get_playlists("bad-token")
