from typing import List

import pytest

from vibematch.core import AudioFeatures, AudioProfile, EmotionVector, Track, UserProfile
from vibematch.matching import (
    artist_overlap,
    detailed_compatibility,
    emotion_vector,
    genre_match,
    quick_compatibility,
    score_compatibility,
)
from vibematch.matching.detailed import (
    audio_profile,
    audio_similarity,
    bpm_energy_match,
    dominant_emotion,
    mood_compatibility,
)


def _make_tracks(energy: float, danceability: float, tempo: float, count: int = 2) -> List[Track]:
    return [
        Track(
            id=f"t{n}",
            audio_features=AudioFeatures(
                acousticness=0.2,
                danceability=danceability,
                energy=energy,
                instrumentalness=0.0,
                liveness=0.1,
                speechiness=0.05,
                valence=0.6,
                tempo=tempo,
            ),
        )
        for n in range(count)
    ]


def test_genre_match_jaccard_plus_top_bonus() -> None:
    score, shared = genre_match(["Indie", "Rock", "Jazz"], ["rock", " indie ", "pop", "folk"])

    # 2 shared out of 5 distinct -> 40, plus 2 top-3 hits -> +20
    assert score == 60
    assert shared == ["rock", " indie "]


def test_genre_match_is_capped_and_empty_safe() -> None:
    assert genre_match(["a", "b", "c"], ["c", "b", "a"]) == (100, ["c", "b", "a"])
    assert genre_match([], ["pop"]) == (0, [])
    assert genre_match(["pop"], []) == (0, [])


def test_artist_overlap_weights_favourites() -> None:
    score, shared = artist_overlap(["A", "B", "C"], ["C", "X", "a"])

    # matched weights (8+10)/2 + (10+8)/2 = 18 out of 10+9+8 = 27
    assert score == 67
    assert shared == ["C", "a"]
    assert artist_overlap(["A"], []) == (0, [])


def test_audio_profile_means_reported_values_only() -> None:
    tracks = _make_tracks(0.2, 0.4, 100) + _make_tracks(0.6, 0.8, 140)
    tracks.append(Track(id="bare"))

    profile = audio_profile(tracks)

    assert profile.energy == pytest.approx(0.4)
    assert profile.danceability == pytest.approx(0.6)
    assert profile.tempo == pytest.approx(120.0)
    assert audio_profile([]) == AudioProfile()


def test_audio_similarity_bounds() -> None:
    silent = AudioProfile(
        acousticness=0, danceability=0, energy=0, instrumentalness=0,
        liveness=0, speechiness=0, valence=0, tempo=40,
    )
    loud = AudioProfile(
        acousticness=1, danceability=1, energy=1, instrumentalness=1,
        liveness=1, speechiness=1, valence=1, tempo=200,
    )

    assert audio_similarity(silent, silent) == 100
    assert audio_similarity(silent, loud) == 0


def test_bpm_energy_match_scores_and_insight() -> None:
    calm = AudioProfile(energy=0.2, danceability=0.3, tempo=100)
    lively = AudioProfile(energy=0.6, danceability=0.5, tempo=140)

    score, insight = bpm_energy_match(calm, lively)

    # energy 60 * 0.4 + bpm 50 * 0.3 + dance 80 * 0.3
    assert score == 63
    assert insight.startswith("Similar vibes")
    assert bpm_energy_match(calm, calm)[0] == 100


def test_emotion_vector_and_dominant_mood() -> None:
    party = emotion_vector(
        AudioProfile(valence=1, energy=1, danceability=1, acousticness=0, tempo=180)
    )

    assert party.happy == pytest.approx(1.0)
    assert party.energetic == pytest.approx(1.0)
    assert party.chill == pytest.approx(0.0)
    assert party.melancholic == pytest.approx(0.0)
    assert party.party == pytest.approx(1.0)
    # Ties go to the later dimension.
    assert dominant_emotion(EmotionVector()) == "party"
    assert dominant_emotion(EmotionVector(melancholic=0.9)) == "melancholic"


def test_mood_compatibility_insights() -> None:
    sad = EmotionVector(melancholic=0.9)
    happy = EmotionVector(happy=0.9)

    assert mood_compatibility(sad, sad) == (100, "Both love melancholic music")
    score, insight = mood_compatibility(sad, happy)
    assert score < 100
    assert insight == "You're melancholic, they're happy: a good balance"


def test_detailed_compatibility_without_tracks_uses_lists_only() -> None:
    a = UserProfile(id="a", top_genres=["indie", "rock"], top_artists=["A", "B"])
    b = UserProfile(id="b", top_genres=["rock", "indie"], top_artists=["A", "B"])

    result = detailed_compatibility(a, b)

    assert result.factors == {
        "genre": 100,
        "artist": 100,
        "audio": 0,
        "bpm_energy": 0,
        "mood": 0,
    }
    # 100 * 0.30 + 100 * 0.25
    assert result.score == 55
    assert result.shared_genres == ["rock", "indie"]
    assert result.shared_artists == ["A", "B"]
    assert result.insights == ["2 shared genres, music soulmates", "Both fans of A"]
    assert result.recommendations[0] == "Explore each other's music tastes"
    assert result.audio_profile_a == AudioProfile()
    assert result.emotion_b == EmotionVector()


def test_detailed_compatibility_with_matching_tracks() -> None:
    a = UserProfile(id="a", top_genres=["house"], top_artists=["A"])
    b = UserProfile(id="b", top_genres=["house"], top_artists=["A"])
    tracks = _make_tracks(0.7, 0.8, 124)

    result = detailed_compatibility(a, b, tracks, tracks)

    assert result.factors["audio"] == 100
    assert result.factors["bpm_energy"] == 100
    assert result.factors["mood"] == 100
    assert result.score == 100
    assert result.recommendations == [
        "Plan a concert date together",
        "Create a collaborative playlist",
    ]
    assert len(result.insights) == 4
    assert result.audio_profile_a.energy == pytest.approx(0.7)


def test_detailed_compatibility_needs_tracks_on_both_sides() -> None:
    a = UserProfile(id="a")
    b = UserProfile(id="b")

    result = detailed_compatibility(a, b, _make_tracks(0.5, 0.5, 120), [])

    assert result.score == 0
    assert result.factors["audio"] == 0
    assert result.insights == []


def test_quick_compatibility_and_profile_score_are_independent() -> None:
    a = UserProfile(id="a", age=30, top_genres=["pop"], top_artists=["X"])
    b = UserProfile(id="b", age=30, top_genres=["pop"], top_artists=["Y"])

    # genre 100 * 0.55 + artist 0 * 0.45
    assert quick_compatibility(a, b) == 55
    # Genres and artists do not feed the profile score.
    assert score_compatibility(a, b) == 100
