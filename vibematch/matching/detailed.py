"""Detailed music compatibility between two listeners.

score_compatibility only looks at profile signals (age, city, bio). This
module compares what two people actually listen to:

  factor        weight  input
  genre         0.30    top_genres: Jaccard overlap plus a bonus for top-3 hits
  artist        0.25    top_artists: overlap weighted by list position
  audio         0.20    distance between the mean audio features of their tracks
  bpm_energy    0.15    energy, tempo and danceability closeness
  mood          0.10    distance between emotion vectors derived from audio

The three audio-based factors need tracks on both sides; without them they
stay 0, as does a list-based factor whose list is empty on either side.
"""

from functools import reduce
import math
from typing import Dict, List, Optional, Sequence, Tuple

from vibematch.core import (
    MOOD_FEATURES,
    AudioProfile,
    DetailedCompatibility,
    EmotionVector,
    Track,
    UserProfile,
)

from .scoring import _round_half_up

FACTOR_WEIGHTS: Dict[str, float] = {
    "genre": 0.30,
    "artist": 0.25,
    "audio": 0.20,
    "bpm_energy": 0.15,
    "mood": 0.10,
}

QUICK_GENRE_WEIGHT = 0.55
QUICK_ARTIST_WEIGHT = 0.45

TOP_GENRES = 3
TOP_GENRE_BONUS = 10
ARTIST_POSITION_WEIGHT = 10
MAX_TRACKS = 50

# bpm spans: tempo normalisation, bpm tolerance, "fast" threshold
TEMPO_RANGE = 160.0
BPM_TOLERANCE = 80.0
FAST_TEMPO = 140.0

EMOTIONS = ("happy", "energetic", "chill", "melancholic", "party")

MAX_INSIGHTS = 5


def _normalize(name: str) -> str:
    return name.strip().lower()


def genre_match(genres_a: Sequence[str], genres_b: Sequence[str]) -> Tuple[int, List[str]]:
    """
    Genre overlap on a 0-100 scale and the shared genres (as spelled in
    `genres_b`). Case and surrounding spaces are ignored.
    """
    if not genres_a or not genres_b:
        return 0, []

    set_a = {_normalize(g) for g in genres_a}
    set_b = {_normalize(g) for g in genres_b}

    shared: List[str] = []
    seen = set()
    for genre in genres_b:
        key = _normalize(genre)
        if key in set_a and key not in seen:
            seen.add(key)
            shared.append(genre)

    jaccard = len(set_a & set_b) / len(set_a | set_b) * 100
    top_a = {_normalize(g) for g in genres_a[:TOP_GENRES]}
    top_b = {_normalize(g) for g in genres_b[:TOP_GENRES]}
    bonus = len(top_a & top_b) * TOP_GENRE_BONUS

    return _round_half_up(min(100.0, jaccard + bonus)), shared


def _position_weight(index: int) -> int:
    return max(1, ARTIST_POSITION_WEIGHT - index)


def artist_overlap(artists_a: Sequence[str], artists_b: Sequence[str]) -> Tuple[int, List[str]]:
    """
    Artist overlap on a 0-100 scale, earlier (favourite) artists weighing
    more, and the shared artists in `artists_b` order.
    """
    if not artists_a or not artists_b:
        return 0, []

    positions_a: Dict[str, int] = {}
    for index, artist in enumerate(artists_a):
        positions_a.setdefault(_normalize(artist), index)

    shared: List[str] = []
    weighted = 0.0
    possible = 0.0
    for index, artist in enumerate(artists_b):
        possible += _position_weight(index)
        position_a = positions_a.get(_normalize(artist))
        if position_a is not None:
            shared.append(artist)
            weighted += (_position_weight(position_a) + _position_weight(index)) / 2

    return _round_half_up(weighted / possible * 100), shared


def audio_profile(tracks: Sequence[Track]) -> AudioProfile:
    """
    Mean audio features over (at most) the first 50 tracks. Each feature is
    averaged over the tracks that report it; an unreported feature keeps the
    neutral AudioProfile default.
    """
    sample = list(tracks)[:MAX_TRACKS]
    values: Dict[str, float] = {}
    for name in MOOD_FEATURES + ("tempo",):
        reported = [
            getattr(track.audio_features, name)
            for track in sample
            if getattr(track.audio_features, name) is not None
        ]
        if reported:
            values[name] = math.fsum(reported) / len(reported)
    return AudioProfile(**values)


def audio_similarity(profile_a: AudioProfile, profile_b: AudioProfile) -> int:
    """Euclidean closeness of two audio profiles, tempo scaled to [0, 1]."""
    squared = [
        (getattr(profile_a, name) - getattr(profile_b, name)) ** 2
        for name in MOOD_FEATURES
    ]
    squared.append(((profile_a.tempo - profile_b.tempo) / TEMPO_RANGE) ** 2)

    distance = math.sqrt(math.fsum(squared))
    max_distance = math.sqrt(len(squared))
    return _round_half_up(max(0.0, (1 - distance / max_distance) * 100))


def bpm_energy_match(profile_a: AudioProfile, profile_b: AudioProfile) -> Tuple[int, str]:
    energy = (1 - abs(profile_a.energy - profile_b.energy)) * 100
    bpm = max(0.0, 1 - abs(profile_a.tempo - profile_b.tempo) / BPM_TOLERANCE) * 100
    dance = (1 - abs(profile_a.danceability - profile_b.danceability)) * 100
    combined = energy * 0.4 + bpm * 0.3 + dance * 0.3

    if combined > 80:
        insight = "Perfect energy match, you'd sync on the dance floor"
    elif combined > 60:
        insight = "Similar vibes, one of you likes it a bit more energetic"
    elif combined > 40:
        insight = "Complementary energy levels"
    else:
        insight = "Different energy styles"

    return _round_half_up(combined), insight


def emotion_vector(profile: AudioProfile) -> EmotionVector:
    pace = min(1.0, profile.tempo / FAST_TEMPO)
    return EmotionVector(
        happy=profile.valence * 0.7 + profile.energy * 0.3,
        energetic=profile.energy * 0.4 + pace * 0.3 + profile.danceability * 0.3,
        chill=(1 - profile.energy) * 0.4 + profile.acousticness * 0.3 + (1 - pace) * 0.3,
        melancholic=(1 - profile.valence) * 0.6 + (1 - profile.energy) * 0.4,
        party=(
            profile.danceability * 0.4
            + profile.energy * 0.4
            + (1 - profile.acousticness) * 0.2
        ),
    )


def dominant_emotion(vector: EmotionVector) -> str:
    """Strongest dimension; a tie goes to the later one in EMOTIONS."""
    return reduce(
        lambda a, b: a if getattr(vector, a) > getattr(vector, b) else b,
        EMOTIONS,
    )


def mood_compatibility(emotion_a: EmotionVector, emotion_b: EmotionVector) -> Tuple[int, str]:
    distance = math.sqrt(
        math.fsum(
            (getattr(emotion_a, name) - getattr(emotion_b, name)) ** 2
            for name in EMOTIONS
        )
    )
    score = _round_half_up(max(0.0, (1 - distance / math.sqrt(len(EMOTIONS))) * 100))

    mood_a = dominant_emotion(emotion_a)
    mood_b = dominant_emotion(emotion_b)
    if mood_a == mood_b:
        insight = f"Both love {mood_a} music"
    else:
        insight = f"You're {mood_a}, they're {mood_b}: a good balance"
    return score, insight


def _recommendations(score: int) -> List[str]:
    if score > 80:
        return ["Plan a concert date together", "Create a collaborative playlist"]
    if score > 60:
        return ["Share your favorite playlists", "Discover new music together"]
    return ["Explore each other's music tastes", "Find common ground in live performances"]


def detailed_compatibility(
    profile_a: UserProfile,
    profile_b: UserProfile,
    tracks_a: Optional[Sequence[Track]] = None,
    tracks_b: Optional[Sequence[Track]] = None,
) -> DetailedCompatibility:
    factors = {name: 0 for name in FACTOR_WEIGHTS}
    insights: List[str] = []

    factors["genre"], shared_genres = genre_match(profile_a.top_genres, profile_b.top_genres)
    if factors["genre"] > 70:
        insights.append(f"{len(shared_genres)} shared genres, music soulmates")
    elif factors["genre"] > 40:
        insights.append("Some genre overlap, complementary tastes")

    factors["artist"], shared_artists = artist_overlap(
        profile_a.top_artists, profile_b.top_artists
    )
    if shared_artists:
        insights.append(f"Both fans of {shared_artists[0]}")

    audio_a, audio_b = AudioProfile(), AudioProfile()
    emotion_a, emotion_b = EmotionVector(), EmotionVector()
    if tracks_a and tracks_b:
        audio_a = audio_profile(tracks_a)
        audio_b = audio_profile(tracks_b)
        emotion_a = emotion_vector(audio_a)
        emotion_b = emotion_vector(audio_b)

        factors["audio"] = audio_similarity(audio_a, audio_b)
        factors["bpm_energy"], energy_insight = bpm_energy_match(audio_a, audio_b)
        factors["mood"], mood_insight = mood_compatibility(emotion_a, emotion_b)
        insights += [energy_insight, mood_insight]

    score = _round_half_up(
        math.fsum(factors[name] * weight for name, weight in FACTOR_WEIGHTS.items())
    )
    score = max(0, min(100, score))

    return DetailedCompatibility(
        score=score,
        factors=factors,
        shared_genres=shared_genres,
        shared_artists=shared_artists,
        audio_profile_a=audio_a,
        audio_profile_b=audio_b,
        emotion_a=emotion_a,
        emotion_b=emotion_b,
        insights=insights[:MAX_INSIGHTS],
        recommendations=_recommendations(score),
    )


def quick_compatibility(profile_a: UserProfile, profile_b: UserProfile) -> int:
    """Genre and artist overlap only, for ranking a deck without track data."""
    genre, _ = genre_match(profile_a.top_genres, profile_b.top_genres)
    artist, _ = artist_overlap(profile_a.top_artists, profile_b.top_artists)
    return _round_half_up(genre * QUICK_GENRE_WEIGHT + artist * QUICK_ARTIST_WEIGHT)
