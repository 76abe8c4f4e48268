from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# Canonical order of the seven bounded audio features.
MOOD_FEATURES = (
    "acousticness",
    "danceability",
    "energy",
    "instrumentalness",
    "liveness",
    "speechiness",
    "valence",
)

# Separator used to build document ids out of user ids.
ID_SEPARATOR = ":"


class AudioFeatures(BaseModel):
    """
    Audio features of a single track, as returned by the music-data source.

    The seven bounded attributes are conventionally in [0, 1]. Any of them may
    be missing (None); aggregation treats a missing value as 0.
    tempo is in bpm, key is 0-11 or None when unknown.
    """

    acousticness: Optional[float] = None
    danceability: Optional[float] = None
    energy: Optional[float] = None
    instrumentalness: Optional[float] = None
    liveness: Optional[float] = None
    speechiness: Optional[float] = None
    valence: Optional[float] = None
    tempo: Optional[float] = None
    key: Optional[int] = None


class MoodVector(BaseModel):
    """Per-playlist fingerprint: mean of the tracks' seven audio features."""

    acousticness: float = 0.0
    danceability: float = 0.0
    energy: float = 0.0
    instrumentalness: float = 0.0
    liveness: float = 0.0
    speechiness: float = 0.0
    valence: float = 0.0

    def as_list(self) -> List[float]:
        return [getattr(self, name) for name in MOOD_FEATURES]


class Track(BaseModel):
    id: str
    name: str = ""
    artist: str = ""
    album: str = ""
    artwork_url: Optional[str] = None
    preview_url: Optional[str] = None
    audio_features: AudioFeatures = Field(default_factory=AudioFeatures)


class Playlist(BaseModel):
    """
    A user's playlist.

    mood_vector and tags are derived data: they are (re)computed by
    vibematch.matching.enrich_playlist when the playlist is loaded and must not
    be edited by hand.
    """

    id: str
    name: str
    description: Optional[str] = None
    owner_id: Optional[str] = None
    tracks: List[Track] = Field(default_factory=list)
    mood_vector: MoodVector = Field(default_factory=MoodVector)
    tags: List[str] = Field(default_factory=list)


class UserProfile(BaseModel):
    id: str
    display_name: str = ""
    age: Optional[int] = None
    city: Optional[str] = None
    bio: Optional[str] = None
    active_playlist_id: Optional[str] = None
    top_genres: List[str] = Field(default_factory=list)
    top_artists: List[str] = Field(default_factory=list)


class SwipeDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class SwipeRecord(BaseModel):
    swiper_id: str
    swiped_id: str
    direction: SwipeDirection
    created_at: datetime

    @staticmethod
    def record_id(swiper_id: str, swiped_id: str) -> str:
        """Document id of the (ordered) pair swiper -> swiped."""
        return f"{swiper_id}{ID_SEPARATOR}{swiped_id}"


class CompatibilityScore(BaseModel):
    user_a_id: str
    user_b_id: str
    score: int = Field(ge=0, le=100)


@dataclass
class CompatibilityBreakdown:
    """
    Per-factor view of a compatibility computation.

    - factors : subscore per evaluated factor ("age", "location", ...)
    - score   : the final 0-100 score (50 when no factor was evaluable)
    """

    score: int
    factors: Dict[str, int] = field(default_factory=dict)


# ---------- Detailed music compatibility ----------


class AudioProfile(BaseModel):
    """Mean audio features of a listener's tracks; neutral when unknown."""

    acousticness: float = 0.5
    danceability: float = 0.5
    energy: float = 0.5
    instrumentalness: float = 0.5
    liveness: float = 0.5
    speechiness: float = 0.5
    valence: float = 0.5
    tempo: float = 120.0


class EmotionVector(BaseModel):
    """Emotional reading of an AudioProfile, each dimension in [0, 1]."""

    happy: float = 0.5
    energetic: float = 0.5
    chill: float = 0.5
    melancholic: float = 0.5
    party: float = 0.5


class DetailedCompatibility(BaseModel):
    """
    Music-taste comparison of two listeners.

    factors holds the 0-100 subscore of "genre", "artist", "audio",
    "bpm_energy" and "mood"; score is their weighted sum.
    """

    score: int = Field(ge=0, le=100)
    factors: Dict[str, int]
    shared_genres: List[str] = Field(default_factory=list)
    shared_artists: List[str] = Field(default_factory=list)
    audio_profile_a: AudioProfile = Field(default_factory=AudioProfile)
    audio_profile_b: AudioProfile = Field(default_factory=AudioProfile)
    emotion_a: EmotionVector = Field(default_factory=EmotionVector)
    emotion_b: EmotionVector = Field(default_factory=EmotionVector)
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class Match(BaseModel):
    id: str
    user_a_id: str
    user_b_id: str
    compatibility_score: int = Field(ge=0, le=100)
    shared_attributes: List[str] = Field(default_factory=list)
    created_at: datetime
    last_message_at: Optional[datetime] = None

    @staticmethod
    def pair_id(user_a_id: str, user_b_id: str) -> str:
        """Canonical id of the unordered pair: (A, B) and (B, A) collide."""
        first, second = sorted((user_a_id, user_b_id))
        return f"{first}{ID_SEPARATOR}{second}"

    def involves(self, user_id: str) -> bool:
        return user_id in (self.user_a_id, self.user_b_id)

    def other_user(self, user_id: str) -> str:
        return self.user_b_id if user_id == self.user_a_id else self.user_a_id

    @property
    def last_activity(self) -> datetime:
        return self.last_message_at or self.created_at


# ---------- Message attachments ----------


class SongAttachment(BaseModel):
    kind: Literal["song"] = "song"
    track_id: str
    name: str
    artist: str
    artwork_url: Optional[str] = None
    preview_url: Optional[str] = None


class PlaylistAttachment(BaseModel):
    kind: Literal["playlist"] = "playlist"
    playlist_id: str
    name: str
    track_count: int = 0
    cover_url: Optional[str] = None


class ImageAttachment(BaseModel):
    kind: Literal["image"] = "image"
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


Attachment = Annotated[
    Union[SongAttachment, PlaylistAttachment, ImageAttachment],
    Field(discriminator="kind"),
]


class Message(BaseModel):
    id: str
    match_id: str
    sender_id: str
    receiver_id: str
    content: str = ""
    attachment: Optional[Attachment] = None
    read: bool = False
    created_at: datetime


class PresenceState(BaseModel):
    user_id: str
    is_online: bool = False
    last_seen: Optional[datetime] = None
    typing_in: Optional[str] = None
    typing_until: Optional[datetime] = None


class SwipeCard(BaseModel):
    """A profile in a user's swipe deck, with how well it fits them."""

    profile: UserProfile
    compatibility: int = Field(ge=0, le=100)
    shared_attributes: List[str] = Field(default_factory=list)
