from typing import Dict, List, Optional

from pydantic import BaseModel

from vibematch.core import Playlist, Track, UserProfile


class ScoreRequest(BaseModel):
    profile_a: UserProfile
    profile_b: UserProfile


class ScoreResponse(BaseModel):
    user_a_id: str
    user_b_id: str
    score: int
    factors: Dict[str, int]


class SharedAttributesRequest(BaseModel):
    playlist_a: Optional[Playlist] = None
    playlist_b: Optional[Playlist] = None


class SharedAttributesResponse(BaseModel):
    shared_attributes: List[str]


class MoodRequest(BaseModel):
    tracks: List[Track]


class TagsRequest(BaseModel):
    name: str = ""
    description: Optional[str] = None


class TagsResponse(BaseModel):
    tags: List[str]


class DetailedRequest(BaseModel):
    profile_a: UserProfile
    profile_b: UserProfile
    tracks_a: List[Track] = []
    tracks_b: List[Track] = []
