from typing import List, Optional

from pydantic import BaseModel

from vibematch.core import SwipeDirection


class SwipeRequest(BaseModel):
    swiper_id: str
    swiped_id: str
    direction: SwipeDirection


class SwipeResponse(BaseModel):
    status: str
    matched: bool
    match_id: Optional[str] = None


class LikesResponse(BaseModel):
    user_ids: List[str]


class UnmatchResponse(BaseModel):
    status: str
