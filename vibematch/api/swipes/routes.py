from typing import List

from fastapi import APIRouter, Depends, HTTPException

from vibematch.config import SWIPE_CANDIDATES_LIMIT
from vibematch.core import Match, SwipeCard, VibematchError
from vibematch.matching import MatchEngine

from ..dependencies import get_engine
from ..errors import raise_http_error
from .schemas import LikesResponse, SwipeRequest, SwipeResponse, UnmatchResponse

router = APIRouter()


@router.post("/swipes", response_model=SwipeResponse)
def post_swipe(
    body: SwipeRequest,
    engine: MatchEngine = Depends(get_engine),
) -> SwipeResponse:
    """
    Record a swipe. When it completes a mutual like the match is created (or
    the existing one returned) and reported in the response.
    """
    try:
        match_id = engine.swipe(body.swiper_id, body.swiped_id, body.direction)
    except VibematchError as e:
        raise_http_error(e)

    return SwipeResponse(
        status="done",
        matched=match_id is not None,
        match_id=match_id,
    )


@router.get("/swipes/{user_id}/likes", response_model=LikesResponse)
def get_received_likes(
    user_id: str,
    engine: MatchEngine = Depends(get_engine),
) -> LikesResponse:
    try:
        return LikesResponse(user_ids=engine.received_likes(user_id))
    except VibematchError as e:
        raise_http_error(e)


@router.get("/swipes/{user_id}/candidates", response_model=List[SwipeCard])
def get_candidates(
    user_id: str,
    limit: int = SWIPE_CANDIDATES_LIMIT,
    engine: MatchEngine = Depends(get_engine),
) -> List[SwipeCard]:
    if limit < 0:
        raise HTTPException(status_code=400, detail="limit must be non-negative.")
    try:
        return engine.swipe_candidates(user_id, limit=limit)
    except VibematchError as e:
        raise_http_error(e)


@router.get("/matches/{user_id}", response_model=List[Match])
def get_matches(
    user_id: str,
    engine: MatchEngine = Depends(get_engine),
) -> List[Match]:
    try:
        return engine.list_matches(user_id)
    except VibematchError as e:
        raise_http_error(e)


@router.delete("/matches/{user_id}/{other_id}", response_model=UnmatchResponse)
def delete_match(
    user_id: str,
    other_id: str,
    engine: MatchEngine = Depends(get_engine),
) -> UnmatchResponse:
    try:
        engine.unmatch(user_id, other_id)
    except VibematchError as e:
        raise_http_error(e)
    return UnmatchResponse(status="unmatched")
