from fastapi import APIRouter

from vibematch.core import DetailedCompatibility, MoodVector, VibematchError, log_info
from vibematch.matching import (
    aggregate_mood,
    compatibility_breakdown,
    derive_shared_attributes,
    detailed_compatibility,
    extract_tags,
)

from ..errors import raise_http_error
from .schemas import (
    DetailedRequest,
    MoodRequest,
    ScoreRequest,
    ScoreResponse,
    SharedAttributesRequest,
    SharedAttributesResponse,
    TagsRequest,
    TagsResponse,
)

router = APIRouter()


@router.post("/score", response_model=ScoreResponse)
def score(body: ScoreRequest) -> ScoreResponse:
    """
    Compatibility score of two profiles, with the subscore of every factor
    that could be evaluated.
    """
    try:
        breakdown = compatibility_breakdown(body.profile_a, body.profile_b)
    except VibematchError as e:
        raise_http_error(e)

    log_info(
        f"Score {body.profile_a.id} <-> {body.profile_b.id}: {breakdown.score} "
        f"({len(breakdown.factors)} factors)."
    )
    return ScoreResponse(
        user_a_id=body.profile_a.id,
        user_b_id=body.profile_b.id,
        score=breakdown.score,
        factors=breakdown.factors,
    )


@router.post("/shared-attributes", response_model=SharedAttributesResponse)
def shared_attributes(body: SharedAttributesRequest) -> SharedAttributesResponse:
    return SharedAttributesResponse(
        shared_attributes=derive_shared_attributes(body.playlist_a, body.playlist_b)
    )


@router.post("/mood", response_model=MoodVector)
def mood(body: MoodRequest) -> MoodVector:
    return aggregate_mood(body.tracks)


@router.post("/tags", response_model=TagsResponse)
def tags(body: TagsRequest) -> TagsResponse:
    return TagsResponse(tags=extract_tags(body.name, body.description))


@router.post("/detailed", response_model=DetailedCompatibility)
def detailed(body: DetailedRequest) -> DetailedCompatibility:
    """
    Music-taste comparison over top genres, top artists and, when both track
    lists are given, their audio features.
    """
    result = detailed_compatibility(
        body.profile_a,
        body.profile_b,
        body.tracks_a,
        body.tracks_b,
    )
    log_info(f"Detailed score {body.profile_a.id} <-> {body.profile_b.id}: {result.score}.")
    return result
