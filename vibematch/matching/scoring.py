"""Compatibility scoring between two user profiles.

Each signal (age, location, playlist presence, bio keywords) is only evaluated
when both profiles carry the data it needs. Evaluated signals produce a 0-100
subscore; the final score is the rounded mean of those subscores. A signal
missing on either side is excluded from the mean entirely: absence is never
scored as zero. With nothing to compare, the neutral score is returned.

All subscores are symmetric, hence so is the final score.
"""

import math
from typing import Dict, Set

from vibematch.core import (
    CompatibilityBreakdown,
    CompatibilityScore,
    UserProfile,
    ValidationError,
)

NEUTRAL_SCORE = 50

AGE_GAP_PENALTY = 2
SAME_CITY_SCORE = 100
OTHER_CITY_SCORE = 50
PLAYLIST_PRESENCE_SCORE = 70
BIO_KEYWORD_POINTS = 10
BIO_SCORE_CAP = 30
BIO_MIN_TOKEN_LENGTH = 4


def _validate_profile(profile: UserProfile) -> None:
    if profile.age is not None and profile.age <= 0:
        raise ValidationError(
            f"User {profile.id} has an invalid age: {profile.age!r}."
        )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def age_subscore(age_a: int, age_b: int) -> int:
    """100 for the same age, 2 points off per year of gap, floored at 0."""
    return max(0, 100 - AGE_GAP_PENALTY * abs(age_a - age_b))


def location_subscore(city_a: str, city_b: str) -> int:
    """Coarse heuristic: same city (case-insensitive) or partial credit."""
    if city_a.lower() == city_b.lower():
        return SAME_CITY_SCORE
    return OTHER_CITY_SCORE


def _bio_keywords(bio: str) -> Set[str]:
    return {
        token
        for token in bio.lower().split()
        if len(token) >= BIO_MIN_TOKEN_LENGTH
    }


def bio_subscore(bio_a: str, bio_b: str) -> int:
    """10 points per shared keyword (tokens longer than 3 chars), capped at 30."""
    shared = _bio_keywords(bio_a) & _bio_keywords(bio_b)
    return min(BIO_SCORE_CAP, BIO_KEYWORD_POINTS * len(shared))


def compatibility_breakdown(
    profile_a: UserProfile,
    profile_b: UserProfile,
) -> CompatibilityBreakdown:
    """
    Compute the compatibility score along with the subscore of every
    evaluated factor. Raises ValidationError for a non-positive age.
    """
    _validate_profile(profile_a)
    _validate_profile(profile_b)

    factors: Dict[str, int] = {}

    if profile_a.age is not None and profile_b.age is not None:
        factors["age"] = age_subscore(profile_a.age, profile_b.age)

    if profile_a.city and profile_b.city:
        factors["location"] = location_subscore(profile_a.city, profile_b.city)

    # Flat score: presence of a musical context on both sides, not its content.
    if profile_a.active_playlist_id and profile_b.active_playlist_id:
        factors["playlist"] = PLAYLIST_PRESENCE_SCORE

    if profile_a.bio and profile_b.bio:
        factors["bio"] = bio_subscore(profile_a.bio, profile_b.bio)

    if not factors:
        return CompatibilityBreakdown(score=NEUTRAL_SCORE, factors={})

    score = _round_half_up(sum(factors.values()) / len(factors))
    return CompatibilityBreakdown(score=max(0, min(100, score)), factors=factors)


def score_compatibility(profile_a: UserProfile, profile_b: UserProfile) -> int:
    """Integer compatibility score in [0, 100]."""
    return compatibility_breakdown(profile_a, profile_b).score


def compatibility_score(
    profile_a: UserProfile,
    profile_b: UserProfile,
) -> CompatibilityScore:
    """Wrap the score of two profiles together with their identities."""
    return CompatibilityScore(
        user_a_id=profile_a.id,
        user_b_id=profile_b.id,
        score=score_compatibility(profile_a, profile_b),
    )
