"""Swipe recording and mutual-like match creation.

MatchEngine is the only writer of swipe records and matches. It runs in many
independent client processes with no shared lock, so the
at-most-one-match-per-pair invariant is enforced by the document store: every
match lives under the canonical id of its unordered pair and the store refuses
a second create() on that id. A caller losing that race receives the id of
the match that won it.

Writes (record_swipe, create_match, unmatch) surface store failures to the
caller and never retry. check_for_match is a read whose failures degrade to
False: a false negative only delays a match, it cannot corrupt state.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from vibematch.config import SWIPE_CANDIDATES_LIMIT
from vibematch.core import (
    ID_SEPARATOR,
    ConflictError,
    Match,
    NotFoundError,
    SwipeCard,
    SwipeDirection,
    SwipeRecord,
    TransientError,
    ValidationError,
    log_info,
    log_step,
    log_success,
    log_warning,
)
from vibematch.data import (
    DocumentStore,
    MatchRepository,
    PlaylistRepository,
    SwipeRepository,
    UserRepository,
)

from .scoring import score_compatibility
from .shared import derive_shared_attributes


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_distinct(user_a_id: str, user_b_id: str, message: str) -> None:
    if not user_a_id or not user_b_id:
        raise ValidationError("User ids must be non-empty.")
    for user_id in (user_a_id, user_b_id):
        # Document ids are user ids joined by the separator.
        if ID_SEPARATOR in user_id:
            raise ValidationError(
                f"User id {user_id!r} must not contain {ID_SEPARATOR!r}."
            )
    if user_a_id == user_b_id:
        raise ValidationError(message)


def _parse_direction(direction: Union[SwipeDirection, str]) -> SwipeDirection:
    try:
        return SwipeDirection(direction)
    except ValueError as e:
        raise ValidationError(f"Unknown swipe direction: {direction!r}.") from e


class MatchEngine:
    """Records swipes, detects mutual likes and creates matches exactly once."""

    def __init__(
        self,
        store: DocumentStore,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.users = UserRepository(store)
        self.playlists = PlaylistRepository(store)
        self.swipes = SwipeRepository(store)
        self.matches = MatchRepository(store)
        self.clock = clock

    # ---------- swipes ----------

    def record_swipe(
        self,
        swiper_id: str,
        swiped_id: str,
        direction: Union[SwipeDirection, str],
    ) -> SwipeRecord:
        """
        Persist swiper -> swiped. A repeat swipe on the same target overwrites
        the previous one (last write wins, including left -> right).
        """
        _require_distinct(swiper_id, swiped_id, "A user cannot swipe on themselves.")
        record = SwipeRecord(
            swiper_id=swiper_id,
            swiped_id=swiped_id,
            direction=_parse_direction(direction),
            created_at=self.clock(),
        )
        log_step(f"Recording swipe {swiper_id} -> {swiped_id} ({record.direction.value})")
        return self.swipes.put(record)

    def check_for_match(self, user_a_id: str, user_b_id: str) -> bool:
        """True iff both users have a "right" swipe on each other."""
        try:
            forward = self.swipes.get(user_a_id, user_b_id)
            backward = self.swipes.get(user_b_id, user_a_id)
        except TransientError as e:
            log_warning(
                f"Store unavailable while checking {user_a_id} <-> {user_b_id}; "
                f"reporting no match: {e}"
            )
            return False

        return (
            forward is not None
            and backward is not None
            and forward.direction == SwipeDirection.RIGHT
            and backward.direction == SwipeDirection.RIGHT
        )

    # ---------- matches ----------

    def create_match(self, user_a_id: str, user_b_id: str, score: int) -> Optional[str]:
        """
        Create the match for a mutual like and return its id.

        - an existing match for the pair (in either order) is returned as is
        - without a mutual like nothing is written and None is returned
        - losing a concurrent creation race returns the winner's id
        Shared attributes are derived from both users' active playlists and
        frozen into the match together with `score`.
        """
        _require_distinct(user_a_id, user_b_id, "A user cannot match with themselves.")
        if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= 100:
            raise ValidationError(f"Compatibility score must be an int in [0, 100]: {score!r}.")

        existing = self.matches.find_for_pair(user_a_id, user_b_id)
        if existing is not None:
            log_info(f"Match {existing.id} already exists.")
            return existing.id

        if not self.check_for_match(user_a_id, user_b_id):
            log_warning(f"No mutual like between {user_a_id} and {user_b_id}; no match created.")
            return None

        profile_a = self.users.get(user_a_id)
        profile_b = self.users.get(user_b_id)
        shared_attributes = derive_shared_attributes(
            self.playlists.resolve_active(profile_a),
            self.playlists.resolve_active(profile_b),
        )

        match = Match(
            id=Match.pair_id(user_a_id, user_b_id),
            user_a_id=user_a_id,
            user_b_id=user_b_id,
            compatibility_score=score,
            shared_attributes=shared_attributes,
            created_at=self.clock(),
        )

        try:
            self.matches.create(match)
        except ConflictError:
            winner = self.matches.find_for_pair(user_a_id, user_b_id)
            if winner is None:
                raise
            log_info(f"Match {winner.id} was created concurrently.")
            return winner.id

        log_success(f"Match {match.id} created (score={score}).")
        return match.id

    def swipe(
        self,
        swiper_id: str,
        swiped_id: str,
        direction: Union[SwipeDirection, str],
    ) -> Optional[str]:
        """
        Swipe-screen flow: record the swipe and, when it completes a mutual
        like, score the pair and create the match. Returns the match id or None.
        """
        record = self.record_swipe(swiper_id, swiped_id, direction)
        if record.direction != SwipeDirection.RIGHT:
            return None
        if not self.check_for_match(swiper_id, swiped_id):
            return None

        score = score_compatibility(
            self.users.get(swiper_id),
            self.users.get(swiped_id),
        )
        return self.create_match(swiper_id, swiped_id, score)

    def unmatch(self, user_id: str, other_id: str) -> None:
        """
        Remove the match between two users.

        The initiator's swipe is flipped to "left" before the match is
        deleted, so the surviving swipe records no longer form a mutual like
        and a later create_match cannot bring the match back.

        If the delete fails after the flip, the match is still listed with a
        left swipe behind it and the error propagates. Calling unmatch again
        completes the removal.
        """
        _require_distinct(user_id, other_id, "A user cannot unmatch themselves.")
        match = self.matches.find_for_pair(user_id, other_id)
        if match is None:
            raise NotFoundError(f"No match between {user_id} and {other_id}.")

        self.record_swipe(user_id, other_id, SwipeDirection.LEFT)
        self.matches.delete(match.id)
        log_success(f"Match {match.id} removed by {user_id}.")

    def touch_last_message(self, match_id: str, at: Optional[datetime] = None) -> Match:
        return self.matches.touch(match_id, at or self.clock())

    def list_matches(self, user_id: str) -> List[Match]:
        """Matches of a user, most recent activity first."""
        matches = self.matches.list_for_user(user_id)
        return sorted(matches, key=lambda m: m.last_activity, reverse=True)

    # ---------- decks ----------

    def received_likes(self, user_id: str) -> List[str]:
        """
        Ids of users who swiped right on `user_id` and are still waiting for
        an answer, newest first.
        """
        answered = {record.swiped_id for record in self.swipes.list_by_swiper(user_id)}
        likes = [
            record
            for record in self.swipes.list_by_swiped(user_id)
            if record.direction == SwipeDirection.RIGHT
            and record.swiper_id not in answered
        ]
        likes.sort(key=lambda r: r.created_at, reverse=True)
        return [record.swiper_id for record in likes]

    def swipe_candidates(
        self,
        user_id: str,
        limit: int = SWIPE_CANDIDATES_LIMIT,
    ) -> List[SwipeCard]:
        """
        Profiles the user has not swiped on yet (self excluded), scored
        against the user. Candidates with a dangling playlist reference are
        left out of the deck.
        """
        me = self.users.get(user_id)
        my_playlist = self.playlists.resolve_active(me)
        swiped = {record.swiped_id for record in self.swipes.list_by_swiper(user_id)}

        cards: List[SwipeCard] = []
        for profile in self.users.list():
            if len(cards) >= limit:
                break
            if profile.id == user_id or profile.id in swiped:
                continue
            try:
                their_playlist = self.playlists.resolve_active(profile)
            except NotFoundError as e:
                log_warning(f"Skipping candidate {profile.id}: {e}")
                continue

            cards.append(
                SwipeCard(
                    profile=profile,
                    compatibility=score_compatibility(me, profile),
                    shared_attributes=derive_shared_attributes(my_playlist, their_playlist),
                )
            )
        return cards
