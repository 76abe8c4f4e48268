from datetime import datetime
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from vibematch.config import (
    MATCHES_COLLECTION,
    MESSAGES_COLLECTION,
    PLAYLISTS_COLLECTION,
    PRESENCE_COLLECTION,
    SWIPES_COLLECTION,
    USERS_COLLECTION,
)
from vibematch.core import (
    ID_SEPARATOR,
    ConflictError,
    Match,
    Message,
    NotFoundError,
    Playlist,
    PresenceState,
    SwipeRecord,
    UserProfile,
    ValidationError,
    log_warning,
)

from .store import Document, DocumentStore

ModelT = TypeVar("ModelT", bound=BaseModel)


def _to_document(model: BaseModel) -> Document:
    return model.model_dump(mode="json")


def _from_document(model_cls: Type[ModelT], document: Document) -> Optional[ModelT]:
    """Rebuild a model from a stored document, or None if it is malformed."""
    try:
        return model_cls.model_validate(document)
    except PydanticValidationError:
        log_warning(
            f"Skipping malformed {model_cls.__name__} document {document.get('id')!r}."
        )
        return None


def _from_documents(model_cls: Type[ModelT], documents: List[Document]) -> List[ModelT]:
    models: List[ModelT] = []
    for document in documents:
        model = _from_document(model_cls, document)
        if model is not None:
            models.append(model)
    return models


class UserRepository:
    """Repository for user profiles."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get(self, user_id: str) -> UserProfile:
        """Load a profile. Raises NotFoundError for unknown or unreadable users."""
        profile = _from_document(
            UserProfile, self.store.get(USERS_COLLECTION, user_id)
        )
        if profile is None:
            raise NotFoundError(f"User {user_id} is unreadable.")
        return profile

    def save(self, profile: UserProfile) -> UserProfile:
        if not profile.id or ID_SEPARATOR in profile.id:
            raise ValidationError(
                f"User id {profile.id!r} must be non-empty and free of {ID_SEPARATOR!r}."
            )
        try:
            self.store.create(USERS_COLLECTION, profile.id, _to_document(profile))
        except ConflictError:
            self.store.update(USERS_COLLECTION, profile.id, _to_document(profile))
        return profile

    def list(self) -> List[UserProfile]:
        return _from_documents(UserProfile, self.store.query(USERS_COLLECTION))


class PlaylistRepository:
    """Repository for playlists (stored with their derived mood vector and tags)."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get(self, playlist_id: str) -> Playlist:
        playlist = _from_document(
            Playlist, self.store.get(PLAYLISTS_COLLECTION, playlist_id)
        )
        if playlist is None:
            raise NotFoundError(f"Playlist {playlist_id} is unreadable.")
        return playlist

    def save(self, playlist: Playlist) -> Playlist:
        try:
            self.store.create(PLAYLISTS_COLLECTION, playlist.id, _to_document(playlist))
        except ConflictError:
            self.store.update(PLAYLISTS_COLLECTION, playlist.id, _to_document(playlist))
        return playlist

    def resolve_active(self, profile: UserProfile) -> Optional[Playlist]:
        """
        Return the profile's active playlist.

        A profile without an active playlist is a normal "signal absent" case
        and yields None. A profile pointing at a playlist id that no longer
        resolves is a dangling reference and raises NotFoundError.
        """
        if not profile.active_playlist_id:
            return None
        try:
            return self.get(profile.active_playlist_id)
        except NotFoundError as e:
            raise NotFoundError(
                f"User {profile.id} references missing playlist "
                f"{profile.active_playlist_id}."
            ) from e


class SwipeRepository:
    """Repository for swipe records, one document per ordered (swiper, swiped) pair."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get(self, swiper_id: str, swiped_id: str) -> Optional[SwipeRecord]:
        document = self.store.find(
            SWIPES_COLLECTION, SwipeRecord.record_id(swiper_id, swiped_id)
        )
        if document is None:
            return None
        record = _from_document(SwipeRecord, document)
        if record is None or (record.swiper_id, record.swiped_id) != (swiper_id, swiped_id):
            return None
        return record

    def put(self, record: SwipeRecord) -> SwipeRecord:
        """Insert the record, overwriting an earlier swipe on the same pair."""
        record_id = SwipeRecord.record_id(record.swiper_id, record.swiped_id)
        try:
            self.store.create(SWIPES_COLLECTION, record_id, _to_document(record))
        except ConflictError:
            self.store.update(SWIPES_COLLECTION, record_id, _to_document(record))
        return record

    def list_by_swiper(self, swiper_id: str) -> List[SwipeRecord]:
        return _from_documents(
            SwipeRecord,
            self.store.query(SWIPES_COLLECTION, {"swiper_id": swiper_id}),
        )

    def list_by_swiped(self, swiped_id: str) -> List[SwipeRecord]:
        return _from_documents(
            SwipeRecord,
            self.store.query(SWIPES_COLLECTION, {"swiped_id": swiped_id}),
        )


class MatchRepository:
    """Repository for matches, keyed by the canonical id of the unordered pair."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get(self, match_id: str) -> Match:
        match = _from_document(Match, self.store.get(MATCHES_COLLECTION, match_id))
        if match is None:
            raise NotFoundError(f"Match {match_id} is unreadable.")
        return match

    def find_for_pair(self, user_a_id: str, user_b_id: str) -> Optional[Match]:
        """Return the match between two users, whichever order they were stored in."""
        document = self.store.find(
            MATCHES_COLLECTION, Match.pair_id(user_a_id, user_b_id)
        )
        if document is not None:
            match = _from_document(Match, document)
            if match is not None and {match.user_a_id, match.user_b_id} == {user_a_id, user_b_id}:
                return match

        for filters in (
            {"user_a_id": user_a_id, "user_b_id": user_b_id},
            {"user_a_id": user_b_id, "user_b_id": user_a_id},
        ):
            found = _from_documents(Match, self.store.query(MATCHES_COLLECTION, filters))
            if found:
                return found[0]
        return None

    def create(self, match: Match) -> Match:
        """Insert a new match. Raises ConflictError if the pair already matched."""
        self.store.create(MATCHES_COLLECTION, match.id, _to_document(match))
        return match

    def touch(self, match_id: str, at: datetime) -> Match:
        document = self.store.update(
            MATCHES_COLLECTION, match_id, {"last_message_at": at.isoformat()}
        )
        match = _from_document(Match, document)
        if match is None:
            raise NotFoundError(f"Match {match_id} is unreadable.")
        return match

    def delete(self, match_id: str) -> None:
        self.store.delete(MATCHES_COLLECTION, match_id)

    def list_for_user(self, user_id: str) -> List[Match]:
        documents = self.store.query(MATCHES_COLLECTION, {"user_a_id": user_id})
        documents += self.store.query(MATCHES_COLLECTION, {"user_b_id": user_id})
        return _from_documents(Match, documents)


class MessageRepository:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def create(self, message: Message) -> Message:
        self.store.create(MESSAGES_COLLECTION, message.id, _to_document(message))
        return message

    def list_for_match(self, match_id: str) -> List[Message]:
        return _from_documents(
            Message,
            self.store.query(MESSAGES_COLLECTION, {"match_id": match_id}),
        )


class PresenceRepository:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get(self, user_id: str) -> PresenceState:
        """Current presence document, or an offline state if none was written yet."""
        document = self.store.find(PRESENCE_COLLECTION, user_id)
        if document is None:
            return PresenceState(user_id=user_id)
        return _from_document(PresenceState, document) or PresenceState(user_id=user_id)

    def save(self, state: PresenceState) -> PresenceState:
        try:
            self.store.create(PRESENCE_COLLECTION, state.user_id, _to_document(state))
        except ConflictError:
            self.store.update(PRESENCE_COLLECTION, state.user_id, _to_document(state))
        return state
