from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from vibematch.config import PRESENCE_MIN_INTERVAL_SECONDS, TYPING_TTL_SECONDS
from vibematch.core import PresenceState, log_step
from vibematch.data import DocumentStore, PresenceRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PresenceService:
    """
    Online and typing indicators for users.

    Rate limiting is explicit configuration of the service: "online" writes
    for the same user closer than `min_interval` seconds apart are skipped,
    while going offline is always written. A typing flag carries its own
    expiry (`typing_ttl` seconds) instead of relying on a timer to clear it.
    """

    def __init__(
        self,
        store: DocumentStore,
        min_interval: float = PRESENCE_MIN_INTERVAL_SECONDS,
        typing_ttl: float = TYPING_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.repository = PresenceRepository(store)
        self.min_interval = timedelta(seconds=min_interval)
        self.typing_ttl = timedelta(seconds=typing_ttl)
        self.clock = clock
        self._last_online_write: Dict[str, datetime] = {}

    def update_online_status(self, user_id: str, is_online: bool) -> bool:
        """Write the user's online flag. Returns False when rate-limited."""
        now = self.clock()
        last_write = self._last_online_write.get(user_id)
        if is_online and last_write is not None and now - last_write < self.min_interval:
            return False

        state = self.repository.get(user_id)
        state.is_online = is_online
        state.last_seen = now
        if not is_online:
            state.typing_in = None
            state.typing_until = None

        self.repository.save(state)
        self._last_online_write[user_id] = now
        log_step(f"Presence {user_id}: {'online' if is_online else 'offline'}")
        return True

    def set_typing(self, user_id: str, match_id: str, is_typing: bool) -> PresenceState:
        now = self.clock()
        state = self.repository.get(user_id)
        if is_typing:
            state.typing_in = match_id
            state.typing_until = now + self.typing_ttl
        elif state.typing_in == match_id:
            state.typing_in = None
            state.typing_until = None
        return self.repository.save(state)

    def get_presence(self, user_id: str) -> PresenceState:
        """Stored presence with an expired typing flag already cleared."""
        state = self.repository.get(user_id)
        if state.typing_until is not None and state.typing_until <= self.clock():
            state.typing_in = None
            state.typing_until = None
        return state

    def is_typing(self, user_id: str, match_id: Optional[str] = None) -> bool:
        state = self.get_presence(user_id)
        if state.typing_in is None:
            return False
        return match_id is None or state.typing_in == match_id
