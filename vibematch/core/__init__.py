"""Public façade for the vibematch.core package.

This module exposes the domain models, the error taxonomy, logging helpers and
filesystem utilities that every other package builds on. Callers should import
these cross-cutting concerns from this façade instead of the internal
submodules.
"""

from .errors import (
    ConflictError,
    NotFoundError,
    TransientError,
    ValidationError,
    VibematchError,
)
from .fs_utils import (
    ensure_parent_dir,
    file_lock,
    lock_path_for,
    read_json,
    write_json,
)
from .logging_utils import (
    configure_logging,
    log_error,
    log_info,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    ID_SEPARATOR,
    MOOD_FEATURES,
    Attachment,
    AudioFeatures,
    AudioProfile,
    CompatibilityBreakdown,
    CompatibilityScore,
    DetailedCompatibility,
    EmotionVector,
    ImageAttachment,
    Match,
    Message,
    MoodVector,
    Playlist,
    PlaylistAttachment,
    PresenceState,
    SongAttachment,
    SwipeCard,
    SwipeDirection,
    SwipeRecord,
    Track,
    UserProfile,
)

__all__ = [
    "VibematchError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "TransientError",
    "ensure_parent_dir",
    "file_lock",
    "lock_path_for",
    "read_json",
    "write_json",
    "configure_logging",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "ID_SEPARATOR",
    "MOOD_FEATURES",
    "AudioFeatures",
    "MoodVector",
    "Track",
    "Playlist",
    "UserProfile",
    "SwipeCard",
    "SwipeDirection",
    "SwipeRecord",
    "CompatibilityScore",
    "CompatibilityBreakdown",
    "AudioProfile",
    "EmotionVector",
    "DetailedCompatibility",
    "Match",
    "Attachment",
    "SongAttachment",
    "PlaylistAttachment",
    "ImageAttachment",
    "Message",
    "PresenceState",
]
