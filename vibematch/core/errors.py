"""Error taxonomy shared by the matching core.

Every error raised by vibematch derives from VibematchError so callers (the
API layer, screens) can turn them into data instead of crashes.
"""


class VibematchError(Exception):
    """Base class for all errors raised by the matching core."""


class ValidationError(VibematchError):
    """Malformed input: negative age, self-swipe, identical user ids..."""


class NotFoundError(VibematchError):
    """A referenced user, playlist or document does not exist."""


class ConflictError(VibematchError):
    """Uniqueness violation when creating a document that already exists."""


class TransientError(VibematchError):
    """A collaborator (store, music-data source) is temporarily unavailable."""
