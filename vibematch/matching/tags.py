from typing import List, Optional

# Controlled vocabulary, in canonical order.
TAG_VOCABULARY = (
    "house",
    "techno",
    "indie",
    "rock",
    "pop",
    "hip hop",
    "r&b",
    "jazz",
    "folk",
    "electronic",
    "ambient",
    "lofi",
    "chill",
    "party",
    "workout",
    "study",
)


def extract_tags(name: Optional[str], description: Optional[str] = None) -> List[str]:
    """
    Return the vocabulary words found in a playlist's name and description.

    Matching is a case-insensitive substring test, not a token test, so
    "Housework" yields "house". Results follow TAG_VOCABULARY order.
    """
    text = f"{name or ''} {description or ''}".lower()
    return [tag for tag in TAG_VOCABULARY if tag in text]
