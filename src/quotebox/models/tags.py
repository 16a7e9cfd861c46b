"""
Tag catalog and tag normalization.

The catalog is a fixed set of emotion/mood words. It is only used to classify
incoming tags as preset or custom; any non-empty tag up to MAX_TAG_LENGTH
characters is accepted for generation.
"""

from quotebox.models.enums import TagSource

MAX_TAG_LENGTH = 50

PRESET_TAGS: tuple[str, ...] = (
    "joy", "sadness", "anger", "fear", "surprise", "love", "gratitude", "resilience",
    "optimism", "melancholy", "confidence", "anxiety", "curiosity", "hope", "calm",
    "nostalgia", "wonder", "determination", "humor", "serenity", "loneliness", "pride",
    "forgiveness", "humility", "ambition", "compassion", "playful", "boredom", "zeal",
    "contentment",
)

_PRESET_TAG_SET = frozenset(PRESET_TAGS)


class InvalidTagError(ValueError):
    """Raised when a requested tag is empty or too long after trimming."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def is_preset_tag(tag: str) -> bool:
    """Exact, case-sensitive catalog membership."""
    return tag in _PRESET_TAG_SET


def get_tag_source(tag: str) -> TagSource:
    """Classify a tag as preset (in the catalog) or custom (anything else)."""
    if is_preset_tag(tag):
        return TagSource.PRESET
    return TagSource.CUSTOM


def normalize_tag(raw: str) -> str:
    """
    Trim a requested tag and enforce its length bounds.

    Args:
        raw: Tag as sent by the client

    Returns:
        Trimmed tag, 1 to MAX_TAG_LENGTH characters long

    Raises:
        InvalidTagError: Tag is empty after trimming or longer than MAX_TAG_LENGTH
    """
    tag = raw.strip()
    if not tag:
        raise InvalidTagError("Tag cannot be empty")
    if len(tag) > MAX_TAG_LENGTH:
        raise InvalidTagError(f"Tag must be {MAX_TAG_LENGTH} characters or less")
    return tag
