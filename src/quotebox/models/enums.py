"""
Enumerations for QuoteBox data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class TagSource(str, Enum):
    """
    Where a requested tag comes from.

    PRESET tags are members of the fixed catalog offered by the frontend,
    CUSTOM tags are anything else the user typed.
    """

    PRESET = "preset"
    CUSTOM = "custom"


class QuoteSource(str, Enum):
    """Upstream generator that produced a quote (provenance label)."""

    OPENROUTER = "openrouter"


class ChatRole(str, Enum):
    """Roles accepted by the chat-completion API."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
