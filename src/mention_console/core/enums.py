"""Enums for naming policies, match modes, and composition events."""

from enum import StrEnum


class NamingPolicy(StrEnum):
    """How a user's display name is derived from their profile.

    Values match the stored teammate-name-display preference:
        username            - always show the username
        nickname_full_name  - nickname, falling back to the full name
        full_name           - "First Last" (or "Last First" for
                              family-name-first locales)

    Every policy falls back to the username when the preferred fields are
    empty.
    """

    USERNAME = "username"
    NICKNAME_FULL_NAME = "nickname_full_name"
    FULL_NAME = "full_name"


class MatchMode(StrEnum):
    """How the reconciler finds display names in edited text."""

    SUBSTRING = "substring"  # Match anywhere
    WORD_BOUNDARY = "word_boundary"  # Require whitespace/CJK/punctuation around the name


class CompositionEvent(StrEnum):
    """Events a composing surface issues to its session."""

    TEXT_EDITED = "text_edited"
    SUGGESTION_SELECTED = "suggestion_selected"
    CONTEXT_CHANGED = "context_changed"
    EXTERNAL_VALUE_SET = "external_value_set"
    EXTERNAL_VALUE_CLEARED = "external_value_cleared"
