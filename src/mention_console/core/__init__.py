from .enums import CompositionEvent, MatchMode, NamingPolicy
from .models import (
    CompositionState,
    MentionKey,
    MentionSpan,
    SuggestionItem,
    TaggedMention,
    User,
)
from .types import (
    CursorCallback,
    HighlightCallback,
    SubmissionCallback,
    UserDirectoryProtocol,
)

__all__ = [
    "CompositionEvent",
    "CompositionState",
    "CursorCallback",
    "HighlightCallback",
    "MatchMode",
    "MentionKey",
    "MentionSpan",
    "NamingPolicy",
    "SubmissionCallback",
    "SuggestionItem",
    "TaggedMention",
    "User",
    "UserDirectoryProtocol",
]
