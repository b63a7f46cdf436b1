"""Type definitions for mention_console.

Callback aliases for the collaborators a composition session talks to, and
Protocol stubs for the directory snapshot so that any mapping-like user
store can be passed to the core.
"""

from __future__ import annotations

from typing import Callable, Iterator, Protocol

from .models import MentionSpan, User


class UserDirectoryProtocol(Protocol):
    """Read-only view over users keyed by username.

    ``version`` must change whenever the set of users or any user's naming
    fields change; it is used as part of the memoization key for derived
    display-name indexes.
    """

    version: int

    def get(self, username: str) -> User | None: ...

    def __contains__(self, username: object) -> bool: ...

    def __iter__(self) -> Iterator[User]: ...

    def __len__(self) -> int: ...


# Receives the current RawText whenever it changes
SubmissionCallback = Callable[[str], None]

# Receives the span list after every state change
HighlightCallback = Callable[[list[MentionSpan]], None]

# Receives the cursor offset to apply after a suggestion is inserted
CursorCallback = Callable[[int], None]
