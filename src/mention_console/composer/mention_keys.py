"""Mention keys for highlighting full-name mentions in rendered messages.

When display names differ from usernames, a message mentioning the current
user may read ``@Bob Lee`` rather than ``@bob``.  The keys built here add an
``@DisplayName`` key for every such user on top of the caller's own keys.
"""

from __future__ import annotations

from mention_console.core.enums import NamingPolicy
from mention_console.core.models import MentionKey
from mention_console.core.types import UserDirectoryProtocol

from .resolver import SnapshotCache, display_names


def _build_fullname_keys(
    directory: UserDirectoryProtocol, policy: NamingPolicy
) -> list[MentionKey]:
    return [
        MentionKey(key=f"@{name}", case_sensitive=False)
        for username, name in display_names(directory, policy).items()
        if name != username
    ]


_fullname_keys = SnapshotCache(_build_fullname_keys)


def build_mention_keys(
    base_keys: list[MentionKey],
    directory: UserDirectoryProtocol,
    policy: NamingPolicy,
) -> list[MentionKey]:
    return list(base_keys) + _fullname_keys.get(directory, policy)
