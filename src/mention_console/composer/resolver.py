"""Display-name resolution for usernames under a naming policy."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from mention_console.core.enums import NamingPolicy
from mention_console.core.models import User
from mention_console.core.types import UserDirectoryProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


def full_name(user: User) -> str:
    first = user.first_name.strip()
    last = user.last_name.strip()
    if first and last:
        return f"{last} {first}" if user.family_name_first else f"{first} {last}"
    return first or last


def display_name_for(user: User, policy: NamingPolicy) -> str:
    """Return the display string for *user*, falling back to the username."""
    if policy == NamingPolicy.NICKNAME_FULL_NAME:
        name = user.nickname.strip() or full_name(user)
    elif policy == NamingPolicy.FULL_NAME:
        name = full_name(user)
    else:
        name = user.username
    return name or user.username


def resolve(username: str, directory: UserDirectoryProtocol, policy: NamingPolicy) -> str | None:
    """Return the display name for *username*, or None if it is not in *directory*.

    The result may equal the username (username policy, or no name fields
    set); callers treat that as "nothing to annotate".
    """
    user = directory.get(username)
    if user is None:
        return None
    return display_name_for(user, policy)


class SnapshotCache(Generic[T]):
    """Single-slot memo keyed by directory identity, directory version and policy.

    Keystrokes arrive with the same directory snapshot almost every time, so
    one slot is enough to avoid rebuilding per-directory indexes on each edit.
    """

    def __init__(self, build: Callable[[UserDirectoryProtocol, NamingPolicy], T]) -> None:
        self._build = build
        self._directory: UserDirectoryProtocol | None = None
        self._version: int | None = None
        self._policy: NamingPolicy | None = None
        self._value: T | None = None
        self.builds = 0

    def get(self, directory: UserDirectoryProtocol, policy: NamingPolicy) -> T:
        if (
            self._value is None
            or self._directory is not directory
            or self._version != directory.version
            or self._policy != policy
        ):
            self._value = self._build(directory, policy)
            self._directory = directory
            self._version = directory.version
            self._policy = policy
            self.builds += 1
        return self._value

    def clear(self) -> None:
        self._directory = None
        self._version = None
        self._policy = None
        self._value = None


def _build_display_names(directory: UserDirectoryProtocol, policy: NamingPolicy) -> dict[str, str]:
    names = {user.username: display_name_for(user, policy) for user in directory}
    logger.debug("Built display-name index for %d users (policy=%s)", len(names), policy)
    return names


_display_names = SnapshotCache(_build_display_names)


def display_names(directory: UserDirectoryProtocol, policy: NamingPolicy) -> dict[str, str]:
    """Return ``{username: display_name}`` for every user, memoized per snapshot."""
    return _display_names.get(directory, policy)


def usernames_by_display_name(
    directory: UserDirectoryProtocol, policy: NamingPolicy
) -> dict[str, list[str]]:
    """Group usernames by display name; lists with more than one entry are ambiguous."""
    grouped: dict[str, list[str]] = {}
    for username, name in display_names(directory, policy).items():
        grouped.setdefault(name, []).append(username)
    return grouped
