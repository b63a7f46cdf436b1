"""Mock users for testing and development."""

from __future__ import annotations

from mention_console.composer.directory import UserDirectory
from mention_console.core.models import User

# Format: (username, first_name, last_name, nickname, family_name_first)
MOCK_USERS: list[tuple[str, str, str, str, bool]] = [
    ("bob", "Bob", "Lee", "", False),
    ("john", "John", "", "", False),  # Prefix of "John Doe"
    ("jdoe", "John", "Doe", "", False),
    ("alice1", "Alice", "", "", False),  # Shares a display name with alice2
    ("alice2", "Alice", "", "", False),
    ("charlie", "Charles", "Brown", "Chuck", False),
    ("tanaka", "太郎", "田中", "", True),  # Family-name-first locale
    ("dave", "", "", "", False),  # No name fields: displays as username
]


def create_mock_users() -> list[User]:
    return [
        User(
            username=username,
            first_name=first,
            last_name=last,
            nickname=nickname,
            family_name_first=family_first,
        )
        for username, first, last, nickname, family_first in MOCK_USERS
    ]


def create_mock_directory() -> UserDirectory:
    return UserDirectory(create_mock_users())
