"""In-memory user directory.

The composer core only reads a directory; the application layer owns it and
updates it as profiles arrive.  Every mutation bumps ``version`` so derived
indexes (display-name maps, mention keys) can be memoized per snapshot.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

from mention_console.core.models import User

logger = logging.getLogger(__name__)


class UserDirectory:
    """Users keyed by username, satisfying ``UserDirectoryProtocol``."""

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._users: dict[str, User] = {}
        self.version = 0
        for user in users:
            self.add_user(user)

    def get(self, username: str) -> User | None:
        return self._users.get(username)

    def add_user(self, data: dict[str, Any] | User) -> None:
        if isinstance(data, User):
            entry = data
        else:
            entry = user_from_dict(data)
        if not entry.username:
            return
        # Update existing or append
        if self._users.get(entry.username) == entry:
            return
        self._users[entry.username] = entry
        self.version += 1

    def remove_user(self, username: str) -> bool:
        if self._users.pop(username, None) is None:
            return False
        self.version += 1
        return True

    def __contains__(self, username: object) -> bool:
        return username in self._users

    def __iter__(self) -> Iterator[User]:
        return iter(list(self._users.values()))

    def __len__(self) -> int:
        return len(self._users)


def user_from_dict(data: dict[str, Any]) -> User:
    return User(
        username=str(data.get("username", "")),
        first_name=str(data.get("first_name", "") or ""),
        last_name=str(data.get("last_name", "") or ""),
        nickname=str(data.get("nickname", "") or ""),
        family_name_first=bool(data.get("family_name_first", False)),
    )


def load_directory(path: str | Path) -> UserDirectory:
    """Load a directory from a JSON file holding a list of user objects.

    Raises ValueError when the file is not a list of objects with a
    ``username`` key.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of users")
    directory = UserDirectory()
    for index, item in enumerate(data):
        if not isinstance(item, dict) or not item.get("username"):
            raise ValueError(f"{path}: entry {index} has no username")
        directory.add_user(item)
    logger.debug("Loaded %d users from %s", len(directory), path)
    return directory
