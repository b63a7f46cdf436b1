"""Tests for UserDirectory and the JSON users loader."""

import json
from pathlib import Path

import pytest

from mention_console.composer.directory import UserDirectory, load_directory
from mention_console.core.models import User


def test_directory_add_and_lookup() -> None:
    directory = UserDirectory()
    directory.add_user({"username": "bob", "first_name": "Bob", "last_name": "Lee"})

    user = directory.get("bob")
    assert user is not None
    assert user.last_name == "Lee"
    assert "bob" in directory
    assert len(directory) == 1
    assert [entry.username for entry in directory] == ["bob"]


def test_directory_version_bumps_on_change_only() -> None:
    directory = UserDirectory([User(username="bob", first_name="Bob")])
    version = directory.version

    directory.add_user(User(username="bob", first_name="Bob"))
    assert directory.version == version

    directory.add_user(User(username="bob", first_name="Robert"))
    assert directory.version == version + 1
    assert directory.get("bob").first_name == "Robert"

    assert directory.remove_user("bob") is True
    assert directory.remove_user("bob") is False
    assert directory.version == version + 2


def test_entries_without_username_are_skipped() -> None:
    directory = UserDirectory()
    directory.add_user({"first_name": "Ghost"})
    assert len(directory) == 0


def test_load_directory(tmp_path: Path) -> None:
    path = tmp_path / "users.json"
    path.write_text(
        json.dumps(
            [
                {"username": "bob", "first_name": "Bob", "last_name": "Lee"},
                {"username": "tanaka", "first_name": "太郎", "last_name": "田中", "family_name_first": True},
            ]
        ),
        encoding="utf-8",
    )

    directory = load_directory(path)
    assert [u.username for u in directory] == ["bob", "tanaka"]
    assert directory.get("tanaka").family_name_first is True


def test_load_directory_rejects_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"username": "bob"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_directory(path)

    path.write_text(json.dumps([{"first_name": "Bob"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_directory(path)
