from mention_console.composer.directory import UserDirectory
from mention_console.composer.resolver import (
    SnapshotCache,
    display_name_for,
    display_names,
    resolve,
    usernames_by_display_name,
)
from mention_console.core.enums import NamingPolicy
from mention_console.core.models import User
from mention_console.mock import create_mock_directory


def test_resolve_unknown_username_returns_none() -> None:
    directory = create_mock_directory()
    assert resolve("nobody", directory, NamingPolicy.FULL_NAME) is None


def test_resolve_by_policy() -> None:
    directory = create_mock_directory()
    assert resolve("charlie", directory, NamingPolicy.USERNAME) == "charlie"
    assert resolve("charlie", directory, NamingPolicy.FULL_NAME) == "Charles Brown"
    assert resolve("charlie", directory, NamingPolicy.NICKNAME_FULL_NAME) == "Chuck"


def test_nickname_policy_falls_back_to_full_name() -> None:
    directory = create_mock_directory()
    assert resolve("bob", directory, NamingPolicy.NICKNAME_FULL_NAME) == "Bob Lee"


def test_empty_name_fields_fall_back_to_username() -> None:
    directory = create_mock_directory()
    assert resolve("dave", directory, NamingPolicy.FULL_NAME) == "dave"
    assert resolve("dave", directory, NamingPolicy.NICKNAME_FULL_NAME) == "dave"


def test_single_name_part() -> None:
    assert display_name_for(User(username="x", last_name="Smith"), NamingPolicy.FULL_NAME) == "Smith"
    assert display_name_for(User(username="x", first_name="Ann"), NamingPolicy.FULL_NAME) == "Ann"


def test_family_name_first_locale() -> None:
    directory = create_mock_directory()
    assert resolve("tanaka", directory, NamingPolicy.FULL_NAME) == "田中 太郎"


def test_ambiguous_display_names_grouped() -> None:
    grouped = usernames_by_display_name(create_mock_directory(), NamingPolicy.FULL_NAME)
    assert grouped["Alice"] == ["alice1", "alice2"]
    assert grouped["Bob Lee"] == ["bob"]


def test_display_names_memoized_per_snapshot() -> None:
    directory = UserDirectory([User(username="bob", first_name="Bob", last_name="Lee")])
    first = display_names(directory, NamingPolicy.FULL_NAME)
    assert display_names(directory, NamingPolicy.FULL_NAME) is first

    directory.add_user(User(username="ann", first_name="Ann"))
    rebuilt = display_names(directory, NamingPolicy.FULL_NAME)
    assert rebuilt is not first
    assert rebuilt["ann"] == "Ann"


def test_snapshot_cache_rebuilds_on_policy_change() -> None:
    cache = SnapshotCache(lambda directory, policy: (len(directory), policy))
    directory = create_mock_directory()

    cache.get(directory, NamingPolicy.FULL_NAME)
    cache.get(directory, NamingPolicy.FULL_NAME)
    assert cache.builds == 1

    assert cache.get(directory, NamingPolicy.USERNAME) == (len(directory), NamingPolicy.USERNAME)
    assert cache.builds == 2

    cache.get(create_mock_directory(), NamingPolicy.USERNAME)
    assert cache.builds == 3
