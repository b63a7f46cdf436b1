from mention_console.composer.codec import decode_to_display, encode, make_tag
from mention_console.composer.memo import SelectedMentionMemo
from mention_console.composer.ranges import ConsumedRanges
from mention_console.composer.reconciler import assign_usernames, find_unconsumed, reconcile
from mention_console.core.enums import MatchMode, NamingPolicy
from mention_console.mock import create_mock_directory

FULL = NamingPolicy.FULL_NAME


def test_reconcile_without_previous_mentions_is_identity() -> None:
    assert reconcile("", "@bob hi") == "@bob hi"
    assert reconcile("plain", "plain text") == "plain text"


def test_reconcile_preserves_mention_and_appended_text() -> None:
    previous = make_tag("bob", "Bob Lee") + " hi"
    assert reconcile(previous, "@Bob Lee hi there") == "@bob hi there"


def test_round_trip_of_unmodified_display() -> None:
    directory = create_mock_directory()
    for raw in (
        "@bob hi",
        "@bob and @jdoe, meet @charlie!",
        "ping @tanaka さん and @nobody",
        "@bob.",
        "",
    ):
        tagged = encode(raw, directory, FULL)
        assert reconcile(tagged, decode_to_display(tagged)) == raw


def test_longest_match_wins_over_prefix() -> None:
    previous = make_tag("john", "John") + " and " + make_tag("jdoe", "John Doe")
    # Character typed right after "John Doe"
    assert reconcile(previous, "@John and @John Doe!") == "@john and @jdoe!"


def test_short_name_does_not_match_inside_long_one_when_order_is_reversed() -> None:
    previous = make_tag("jdoe", "John Doe") + " " + make_tag("john", "John")
    assert reconcile(previous, "x @John Doe @John") == "x @jdoe @john"


def test_partial_edit_degrades_to_text() -> None:
    previous = make_tag("bob", "Bob Lee") + " hi"
    raw = reconcile(previous, "@Bob Le hi")
    assert raw == "@Bob Le hi"
    assert "bob" not in raw


def test_letters_appended_to_name_degrade_instead_of_merging_token() -> None:
    previous = make_tag("bob", "Bob Lee")
    assert reconcile(previous, "@Bob Leex") == "@Bob Leex"


def test_extended_long_name_is_not_reclaimed_by_its_prefix() -> None:
    previous = make_tag("jdoe", "John Doe") + " " + make_tag("john", "John")
    assert reconcile(previous, "@John Doex @John") == "@John Doex @john"
    assert reconcile(previous, "@John Doex @John", mode=MatchMode.WORD_BOUNDARY) == "@John Doex @john"


def test_find_unconsumed_claims_extended_occurrence() -> None:
    consumed = ConsumedRanges()
    assert find_unconsumed("@John Doex @John Doe", "@John Doe", consumed, limit=1) == [(11, 20)]
    assert consumed.overlaps(0, 9)
    assert find_unconsumed("@John Doex @John Doe", "@John", consumed, limit=2) == []


def test_trailing_punctuation_keeps_binding() -> None:
    previous = make_tag("bob", "Bob Lee")
    assert reconcile(previous, "@Bob Lee.") == "@bob."


def test_newly_typed_bare_tokens_pass_through() -> None:
    previous = make_tag("bob", "Bob Lee")
    assert reconcile(previous, "@Bob Lee @jdoe") == "@bob @jdoe"


def test_substring_false_positive_in_prose() -> None:
    # Accepted risk: prose that reads like a known mention is bound first
    previous = make_tag("bob", "Bob Lee")
    assert reconcile(previous, "I saw @Bob Lee yesterday, cc @Bob Lee") == "I saw @bob yesterday, cc @Bob Lee"


def test_repeated_mentions_of_same_user() -> None:
    previous = make_tag("bob", "Bob Lee") + " " + make_tag("bob", "Bob Lee")
    assert reconcile(previous, "@Bob Lee @Bob Lee ok") == "@bob @bob ok"
    assert reconcile(previous, "@Bob Lee ok") == "@bob ok"


def test_ambiguous_names_keep_positions_when_all_survive() -> None:
    previous = make_tag("alice1", "Alice") + " " + make_tag("alice2", "Alice")
    assert reconcile(previous, "@Alice @Alice hi") == "@alice1 @alice2 hi"


def test_ambiguous_tie_break_prefers_selected_user() -> None:
    previous = make_tag("alice1", "Alice") + " " + make_tag("alice2", "Alice")
    memo = SelectedMentionMemo()
    memo.record("alice2", "Alice")
    # One of the two mentions was deleted
    assert reconcile(previous, "@Alice hi", memo) == "@alice2 hi"


def test_ambiguous_tie_break_without_selection_takes_first() -> None:
    previous = make_tag("alice1", "Alice") + " " + make_tag("alice2", "Alice")
    assert reconcile(previous, "@Alice hi") == "@alice1 hi"


def test_word_boundary_mode() -> None:
    previous = make_tag("bob", "Bob Lee")
    assert reconcile(previous, "x@Bob Lee", mode=MatchMode.WORD_BOUNDARY) == "x@Bob Lee"
    assert reconcile(previous, "x@Bob Lee", mode=MatchMode.SUBSTRING) == "x@bob"
    assert reconcile(previous, "hi @Bob Lee, ok", mode=MatchMode.WORD_BOUNDARY) == "hi @bob, ok"
    assert reconcile(previous, "こんにちは@Bob Lee", mode=MatchMode.WORD_BOUNDARY) == "こんにちは@bob"


def test_find_unconsumed_skips_claimed_ranges() -> None:
    consumed = ConsumedRanges()
    consumed.claim(0, 9)
    text = "@John Doe @John"
    assert find_unconsumed(text, "@John", consumed, limit=5) == [(10, 15)]


def test_assign_usernames() -> None:
    assert assign_usernames("Bob", ["bob", "bob"], 1) == ["bob"]
    assert assign_usernames("Alice", ["alice1", "alice2"], 2) == ["alice1", "alice2"]
    assert assign_usernames("Alice", ["alice1", "alice2"], 0) == []

    memo = SelectedMentionMemo()
    memo.record("alice2", "Alice")
    assert assign_usernames("Alice", ["alice1", "alice2", "alice1"], 2, memo) == ["alice2", "alice1"]

    memo.record("someone-else", "Alice")
    assert assign_usernames("Alice", ["alice1", "alice2"], 1, memo) == ["alice1"]
