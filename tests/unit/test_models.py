from mention_console.core.models import CompositionState, MentionSpan, SuggestionItem, User


def test_models_construct() -> None:
    user = User(username="bob", first_name="Bob", last_name="Lee")
    span = MentionSpan(start=0, end=8, username="bob")
    item = SuggestionItem(username="bob")

    assert user.nickname == ""
    assert span.end - span.start == 8
    assert item.is_group is False


def test_empty_state() -> None:
    state = CompositionState()
    assert state.is_empty
    assert state.spans == ()
    assert not CompositionState(raw="x", display="x").is_empty
