"""Composition session: the live raw/tagged/display/spans state of one message.

A session belongs to one composing context (channel or thread).  The UI
feeds it events; each event recomputes all four fields and swaps them in as
one ``CompositionState``, so readers never see a display string paired with
spans or raw text from a different edit.
"""

from __future__ import annotations

import logging

from mention_console.core.enums import CompositionEvent, MatchMode, NamingPolicy
from mention_console.core.models import CompositionState, MentionSpan, SuggestionItem
from mention_console.core.types import (
    CursorCallback,
    HighlightCallback,
    SubmissionCallback,
    UserDirectoryProtocol,
)

from .codec import decode_to_display, encode, is_username_char, split_token
from .indexer import index
from .memo import SelectedMentionMemo
from .reconciler import reconcile
from .resolver import resolve

logger = logging.getLogger(__name__)


def compose_state(
    raw: str, directory: UserDirectoryProtocol, policy: NamingPolicy
) -> CompositionState:
    """Derive the full state for *raw*."""
    tagged = encode(raw, directory, policy)
    display = decode_to_display(tagged)
    spans = tuple(index(tagged, display))
    return CompositionState(raw=raw, tagged=tagged, display=display, spans=spans)


def find_inserted_token(text: str, username: str) -> int:
    """Return the start of the first complete ``@username`` token in *text*, or -1."""
    token = f"@{username}"
    start = text.find(token)
    while start != -1:
        end = start + 1
        while end < len(text) and is_username_char(text[end]):
            end += 1
        if split_token(text[start + 1 : end], {username})[0] == username:
            return start
        start = text.find(token, start + 1)
    return -1


class CompositionSession:
    def __init__(
        self,
        context_id: str,
        *,
        match_mode: MatchMode = MatchMode.SUBSTRING,
        on_raw_changed: SubmissionCallback | None = None,
        on_spans_changed: HighlightCallback | None = None,
        on_cursor: CursorCallback | None = None,
    ) -> None:
        self.context_id = context_id
        self.match_mode = match_mode
        self.memo = SelectedMentionMemo()
        self._on_raw_changed = on_raw_changed
        self._on_spans_changed = on_spans_changed
        self._on_cursor = on_cursor
        self._state = CompositionState()
        self._external_value = ""
        self._active = True

    @property
    def state(self) -> CompositionState:
        return self._state

    @property
    def raw(self) -> str:
        return self._state.raw

    @property
    def tagged(self) -> str:
        return self._state.tagged

    @property
    def display(self) -> str:
        return self._state.display

    @property
    def spans(self) -> list[MentionSpan]:
        return list(self._state.spans)

    @property
    def active(self) -> bool:
        return self._active

    def close(self) -> None:
        """End composition; further events are ignored."""
        self._active = False
        self._reset()
        logger.debug("Session for %s closed", self.context_id)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def text_edited(
        self, display: str, directory: UserDirectoryProtocol, policy: NamingPolicy
    ) -> str:
        """Handle an edit of the display text; returns the new RawText."""
        if not self._check_active(CompositionEvent.TEXT_EDITED):
            return self._state.raw
        raw = reconcile(self._state.tagged, display, self.memo, self.match_mode)
        state = compose_state(raw, directory, policy)
        if state.is_empty:
            self.memo.clear()
        self._commit(state, emit=True)
        return raw

    def suggestion_selected(
        self,
        item: SuggestionItem,
        text: str,
        directory: UserDirectoryProtocol,
        policy: NamingPolicy,
    ) -> int | None:
        """Handle an autocomplete selection.

        *text* is the display text after the suggestion box inserted
        ``@username`` into it.  Returns the cursor offset to apply in the new
        display text, or None when the item is not a resolvable user mention.
        """
        if not self._check_active(CompositionEvent.SUGGESTION_SELECTED):
            return None
        if item.is_group or not item.username:
            return None
        display_name = resolve(item.username, directory, policy)
        if display_name is None:
            logger.debug("Suggestion @%s is not in the directory, ignored", item.username)
            return None

        self.memo.record(item.username, display_name)
        raw = reconcile(self._state.tagged, text, self.memo, self.match_mode)
        state = compose_state(raw, directory, policy)
        self._commit(state, emit=True)

        start = find_inserted_token(text, item.username)
        if start == -1:
            cursor = len(state.display)
        else:
            token_end = start + len(item.username) + 1
            cursor = token_end + (len(display_name) - len(item.username)) + 1
            cursor = min(cursor, len(state.display))
        if self._on_cursor is not None:
            self._on_cursor(cursor)
        return cursor

    def context_changed(self, context_id: str) -> bool:
        """Switch to another context, discarding all state. Returns False if unchanged."""
        if context_id == self.context_id:
            return False
        logger.debug("Context %s -> %s, discarding composition", self.context_id, context_id)
        self.context_id = context_id
        self._active = True
        self._reset()
        return True

    def set_external_value(
        self, raw: str, directory: UserDirectoryProtocol, policy: NamingPolicy
    ) -> None:
        """Adopt *raw* as ground truth (e.g. a restored draft)."""
        if not self._check_active(CompositionEvent.EXTERNAL_VALUE_SET):
            return
        self.memo.clear()
        self._external_value = raw
        self._commit(compose_state(raw, directory, policy), emit=False)

    def clear_external_value(self) -> None:
        if not self._check_active(CompositionEvent.EXTERNAL_VALUE_CLEARED):
            return
        self._reset()

    def sync_external_value(
        self, value: str, directory: UserDirectoryProtocol, policy: NamingPolicy
    ) -> CompositionEvent | None:
        """Reconcile with the value the host currently holds.

        Empty -> non-empty adopts the value; non-empty -> empty resets.  Any
        other change (including the echo of a value this session emitted) is
        ignored.  Returns the event that was applied, if any.
        """
        previous = self._external_value
        if value == previous:
            return None
        if value and not previous:
            self.set_external_value(value, directory, policy)
            return CompositionEvent.EXTERNAL_VALUE_SET
        if not value and previous:
            self.clear_external_value()
            return CompositionEvent.EXTERNAL_VALUE_CLEARED
        self._external_value = value
        return None

    # ------------------------------------------------------------------

    def _check_active(self, event: CompositionEvent) -> bool:
        if not self._active:
            logger.warning("Ignoring %s on closed session for %s", event, self.context_id)
        return self._active

    def _reset(self) -> None:
        self.memo.clear()
        self._external_value = ""
        self._commit(CompositionState(), emit=False)

    def _commit(self, state: CompositionState, *, emit: bool) -> None:
        previous = self._state
        self._state = state
        if emit and state.raw != previous.raw:
            self._external_value = state.raw
            if self._on_raw_changed is not None:
                self._on_raw_changed(state.raw)
        if state.spans != previous.spans and self._on_spans_changed is not None:
            self._on_spans_changed(list(state.spans))
