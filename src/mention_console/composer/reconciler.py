"""Longest-match reconciler.

Rebuilds RawText from an edited DisplayText.  The previous TaggedText is the
only memory of which display strings currently stand for which usernames:
every ``@DisplayName`` that survived the edit verbatim is turned back into
``@username``; everything else, including freshly typed bare ``@username``
tokens, is copied through unchanged.

Display names are matched longest first so that a short name which is a
prefix of a longer one ("John" / "John Doe") can never claim text inside the
longer mention.  Matched ranges are recorded in a ``ConsumedRanges`` so no
later pattern re-matches inside them.
"""

from __future__ import annotations

import logging

from mention_console.core.enums import MatchMode

from .codec import TRAILING_PUNCTUATION, extract_mentions, is_username_char
from .memo import SelectedMentionMemo
from .ranges import ConsumedRanges

logger = logging.getLogger(__name__)

# Hiragana, Katakana, CJK Unified Ideographs
_CJK_RANGES = ((0x3040, 0x309F), (0x30A0, 0x30FF), (0x4E00, 0x9FAF))


def _is_cjk(char: str) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in _CJK_RANGES)


def _is_boundary(char: str) -> bool:
    return not char.isalnum() or _is_cjk(char)


def _extends_token(text: str, end: int) -> bool:
    """True if the text after *end* would merge into a username token in RawText."""
    j = end
    while j < len(text) and is_username_char(text[j]):
        j += 1
    return bool(text[end:j].rstrip(TRAILING_PUNCTUATION))


def _at_boundary(text: str, start: int, end: int, mode: MatchMode) -> bool:
    if mode == MatchMode.WORD_BOUNDARY:
        if start > 0 and not _is_boundary(text[start - 1]):
            return False
        if end < len(text) and not _is_boundary(text[end]):
            return False
    return True


def find_unconsumed(
    text: str,
    pattern: str,
    consumed: ConsumedRanges,
    limit: int,
    mode: MatchMode = MatchMode.SUBSTRING,
) -> list[tuple[int, int]]:
    """Return up to *limit* eligible occurrences of *pattern*, left to right.

    Each returned occurrence is claimed in *consumed* before the search
    continues.  An occurrence that the following text extends into a longer
    username token is claimed too but not returned: it stays literal, and
    no shorter pattern may match inside it.
    """
    found: list[tuple[int, int]] = []
    if not pattern or limit <= 0:
        return found
    index = text.find(pattern)
    while index != -1 and len(found) < limit:
        end = index + len(pattern)
        if consumed.overlaps(index, end):
            index = text.find(pattern, index + 1)
        elif _extends_token(text, end):
            consumed.claim(index, end)
            logger.debug("'%s' at %d runs into a longer token, left as text", pattern, index)
            index = text.find(pattern, end)
        elif _at_boundary(text, index, end, mode):
            consumed.claim(index, end)
            found.append((index, end))
            index = text.find(pattern, end)
        else:
            index = text.find(pattern, index + 1)
    return found


def assign_usernames(
    display_name: str,
    candidates: list[str],
    count: int,
    memo: SelectedMentionMemo | None = None,
) -> list[str]:
    """Pick the usernames for *count* surviving occurrences of *display_name*.

    *candidates* holds one username per mention of *display_name* in the
    previous TaggedText, in document order.  When every mention survived,
    they keep their usernames positionally.  When some were removed and the
    name is shared by several users, it is ambiguous which ones remain: the
    user's explicit selection wins, otherwise the first candidate.
    """
    if count <= 0:
        return []
    distinct = list(dict.fromkeys(candidates))
    if len(distinct) == 1:
        return [distinct[0]] * count
    if count >= len(candidates):
        return candidates[:count]

    selected = memo.username_for(display_name) if memo is not None else None
    winner = selected if selected in distinct else candidates[0]
    rest = list(candidates)
    rest.remove(winner)
    logger.debug(
        "Ambiguous '%s' (%s): %d of %d kept, bound first to @%s",
        display_name,
        ", ".join(distinct),
        count,
        len(candidates),
        winner,
    )
    return ([winner] + rest)[:count]


def reconcile(
    previous_tagged: str,
    display: str,
    memo: SelectedMentionMemo | None = None,
    mode: MatchMode = MatchMode.SUBSTRING,
) -> str:
    """Return the RawText for an edited *display* given the *previous_tagged* text."""
    mentions = extract_mentions(previous_tagged)
    if not mentions:
        return display

    candidates: dict[str, list[str]] = {}
    for mention in mentions:
        candidates.setdefault(mention.display_name, []).append(mention.username)

    consumed = ConsumedRanges()
    bindings: list[tuple[int, int, str]] = []
    # sorted() is stable: equal lengths keep first-appearance order
    for display_name in sorted(candidates, key=len, reverse=True):
        usernames = candidates[display_name]
        found = find_unconsumed(display, f"@{display_name}", consumed, len(usernames), mode)
        if len(found) < len(usernames):
            logger.debug(
                "%d mention(s) of '%s' no longer present, left as text",
                len(usernames) - len(found),
                display_name,
            )
        assigned = assign_usernames(display_name, usernames, len(found), memo)
        for (start, end), username in zip(found, assigned):
            bindings.append((start, end, username))

    bindings.sort()
    parts: list[str] = []
    last = 0
    for start, end, username in bindings:
        parts.append(display[last:start])
        parts.append(f"@{username}")
        last = end
    parts.append(display[last:])
    return "".join(parts)
