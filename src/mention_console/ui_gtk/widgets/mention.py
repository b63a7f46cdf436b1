"""Pango markup for @mentions.

Two renderings share this module: the highlight overlay drawn over the
composer's display text, and the body of a sent message where each known
``@username`` becomes a clickable ``<a href="mention:username">`` link
showing the user's display name.
"""

from __future__ import annotations

from typing import Sequence

from gi.repository import GLib

from mention_console.composer.codec import USERNAME_PATTERN, split_token
from mention_console.composer.resolver import display_names
from mention_console.composer.settings import DEFAULT_HIGHLIGHT_COLOR
from mention_console.core.enums import NamingPolicy
from mention_console.core.models import MentionSpan
from mention_console.core.types import UserDirectoryProtocol


def _escape(text: str) -> str:
    """Markup-escape *text*, passing ``-1`` so GLib computes byte length itself.

    ``GLib.markup_escape_text(s)`` can auto-fill the length parameter with
    ``len(s)`` (code-point count), which truncates multi-byte characters
    like emoji.  Passing ``-1`` avoids this.
    """
    return GLib.markup_escape_text(text, -1)


def render_highlight_markup(
    display: str,
    spans: Sequence[MentionSpan],
    color: str = DEFAULT_HIGHLIGHT_COLOR,
) -> str:
    """Return Pango markup for *display* with every span in *color*.

    Spans must be sorted and non-overlapping, as produced by the indexer;
    a span that starts before the previous one ended is skipped.
    """
    result: list[str] = []
    last = 0
    for span in spans:
        if span.start < last or span.end > len(display):
            continue
        if span.start > last:
            result.append(_escape(display[last : span.start]))
        mention = _escape(display[span.start : span.end])
        result.append(f'<span foreground="{color}">{mention}</span>')
        last = span.end
    if last < len(display):
        result.append(_escape(display[last:]))
    return "".join(result)


def render_message_markup(raw: str, directory: UserDirectoryProtocol, policy: NamingPolicy) -> str:
    """Return Pango markup with known ``@username`` mentions wrapped as links.

    The link text is the user's display name under *policy*.  Unknown
    usernames pass through as plain escaped text.
    """
    if "@" not in raw:
        return _escape(raw)

    names = display_names(directory, policy)
    result: list[str] = []
    last = 0
    for match in USERNAME_PATTERN.finditer(raw):
        username, tail = split_token(match.group(1), names)
        if username is None:
            continue
        result.append(_escape(raw[last : match.start()]))
        result.append(
            f'<a href="mention:{_escape(username)}">@{_escape(names[username])}</a>{_escape(tail)}'
        )
        last = match.end()
    result.append(_escape(raw[last:]))
    return "".join(result)


def mention_target(uri: str) -> str | None:
    """Return the username of a ``mention:`` link URI, or None for other links."""
    if not uri.startswith("mention:"):
        return None
    return uri[len("mention:") :] or None
