"""Mention tag codec: RawText <-> TaggedText -> DisplayText.

TaggedText is RawText with every resolved mention followed by an inline
annotation carrying its display form::

    @bob<U+E000>@Bob Lee<U+E001> hi

The annotation markers are Unicode private-use code points, so they never
collide with anything a user types in practice.  TaggedText is internal to
the composer: it is never shown and never submitted.
"""

from __future__ import annotations

import logging
import re

from mention_console.core.enums import NamingPolicy
from mention_console.core.models import TaggedMention
from mention_console.core.types import UserDirectoryProtocol

from .resolver import display_names

logger = logging.getLogger(__name__)

TAG_OPEN = "\ue000"
TAG_CLOSE = "\ue001"

USERNAME_CHARS = "A-Za-z0-9.\\-_"
TRAILING_PUNCTUATION = ".-_"

USERNAME_PATTERN = re.compile(f"@([{USERNAME_CHARS}]+)")
TAGGED_MENTION_PATTERN = re.compile(
    f"@([{USERNAME_CHARS}]+){TAG_OPEN}@([^{TAG_OPEN}{TAG_CLOSE}]*){TAG_CLOSE}"
)
_USERNAME_CHAR = re.compile(f"[{USERNAME_CHARS}]")


def is_username_char(char: str) -> bool:
    return bool(_USERNAME_CHAR.fullmatch(char))


def make_tag(username: str, display_name: str) -> str:
    """Return the tagged form of one resolved mention."""
    return f"@{username}{TAG_OPEN}@{display_name}{TAG_CLOSE}"


def split_token(token: str, known: dict[str, str] | set[str]) -> tuple[str | None, str]:
    """Split a greedy username run into ``(username, trailing_punctuation)``.

    The whole run wins when it is a known username.  Otherwise trailing
    ``.``/``-``/``_`` are peeled off so a mention at the end of a sentence
    (``@bob.``) still resolves.  Returns ``(None, "")`` when neither form is
    known.
    """
    if token in known:
        return token, ""
    stripped = token.rstrip(TRAILING_PUNCTUATION)
    if stripped and stripped != token and stripped in known:
        return stripped, token[len(stripped) :]
    return None, ""


def encode(raw: str, directory: UserDirectoryProtocol, policy: NamingPolicy) -> str:
    """Annotate every resolvable mention in *raw* with its display name.

    Tokens whose display name equals the username, and unknown usernames,
    are left bare.  Non-mention text is never altered.
    """
    if "@" not in raw:
        return raw
    names = display_names(directory, policy)

    def _annotate(match: re.Match[str]) -> str:
        username, tail = split_token(match.group(1), names)
        if username is None:
            logger.debug("Unresolved mention @%s left as text", match.group(1))
            return match.group(0)
        display = names[username]
        if display == username or TAG_OPEN in display or TAG_CLOSE in display:
            return match.group(0)
        return make_tag(username, display) + tail

    return USERNAME_PATTERN.sub(_annotate, raw)


def decode_to_display(tagged: str) -> str:
    """Replace each ``@username<annotation>`` unit with ``@DisplayName``.

    Bare tokens and ordinary text pass through.  Stray or unbalanced markers
    are not part of a well-formed unit and are left as literal text.
    """
    if TAG_OPEN not in tagged:
        return tagged
    return TAGGED_MENTION_PATTERN.sub(lambda m: f"@{m.group(2)}", tagged)


def extract_mentions(tagged: str) -> list[TaggedMention]:
    """Return the annotated mentions of *tagged* in document order."""
    return [
        TaggedMention(username=m.group(1), display_name=m.group(2))
        for m in TAGGED_MENTION_PATTERN.finditer(tagged)
    ]


def strip_tags(tagged: str) -> str:
    """Return the RawText a well-formed TaggedText was encoded from."""
    if TAG_OPEN not in tagged:
        return tagged
    return TAGGED_MENTION_PATTERN.sub(lambda m: f"@{m.group(1)}", tagged)


def to_display(raw: str, directory: UserDirectoryProtocol, policy: NamingPolicy) -> str:
    """Convert RawText straight to DisplayText."""
    return decode_to_display(encode(raw, directory, policy))
