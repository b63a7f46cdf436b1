from __future__ import annotations

from mention_console.core.models import MentionSpan

from .codec import extract_mentions
from .ranges import ConsumedRanges


def index(tagged: str, display: str) -> list[MentionSpan]:
    """Compute highlight spans over *display* for the mentions annotated in *tagged*.

    Mentions are visited in document order; each claims the first
    ``@DisplayName`` occurrence not already claimed by an earlier one, so
    spans never overlap and map one-to-one onto annotations.  A mention with
    no remaining occurrence gets no span.
    """
    consumed = ConsumedRanges()
    spans: list[MentionSpan] = []
    for mention in extract_mentions(tagged):
        pattern = f"@{mention.display_name}"
        start = display.find(pattern)
        while start != -1:
            end = start + len(pattern)
            if not consumed.overlaps(start, end):
                consumed.claim(start, end)
                spans.append(MentionSpan(start=start, end=end, username=mention.username))
                break
            start = display.find(pattern, start + 1)
    spans.sort(key=lambda span: span.start)
    return spans
