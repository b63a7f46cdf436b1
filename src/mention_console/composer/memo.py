from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SelectedMentionMemo:
    """Mentions the user explicitly confirmed through suggestion selection.

    Keyed by display name: when one display name maps to several usernames,
    the most recent explicit choice wins the tie-break.
    """

    def __init__(self) -> None:
        self._by_display_name: dict[str, str] = {}

    def record(self, username: str, display_name: str) -> None:
        logger.debug("Selected @%s as '%s'", username, display_name)
        self._by_display_name[display_name] = username

    def username_for(self, display_name: str) -> str | None:
        return self._by_display_name.get(display_name)

    def clear(self) -> None:
        self._by_display_name.clear()

    def items(self) -> list[tuple[str, str]]:
        """Return ``(display_name, username)`` pairs in selection order."""
        return list(self._by_display_name.items())

    def __len__(self) -> int:
        return len(self._by_display_name)
