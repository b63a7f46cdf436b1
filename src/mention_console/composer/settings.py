from __future__ import annotations

from dataclasses import dataclass, replace

from mention_console.core.enums import MatchMode, NamingPolicy

DEFAULT_HIGHLIGHT_COLOR = "#1c58d9"  # Link color of the default theme


@dataclass(slots=True)
class ComposerSettings:
    # Names
    naming_policy: NamingPolicy = NamingPolicy.USERNAME
    match_mode: MatchMode = MatchMode.SUBSTRING

    # Presentation
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR

    # Diagnostics
    log_level: str = "INFO"

    def clone(self) -> "ComposerSettings":
        return replace(self)
