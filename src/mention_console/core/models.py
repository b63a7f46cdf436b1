from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class User:
    username: str
    first_name: str = ""
    last_name: str = ""
    nickname: str = ""
    family_name_first: bool = False  # Locale flag: render full name as "Last First"


@dataclass(slots=True, frozen=True)
class MentionSpan:
    """Highlighted ``[start, end)`` range of DisplayText and the user it represents."""

    start: int
    end: int
    username: str


@dataclass(slots=True, frozen=True)
class TaggedMention:
    username: str
    display_name: str


@dataclass(slots=True, frozen=True)
class SuggestionItem:
    username: str
    is_group: bool = False
    display_name: str | None = None


@dataclass(slots=True, frozen=True)
class MentionKey:
    key: str
    case_sensitive: bool = False


@dataclass(slots=True, frozen=True)
class CompositionState:
    """The four derived fields of a composing message, replaced together."""

    raw: str = ""
    tagged: str = ""
    display: str = ""
    spans: tuple[MentionSpan, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.raw and not self.display
