from __future__ import annotations

import logging
import os
import re
from enum import StrEnum
from typing import TypeVar

from mention_console.core.enums import MatchMode, NamingPolicy

from .settings import ComposerSettings

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StrEnum)

_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


def _env_enum(name: str, enum_type: type[E], default: E) -> E:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        logger.debug("Ignoring invalid %s=%r", name, value)
        return default


def _env_color(name: str, default: str) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip()
    if not _HEX_COLOR.fullmatch(value):
        logger.debug("Ignoring invalid %s=%r", name, value)
        return default
    return value


def load_composer_config(base: ComposerSettings | None = None) -> ComposerSettings:
    """Return *base* (or defaults) with environment overrides applied."""
    settings = ComposerSettings() if base is None else base.clone()
    settings.naming_policy = _env_enum(
        "MENTION_NAMING_POLICY", NamingPolicy, settings.naming_policy
    )
    settings.match_mode = _env_enum("MENTION_MATCH_MODE", MatchMode, settings.match_mode)
    settings.highlight_color = _env_color("MENTION_HIGHLIGHT_COLOR", settings.highlight_color)
    return settings
