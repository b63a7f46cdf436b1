from .codec import (
    TAG_CLOSE,
    TAG_OPEN,
    decode_to_display,
    encode,
    extract_mentions,
    make_tag,
    strip_tags,
    to_display,
)
from .config import load_composer_config
from .directory import UserDirectory, load_directory
from .indexer import index
from .memo import SelectedMentionMemo
from .mention_keys import build_mention_keys
from .reconciler import reconcile
from .resolver import display_name_for, display_names, resolve
from .session import CompositionSession, compose_state
from .settings import ComposerSettings

__all__ = [
    "TAG_CLOSE",
    "TAG_OPEN",
    "ComposerSettings",
    "CompositionSession",
    "SelectedMentionMemo",
    "UserDirectory",
    "build_mention_keys",
    "compose_state",
    "decode_to_display",
    "display_name_for",
    "display_names",
    "encode",
    "extract_mentions",
    "index",
    "load_composer_config",
    "load_directory",
    "make_tag",
    "reconcile",
    "resolve",
    "strip_tags",
    "to_display",
]
