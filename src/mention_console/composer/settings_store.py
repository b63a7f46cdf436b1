from __future__ import annotations

import sqlite3
from dataclasses import asdict, fields

from mention_console.core.enums import MatchMode, NamingPolicy

from .settings import ComposerSettings

_ENUM_TYPES = {"NamingPolicy": NamingPolicy, "MatchMode": MatchMode}


class SettingsStore:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def load(self) -> ComposerSettings:
        rows = self._conn.execute("SELECT key, value FROM settings").fetchall()
        if not rows:
            return ComposerSettings()
        stored = {key: value for key, value in rows}
        defaults = asdict(ComposerSettings())
        for field in fields(ComposerSettings):
            if field.name in stored:
                raw = stored[field.name]
                defaults[field.name] = _cast(raw, field.type, defaults[field.name])
        return ComposerSettings(**defaults)

    def save(self, settings: ComposerSettings) -> None:
        data = asdict(settings)
        self._conn.executemany(
            "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
            [(k, str(v)) for k, v in data.items()],
        )
        self._conn.commit()


def _cast(raw: str, type_hint: str, default: object) -> object:
    """Cast a string value back to the expected Python type."""
    if type_hint == "bool":
        return raw in ("True", "1", "true")
    if type_hint == "int":
        return int(raw)
    if type_hint == "float":
        return float(raw)
    enum_type = _ENUM_TYPES.get(type_hint)
    if enum_type is not None:
        try:
            return enum_type(raw)
        except ValueError:
            return default
    return raw
