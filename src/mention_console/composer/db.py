"""SQLite database connection and migration system."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from .paths import db_path

logger = logging.getLogger(__name__)

SCHEMA_V1 = """\
CREATE TABLE schema_version (
    version INTEGER NOT NULL
);

INSERT INTO schema_version (version) VALUES (1);

CREATE TABLE settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

# Each migration takes the database from version N to N+1.
# Index 0 = v0 -> v1 (initial schema creation).
MIGRATIONS: list[tuple[str, ...]] = [
    tuple(stmt.strip() for stmt in SCHEMA_V1.split(";") if stmt.strip()),
]


def _get_version(conn: sqlite3.Connection) -> int:
    """Return the current schema version, or 0 if no schema_version table."""
    try:
        row = conn.execute("SELECT version FROM schema_version").fetchone()
        return row[0] if row else 0
    except sqlite3.OperationalError:
        return 0


def _migrate(conn: sqlite3.Connection) -> None:
    """Run any outstanding migrations."""
    current = _get_version(conn)
    target = len(MIGRATIONS)
    if current >= target:
        return
    logger.info("Migrating database from v%d to v%d", current, target)
    for version_index in range(current, target):
        for stmt in MIGRATIONS[version_index]:
            conn.execute(stmt)
    conn.execute("UPDATE schema_version SET version = ?", (target,))
    conn.commit()


def open_db(path: str | Path | None = None) -> sqlite3.Connection:
    """Open (and migrate if needed) the settings database."""
    db = db_path() if path is None else Path(path)
    db.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db))
    conn.execute("PRAGMA journal_mode=WAL")
    _migrate(conn)
    return conn
