"""SQLite storage for short links."""

from __future__ import annotations

import logging
import os
import sqlite3
import time
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

# Incremented whenever the schema changes.
USER_VERSION = 1

_FIND_WITH_HITS = (
    "SELECT long_url, hits, expiry_time FROM urls "
    "WHERE short_url = ?1 AND (expiry_time > ?2 OR expiry_time = 0)"
)
_FIND_WITHOUT_HITS = (
    "SELECT long_url FROM urls "
    "WHERE short_url = ?1 AND (expiry_time > ?2 OR expiry_time = 0)"
)


@dataclass(frozen=True)
class LinkRow:
    """One stored link as reported to clients."""

    shortlink: str
    longlink: str
    hits: int
    expiry_time: int

    def to_dict(self) -> dict:
        """Return the row as a plain dictionary, keys in field order."""
        return asdict(self)


def _now() -> int:
    return int(time.time())


def open_db(path: str | os.PathLike) -> sqlite3.Connection:
    """Open (and create or migrate) the link database at ``path``."""
    db = sqlite3.connect(path, isolation_level=None)

    (table_exists,) = db.execute(
        "SELECT count(*) FROM sqlite_master WHERE type = 'table' AND name = 'urls'"
    ).fetchone()

    db.execute(
        """CREATE TABLE IF NOT EXISTS urls (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            long_url TEXT NOT NULL,
            short_url TEXT NOT NULL,
            hits INTEGER NOT NULL,
            expiry_time INTEGER NOT NULL DEFAULT 0
        )"""
    )
    db.execute("CREATE UNIQUE INDEX IF NOT EXISTS idx_short_url ON urls (short_url)")

    if table_exists == 0:
        current_version = USER_VERSION
    else:
        row = db.execute("PRAGMA user_version").fetchone()
        current_version = row[0] if row else 0

    # Migration 1: add expiry_time.
    if current_version < 1:
        db.execute(
            "ALTER TABLE urls ADD COLUMN expiry_time INTEGER NOT NULL DEFAULT 0"
        )

    db.execute("CREATE INDEX IF NOT EXISTS idx_expiry_time ON urls (expiry_time)")
    db.execute(f"PRAGMA user_version = {USER_VERSION:d}")
    return db


def find_url(
    db: sqlite3.Connection, shortlink: str, needhits: bool
) -> tuple[str | None, int | None, int | None]:
    """Look up an active link; return (longlink, hits, expiry_time).

    Hits and expiry time are only filled in when ``needhits`` is true.
    Every element is ``None`` when the link does not exist or has expired.
    """
    now = _now()
    if needhits:
        row = db.execute(_FIND_WITH_HITS, (shortlink, now)).fetchone()
        if row is None:
            return None, None, None
        return row[0], row[1], row[2]
    row = db.execute(_FIND_WITHOUT_HITS, (shortlink, now)).fetchone()
    if row is None:
        return None, None, None
    return row[0], None, None


def getall(db: sqlite3.Connection) -> list[LinkRow]:
    """Return every active link, oldest first."""
    cursor = db.execute(
        "SELECT short_url, long_url, hits, expiry_time FROM urls "
        "WHERE expiry_time > ?1 OR expiry_time = 0 ORDER BY id ASC",
        (_now(),),
    )
    return [
        LinkRow(shortlink=short, longlink=long, hits=hits, expiry_time=expiry or 0)
        for short, long, hits, expiry in cursor
    ]


def add_hit(db: sqlite3.Connection, shortlink: str) -> None:
    """Count one visit of ``shortlink``."""
    db.execute("UPDATE urls SET hits = hits + 1 WHERE short_url = ?1", (shortlink,))


def add_link(
    db: sqlite3.Connection, shortlink: str, longlink: str, expiry_delay: int
) -> int:
    """Store a new link and return its expiry time (0 means never).

    Raises ``sqlite3.IntegrityError`` if the short link is already taken.
    """
    expiry_time = 0 if expiry_delay == 0 else _now() + expiry_delay
    db.execute(
        "INSERT INTO urls (long_url, short_url, hits, expiry_time) "
        "VALUES (?1, ?2, ?3, ?4)",
        (longlink, shortlink, 0, expiry_time),
    )
    return expiry_time


def cleanup(db: sqlite3.Connection) -> int:
    """Delete expired links and return how many were removed."""
    now = _now()
    for (shortlink,) in db.execute(
        "SELECT short_url FROM urls WHERE ?1 > expiry_time AND expiry_time > 0",
        (now,),
    ).fetchall():
        logger.info("Expired link marked for deletion: %s", shortlink)

    deleted = db.execute(
        "DELETE FROM urls WHERE expiry_time < ?1 AND expiry_time > 0", (now,)
    ).rowcount
    if deleted == 1:
        logger.info("1 link was deleted.")
    elif deleted > 1:
        logger.info("%d links were deleted.", deleted)
    return deleted


def delete_link(db: sqlite3.Connection, shortlink: str) -> bool:
    """Delete ``shortlink``; return whether anything was removed."""
    try:
        cursor = db.execute("DELETE FROM urls WHERE short_url = ?1", (shortlink,))
    except sqlite3.Error:
        return False
    return cursor.rowcount > 0