"""Shared SQLite handle for the persisted registry backends.

One connection serves the artist store, balances, clock and event ledger,
so a single ``transaction()`` covers every write of a registry call.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS artists (
        owner        TEXT PRIMARY KEY,
        main_name    TEXT NOT NULL,
        record_json  TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS artist_names (
        main_name    TEXT PRIMARY KEY,
        owner        TEXT NOT NULL UNIQUE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS balances (
        account      TEXT PRIMARY KEY,
        free         INTEGER NOT NULL DEFAULT 0,
        reserved     INTEGER NOT NULL DEFAULT 0
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS chain_clock (
        id           INTEGER PRIMARY KEY CHECK (id = 0),
        block_number INTEGER NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS event_ledger (
        sequence             INTEGER PRIMARY KEY AUTOINCREMENT,
        kind                 TEXT NOT NULL,
        owner                TEXT NOT NULL,
        block_number         INTEGER NOT NULL,
        payload_json         TEXT NOT NULL,
        previous_entry_hash  TEXT NOT NULL DEFAULT '',
        entry_hash           TEXT NOT NULL UNIQUE
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_event_owner ON event_ledger(owner, sequence);",
)


class StateDatabase:
    """A single SQLite connection with nesting-aware transactions.

    Parameters
    ----------
    path:
        Path to the database file, created with its parent directory if
        missing, or ``":memory:"`` for a throwaway database.
    """

    def __init__(self, path: Path | str = MEMORY) -> None:
        if str(path) != MEMORY:
            path = Path(path)
            path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        # Autocommit mode; explicit BEGIN/COMMIT in transaction().
        self._conn = sqlite3.connect(
            str(path), isolation_level=None, check_same_thread=False
        )
        self._conn.execute("PRAGMA foreign_keys=ON")
        if str(path) != MEMORY:
            self._conn.execute("PRAGMA journal_mode=WAL")
        self._depth = 0
        self._init_schema()

    def _init_schema(self) -> None:
        with self.transaction():
            for ddl in _SCHEMA:
                self._conn.execute(ddl)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        return self._conn.execute(sql, params)

    @contextmanager
    def transaction(self) -> Iterator[StateDatabase]:
        """Run the block in one transaction; nested blocks join the outer one."""
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._conn.execute("BEGIN IMMEDIATE")
        self._depth = 1
        try:
            yield self
        except BaseException:
            self._conn.execute("ROLLBACK")
            logger.debug("Rolled back transaction on %s", self.path)
            raise
        else:
            self._conn.execute("COMMIT")
        finally:
            self._depth = 0

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> StateDatabase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
