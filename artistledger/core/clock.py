"""Logical clock — the current block height."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from artistledger.core.state_db import StateDatabase


@runtime_checkable
class Clock(Protocol):
    def now(self) -> int:
        """Return the current block number."""
        ...


class BlockClock:
    """In-memory block counter."""

    def __init__(self, block_number: int = 0) -> None:
        self._block = block_number

    def now(self) -> int:
        return self._block

    def set_block_number(self, block_number: int) -> None:
        self._block = block_number

    def advance(self, blocks: int = 1) -> int:
        self._block += blocks
        return self._block


class SqliteBlockClock:
    """Block counter persisted in the ``chain_clock`` table."""

    def __init__(self, db: StateDatabase) -> None:
        self._db = db

    def now(self) -> int:
        row = self._db.execute(
            "SELECT block_number FROM chain_clock WHERE id = 0"
        ).fetchone()
        return row[0] if row else 0

    def set_block_number(self, block_number: int) -> None:
        with self._db.transaction():
            self._db.execute(
                """
                INSERT INTO chain_clock (id, block_number) VALUES (0, ?)
                ON CONFLICT(id) DO UPDATE SET block_number = excluded.block_number
                """,
                (block_number,),
            )

    def advance(self, blocks: int = 1) -> int:
        block = self.now() + blocks
        self.set_block_number(block)
        return block
