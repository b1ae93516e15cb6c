"""Reservable balances — the deposit collaborator.

Only the reserve/release contract is modelled: free balance moves to
reserved on ``reserve`` and back on ``unreserve``. Transfers are out of
scope.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from artistledger.core.state_db import StateDatabase

logger = logging.getLogger(__name__)


class InsufficientBalanceError(RuntimeError):
    """Raised when the free balance cannot cover a reservation."""

    code = "InsufficientBalance"


@runtime_checkable
class Currency(Protocol):
    """Reserve/release interface consumed by the registry."""

    def reserve(self, account: str, amount: int) -> None:
        """Move ``amount`` from free to reserved, or raise with no change."""
        ...

    def unreserve(self, account: str, amount: int) -> int:
        """Move up to ``amount`` back to free; return what could not be moved."""
        ...

    def free_balance(self, account: str) -> int: ...

    def reserved_balance(self, account: str) -> int: ...


class InMemoryBalances:
    """Dict-backed balances, seeded with ``set_balance`` or a genesis mapping."""

    def __init__(self, genesis: dict[str, int] | None = None) -> None:
        self._free: dict[str, int] = dict(genesis or {})
        self._reserved: dict[str, int] = {}

    def set_balance(self, account: str, free: int) -> None:
        self._free[account] = free

    def free_balance(self, account: str) -> int:
        return self._free.get(account, 0)

    def reserved_balance(self, account: str) -> int:
        return self._reserved.get(account, 0)

    def reserve(self, account: str, amount: int) -> None:
        free = self.free_balance(account)
        if free < amount:
            raise InsufficientBalanceError(
                f"Account {account!r} has {free} free, cannot reserve {amount}"
            )
        self._free[account] = free - amount
        self._reserved[account] = self.reserved_balance(account) + amount

    def unreserve(self, account: str, amount: int) -> int:
        reserved = self.reserved_balance(account)
        actual = min(reserved, amount)
        self._reserved[account] = reserved - actual
        self._free[account] = self.free_balance(account) + actual
        return amount - actual


class SqliteBalances:
    """Balances backed by the ``balances`` table."""

    def __init__(self, db: StateDatabase) -> None:
        self._db = db

    def _row(self, account: str) -> tuple[int, int]:
        row = self._db.execute(
            "SELECT free, reserved FROM balances WHERE account = ?", (account,)
        ).fetchone()
        return (row[0], row[1]) if row else (0, 0)

    def _write(self, account: str, free: int, reserved: int) -> None:
        self._db.execute(
            """
            INSERT INTO balances (account, free, reserved) VALUES (?, ?, ?)
            ON CONFLICT(account) DO UPDATE SET free = excluded.free,
                                               reserved = excluded.reserved
            """,
            (account, free, reserved),
        )

    def set_balance(self, account: str, free: int) -> None:
        _, reserved = self._row(account)
        with self._db.transaction():
            self._write(account, free, reserved)
        logger.info("Set free balance of %s to %d", account, free)

    def free_balance(self, account: str) -> int:
        return self._row(account)[0]

    def reserved_balance(self, account: str) -> int:
        return self._row(account)[1]

    def reserve(self, account: str, amount: int) -> None:
        free, reserved = self._row(account)
        if free < amount:
            raise InsufficientBalanceError(
                f"Account {account!r} has {free} free, cannot reserve {amount}"
            )
        with self._db.transaction():
            self._write(account, free - amount, reserved + amount)

    def unreserve(self, account: str, amount: int) -> int:
        free, reserved = self._row(account)
        actual = min(reserved, amount)
        with self._db.transaction():
            self._write(account, free + actual, reserved - actual)
        return amount - actual
