"""Append-only registry event sinks.

``EventLedger`` persists events in SQLite with a hash chain:
- Append-only: ``deposit_event()`` is the only write; no update, no delete.
- Hash-chained: each record carries the SHA-256 seal of the previous one.
- ``entry_hash`` UNIQUE constraint for tamper detection.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from artistledger.core.hasher import compute_entry_hash
from artistledger.core.state_db import StateDatabase
from artistledger.models.events import ArtistEvent, EventRecord

logger = logging.getLogger(__name__)


class EventLedgerIntegrityError(RuntimeError):
    """Raised when the hash chain is broken."""


@runtime_checkable
class EventSink(Protocol):
    """Receives every event emitted by the registry."""

    def deposit_event(self, event: ArtistEvent) -> None: ...


class InMemoryEventLog:
    """Keeps emitted events in a list."""

    def __init__(self) -> None:
        self.events: list[ArtistEvent] = []

    def deposit_event(self, event: ArtistEvent) -> None:
        self.events.append(event)

    def last(self) -> ArtistEvent | None:
        return self.events[-1] if self.events else None


class EventLedger:
    """Hash-chained event ledger on the ``event_ledger`` table.

    Parameters
    ----------
    db:
        The shared state database.
    """

    def __init__(self, db: StateDatabase) -> None:
        self._db = db

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def deposit_event(self, event: ArtistEvent) -> None:
        self.append(event)

    def append(self, event: ArtistEvent) -> EventRecord:
        """Seal ``event`` onto the end of the chain and return the record."""
        with self._db.transaction():
            sequence = self._next_sequence()
            unsealed = EventRecord(
                sequence=sequence,
                kind=event.kind,
                owner=event.owner,
                block_number=event.block_number,
                payload_json=event.model_dump_json(),
                previous_entry_hash=self._get_latest_hash(),
            )
            sealed = unsealed.model_copy(
                update={"entry_hash": compute_entry_hash(unsealed.model_dump(mode="json"))}
            )
            self._db.execute(
                """
                INSERT INTO event_ledger
                    (sequence, kind, owner, block_number, payload_json,
                     previous_entry_hash, entry_hash)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    sealed.sequence,
                    sealed.kind.value,
                    sealed.owner,
                    sealed.block_number,
                    sealed.payload_json,
                    sealed.previous_entry_hash,
                    sealed.entry_hash,
                ),
            )
        logger.debug("Sealed event #%d %s for %s", sealed.sequence, sealed.kind.value, sealed.owner)
        return sealed

    def _next_sequence(self) -> int:
        row = self._db.execute("SELECT MAX(sequence) FROM event_ledger").fetchone()
        return (row[0] or 0) + 1

    def _get_latest_hash(self) -> str:
        row = self._db.execute(
            "SELECT entry_hash FROM event_ledger ORDER BY sequence DESC LIMIT 1"
        ).fetchone()
        return row[0] if row else ""

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def records(self, owner: str | None = None) -> list[EventRecord]:
        """Return sealed records in order, optionally for one owner."""
        if owner is None:
            rows = self._db.execute(
                "SELECT * FROM event_ledger ORDER BY sequence ASC"
            ).fetchall()
        else:
            rows = self._db.execute(
                "SELECT * FROM event_ledger WHERE owner = ? ORDER BY sequence ASC",
                (owner,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def events(self, owner: str | None = None) -> list[ArtistEvent]:
        """Return the typed events in order, optionally for one owner."""
        return [record.event() for record in self.records(owner)]

    def __len__(self) -> int:
        return self._db.execute("SELECT COUNT(*) FROM event_ledger").fetchone()[0]

    # ------------------------------------------------------------------
    # Chain verification
    # ------------------------------------------------------------------

    def verify_chain(self) -> bool:
        """Recompute every seal and check every link.

        Returns True if the chain is valid, raises EventLedgerIntegrityError
        otherwise.
        """
        prev_hash = ""
        for record in self.records():
            if record.previous_entry_hash != prev_hash:
                raise EventLedgerIntegrityError(
                    f"Chain broken at event #{record.sequence}: "
                    f"expected previous_hash={prev_hash!r}, "
                    f"got {record.previous_entry_hash!r}"
                )
            expected = compute_entry_hash(record.model_dump(mode="json"))
            if record.entry_hash != expected:
                raise EventLedgerIntegrityError(
                    f"Tampered event #{record.sequence}: "
                    f"expected hash={expected!r}, got {record.entry_hash!r}"
                )
            prev_hash = record.entry_hash
        return True

    @staticmethod
    def _row_to_record(row: tuple) -> EventRecord:
        (
            sequence,
            kind,
            owner,
            block_number,
            payload_json,
            previous_entry_hash,
            entry_hash,
        ) = row
        return EventRecord(
            sequence=sequence,
            kind=kind,
            owner=owner,
            block_number=block_number,
            payload_json=payload_json,
            previous_entry_hash=previous_entry_hash,
            entry_hash=entry_hash,
        )
