"""Tests for the event sinks — in-memory list and hash-chained SQLite ledger."""

from __future__ import annotations

import pytest

from artistledger.core.event_log import (
    EventLedger,
    EventLedgerIntegrityError,
    EventSink,
    InMemoryEventLog,
)
from artistledger.core.state_db import StateDatabase
from artistledger.models.events import (
    ArtistRegistered,
    ArtistUnregistered,
    ArtistUpdated,
    EventKind,
)
from artistledger.models.updates import AssetsAdd


@pytest.fixture
def db(state_path) -> StateDatabase:
    return StateDatabase(state_path)


@pytest.fixture
def ledger(db) -> EventLedger:
    return EventLedger(db)


def _registered(owner: str = "alice", block: int = 0) -> ArtistRegistered:
    return ArtistRegistered(owner=owner, main_name=f"{owner}-name", block_number=block)


class TestInMemoryEventLog:
    def test_collects_in_order(self):
        log = InMemoryEventLog()
        assert isinstance(log, EventSink)
        assert log.last() is None
        log.deposit_event(_registered("alice"))
        log.deposit_event(_registered("bob"))
        assert [e.owner for e in log.events] == ["alice", "bob"]
        assert log.last().owner == "bob"


class TestEventLedger:
    def test_satisfies_protocol(self, ledger):
        assert isinstance(ledger, EventSink)

    def test_append_seals_record(self, ledger):
        record = ledger.append(_registered())
        assert record.sequence == 1
        assert record.kind == EventKind.ARTIST_REGISTERED
        assert record.previous_entry_hash == ""
        assert record.entry_hash != ""

    def test_hash_chain_links(self, ledger):
        first = ledger.append(_registered())
        second = ledger.append(ArtistUnregistered(owner="alice", block_number=10))
        assert second.previous_entry_hash == first.entry_hash
        assert second.sequence == 2

    def test_events_round_trip_typed(self, ledger):
        update = ArtistUpdated(owner="alice", block_number=2, update=AssetsAdd(asset=b"\x01\x02"))
        ledger.deposit_event(_registered())
        ledger.deposit_event(update)
        events = ledger.events()
        assert events[0] == _registered()
        assert events[1] == update

    def test_filter_by_owner(self, ledger):
        ledger.deposit_event(_registered("alice"))
        ledger.deposit_event(_registered("bob"))
        ledger.deposit_event(ArtistUnregistered(owner="alice", block_number=10))
        assert [e.kind for e in ledger.events("alice")] == [
            EventKind.ARTIST_REGISTERED,
            EventKind.ARTIST_UNREGISTERED,
        ]
        assert len(ledger) == 3

    def test_verify_chain_valid(self, ledger):
        assert ledger.verify_chain() is True  # empty
        ledger.deposit_event(_registered("alice"))
        ledger.deposit_event(_registered("bob"))
        assert ledger.verify_chain() is True

    def test_verify_detects_tampered_payload(self, ledger, db):
        ledger.deposit_event(_registered("alice"))
        forged = _registered("mallory").model_dump_json()
        with db.transaction():
            db.execute("UPDATE event_ledger SET payload_json = ? WHERE sequence = 1", (forged,))
        with pytest.raises(EventLedgerIntegrityError, match="Tampered"):
            ledger.verify_chain()

    def test_verify_detects_broken_link(self, ledger, db):
        ledger.deposit_event(_registered("alice"))
        ledger.deposit_event(_registered("bob"))
        with db.transaction():
            db.execute("DELETE FROM event_ledger WHERE sequence = 1")
        with pytest.raises(EventLedgerIntegrityError, match="Chain broken"):
            ledger.verify_chain()

    def test_rolled_back_append_leaves_no_record(self, ledger, db):
        with pytest.raises(RuntimeError):
            with db.transaction():
                ledger.deposit_event(_registered())
                raise RuntimeError("abort")
        assert len(ledger) == 0
