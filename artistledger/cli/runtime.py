"""Wiring of the SQLite-backed registry for CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console

from artistledger.config import RegistrySettings
from artistledger.core.clock import SqliteBlockClock
from artistledger.core.currency import InsufficientBalanceError, SqliteBalances
from artistledger.core.errors import ArtistRegistryError
from artistledger.core.event_log import EventLedger
from artistledger.core.registry import ArtistRegistry
from artistledger.core.state_db import StateDatabase
from artistledger.core.store import SqliteArtistStore

logger = logging.getLogger(__name__)

console = Console()


@dataclass
class Runtime:
    """Everything a command needs, sharing one state database."""

    db: StateDatabase
    registry: ArtistRegistry
    balances: SqliteBalances
    clock: SqliteBlockClock
    ledger: EventLedger


def build_runtime(state_path: Path, settings: RegistrySettings) -> Runtime:
    db = StateDatabase(state_path)
    store = SqliteArtistStore(db)
    balances = SqliteBalances(db)
    clock = SqliteBlockClock(db)
    ledger = EventLedger(db)
    registry = ArtistRegistry(
        settings.registry_params(), store, balances, clock, ledger
    )
    return Runtime(db=db, registry=registry, balances=balances, clock=clock, ledger=ledger)


@contextmanager
def open_runtime(ctx: typer.Context) -> Iterator[Runtime]:
    """Open the state file from the app callback and run one transaction.

    Registry and collaborator errors roll the transaction back and end the
    command with exit code 1.
    """
    state_path: Path = ctx.obj["state_path"]
    settings: RegistrySettings = ctx.obj["settings"]
    runtime = build_runtime(state_path, settings)
    try:
        with runtime.db.transaction():
            yield runtime
    except (ArtistRegistryError, InsufficientBalanceError) as exc:
        console.print(f"[bold red]{exc.code}:[/bold red] {exc}")
        raise typer.Exit(code=1) from None
    finally:
        runtime.db.close()
