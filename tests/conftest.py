"""Shared test fixtures for artistledger."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from artistledger.core.clock import BlockClock
from artistledger.core.currency import InMemoryBalances
from artistledger.core.event_log import InMemoryEventLog
from artistledger.core.registry import ArtistRegistry
from artistledger.core.store import InMemoryArtistStore
from artistledger.models.artist import Artist
from artistledger.models.config import RegistryParams
from artistledger.models.genres import GenreFamily, MusicGenre

OWNER = "alice"
OTHER = "bob"


@pytest.fixture
def params() -> RegistryParams:
    """The reference constants: MaxGenres=5, MaxAssets=32, deposit 5, cooldown 10."""
    return RegistryParams(
        base_deposit=5,
        unregister_period=10,
        max_name_len=64,
        max_genres=5,
        max_assets=32,
        max_contracts=2048,
    )


@pytest.fixture
def store() -> InMemoryArtistStore:
    return InMemoryArtistStore()


@pytest.fixture
def balances() -> InMemoryBalances:
    """Every test account starts with 100 free."""
    return InMemoryBalances({"alice": 100, "bob": 100, "carol": 100, "dave": 100})


@pytest.fixture
def clock() -> BlockClock:
    return BlockClock(0)


@pytest.fixture
def event_log() -> InMemoryEventLog:
    return InMemoryEventLog()


@pytest.fixture
def registry(
    params: RegistryParams,
    store: InMemoryArtistStore,
    balances: InMemoryBalances,
    clock: BlockClock,
    event_log: InMemoryEventLog,
) -> ArtistRegistry:
    """Provide an ArtistRegistry wired to in-memory collaborators."""
    return ArtistRegistry(params, store, balances, clock, event_log)


@pytest.fixture
def house() -> MusicGenre:
    return MusicGenre(family=GenreFamily.ELECTRONIC, subtype="house")


@pytest.fixture
def tester_artist(house: MusicGenre) -> dict[str, Any]:
    """Registration arguments of the reference 'Tester' artist."""
    return {
        "main_name": "Tester",
        "alias": "Dark Singer",
        "genres": [house],
        "description": b"A simple tester artist.",
        "assets": [],
    }


@pytest.fixture
def registered(
    registry: ArtistRegistry, tester_artist: dict[str, Any]
) -> Artist:
    """Register the Tester artist for OWNER at block 0."""
    return registry.register(OWNER, **tester_artist)


@pytest.fixture
def make_artist() -> Callable[..., Artist]:
    """Factory fixture: build an Artist record with sensible defaults."""

    def _factory(owner: str = OWNER, main_name: str = "Tester", **overrides: Any) -> Artist:
        defaults: dict[str, Any] = {
            "owner": owner,
            "registered_at": 0,
            "main_name": main_name,
        }
        defaults.update(overrides)
        return Artist(**defaults)

    return _factory


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    """Provide a path for a temporary SQLite state database."""
    return tmp_path / "state.db"
