"""Artist store — the owner index and the name index.

``insert`` writes both indices and ``remove`` clears both, so a name
becomes available again as soon as its artist unregisters. ``replace``
only touches the owner index: the main name never changes after
registration.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from artistledger.core.state_db import StateDatabase
from artistledger.models.artist import Artist


class StoreConsistencyError(RuntimeError):
    """Raised when a write would break the one-record-per-key contract."""


@runtime_checkable
class ArtistStore(Protocol):
    """Key-value access to artist records by owner and by main name."""

    def get(self, owner: str) -> Artist | None: ...

    def get_by_name(self, main_name: str) -> Artist | None: ...

    def contains(self, owner: str) -> bool: ...

    def contains_name(self, main_name: str) -> bool: ...

    def insert(self, artist: Artist) -> None: ...

    def replace(self, artist: Artist) -> None: ...

    def remove(self, owner: str) -> Artist | None: ...

    def owners(self) -> Iterator[str]: ...


class InMemoryArtistStore:
    """Dict-backed store, for tests and embedding."""

    def __init__(self) -> None:
        self._by_owner: dict[str, Artist] = {}
        self._names: dict[str, str] = {}  # main_name -> owner

    def get(self, owner: str) -> Artist | None:
        return self._by_owner.get(owner)

    def get_by_name(self, main_name: str) -> Artist | None:
        owner = self._names.get(main_name)
        return None if owner is None else self._by_owner.get(owner)

    def contains(self, owner: str) -> bool:
        return owner in self._by_owner

    def contains_name(self, main_name: str) -> bool:
        return main_name in self._names

    def insert(self, artist: Artist) -> None:
        if artist.owner in self._by_owner:
            raise StoreConsistencyError(f"Owner {artist.owner!r} already stored")
        if artist.main_name in self._names:
            raise StoreConsistencyError(f"Name {artist.main_name!r} already stored")
        self._by_owner[artist.owner] = artist
        self._names[artist.main_name] = artist.owner

    def replace(self, artist: Artist) -> None:
        current = self._by_owner.get(artist.owner)
        if current is None:
            raise StoreConsistencyError(f"Owner {artist.owner!r} is not stored")
        if current.main_name != artist.main_name:
            raise StoreConsistencyError("main_name cannot change after registration")
        self._by_owner[artist.owner] = artist

    def remove(self, owner: str) -> Artist | None:
        artist = self._by_owner.pop(owner, None)
        if artist is not None:
            self._names.pop(artist.main_name, None)
        return artist

    def owners(self) -> Iterator[str]:
        return iter(sorted(self._by_owner))


class SqliteArtistStore:
    """Store backed by the ``artists`` and ``artist_names`` tables.

    Records are kept as their pydantic JSON dump.
    """

    def __init__(self, db: StateDatabase) -> None:
        self._db = db

    def get(self, owner: str) -> Artist | None:
        row = self._db.execute(
            "SELECT record_json FROM artists WHERE owner = ?", (owner,)
        ).fetchone()
        return Artist.model_validate_json(row[0]) if row else None

    def get_by_name(self, main_name: str) -> Artist | None:
        row = self._db.execute(
            """
            SELECT a.record_json FROM artist_names n
            JOIN artists a ON a.owner = n.owner
            WHERE n.main_name = ?
            """,
            (main_name,),
        ).fetchone()
        return Artist.model_validate_json(row[0]) if row else None

    def contains(self, owner: str) -> bool:
        row = self._db.execute(
            "SELECT 1 FROM artists WHERE owner = ?", (owner,)
        ).fetchone()
        return row is not None

    def contains_name(self, main_name: str) -> bool:
        row = self._db.execute(
            "SELECT 1 FROM artist_names WHERE main_name = ?", (main_name,)
        ).fetchone()
        return row is not None

    def insert(self, artist: Artist) -> None:
        if self.contains(artist.owner):
            raise StoreConsistencyError(f"Owner {artist.owner!r} already stored")
        if self.contains_name(artist.main_name):
            raise StoreConsistencyError(f"Name {artist.main_name!r} already stored")
        with self._db.transaction():
            self._db.execute(
                "INSERT INTO artists (owner, main_name, record_json) VALUES (?, ?, ?)",
                (artist.owner, artist.main_name, artist.model_dump_json()),
            )
            self._db.execute(
                "INSERT INTO artist_names (main_name, owner) VALUES (?, ?)",
                (artist.main_name, artist.owner),
            )

    def replace(self, artist: Artist) -> None:
        current = self.get(artist.owner)
        if current is None:
            raise StoreConsistencyError(f"Owner {artist.owner!r} is not stored")
        if current.main_name != artist.main_name:
            raise StoreConsistencyError("main_name cannot change after registration")
        with self._db.transaction():
            self._db.execute(
                "UPDATE artists SET record_json = ? WHERE owner = ?",
                (artist.model_dump_json(), artist.owner),
            )

    def remove(self, owner: str) -> Artist | None:
        artist = self.get(owner)
        if artist is None:
            return None
        with self._db.transaction():
            self._db.execute("DELETE FROM artists WHERE owner = ?", (owner,))
            self._db.execute("DELETE FROM artist_names WHERE owner = ?", (owner,))
        return artist

    def owners(self) -> Iterator[str]:
        rows = self._db.execute("SELECT owner FROM artists ORDER BY owner").fetchall()
        return iter([row[0] for row in rows])
