"""The artist record — one per registered owner.

Large metadata is never stored raw: ``description`` and ``assets`` hold
content fingerprints produced by ``artistledger.core.hasher.fingerprint``.
Services holding the raw content re-hash it and compare against these
fingerprints to confirm the artist recorded it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from artistledger.models.genres import MusicGenre


class Artist(BaseModel):
    """A registered artist.

    Frozen: every mutation goes through ``model_copy`` and yields a new
    record, so a failed update can never leave a half-applied change.
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    registered_at: int  # block number
    verified_at: int | None = None  # set by an external authority only
    main_name: str  # immutable after registration
    alias: str | None = None
    genres: tuple[MusicGenre, ...] = ()
    description: str | None = None  # fingerprint
    assets: tuple[str, ...] = ()  # fingerprints
    contracts: tuple[str, ...] = ()  # associated contract accounts, read-only

    @property
    def is_verified(self) -> bool:
        """True if the artist carries a ``verified_at`` block."""
        return self.verified_at is not None
