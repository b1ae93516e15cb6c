"""Artist registry — registration, update and unregistration guards.

Every public call validates everything it needs before the first write.
The deposit reservation is the last fallible step of ``register``, so any
error leaves balances, both store indices and the event log exactly as
they were. Calls are serialized by a re-entrant lock held for the whole
call; no check-then-act race is possible between callers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from artistledger.core.clock import Clock
from artistledger.core.currency import Currency
from artistledger.core.errors import (
    AlreadyRegisteredError,
    ArtistRegistryError,
    CapacityExceededError,
    InvalidNameError,
    IsVerifiedError,
    NameUnavailableError,
    NotRegisteredError,
    PeriodNotPassedError,
)
from artistledger.core.event_log import EventSink
from artistledger.core.hasher import fingerprint
from artistledger.core.store import ArtistStore
from artistledger.core.update_engine import (
    apply_update,
    check_name_len,
    checked_genres,
    checked_hash_assets,
)
from artistledger.models.artist import Artist
from artistledger.models.config import RegistryParams
from artistledger.models.events import (
    ArtistRegistered,
    ArtistUnregistered,
    ArtistUpdated,
)
from artistledger.models.genres import MusicGenre
from artistledger.models.updates import UpdatableData

logger = logging.getLogger(__name__)


class ArtistRegistry:
    """Registers, updates and unregisters artists.

    Parameters
    ----------
    params:
        Deposit, cooldown and capacity bounds.
    store:
        Owner and name indices.
    currency:
        Holds the registration deposit.
    clock:
        Source of the current block number.
    events:
        Receives ``ArtistRegistered``/``ArtistUpdated``/``ArtistUnregistered``.
    """

    def __init__(
        self,
        params: RegistryParams,
        store: ArtistStore,
        currency: Currency,
        clock: Clock,
        events: EventSink,
    ) -> None:
        self.params = params
        self.store = store
        self.currency = currency
        self.clock = clock
        self.events = events
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_artist_by_id(self, owner: str) -> Artist | None:
        return self.store.get(owner)

    def get_artist_by_name(self, main_name: str) -> Artist | None:
        return self.store.get_by_name(main_name)

    # ------------------------------------------------------------------
    # Register
    # ------------------------------------------------------------------

    def register(
        self,
        owner: str,
        main_name: str,
        alias: str | None = None,
        genres: Sequence[MusicGenre] = (),
        description: bytes | None = None,
        assets: Sequence[bytes] = (),
        contracts: Sequence[str] = (),
    ) -> Artist:
        """Register ``owner`` as an artist and reserve the base deposit.

        Raises
        ------
        AlreadyRegisteredError
            ``owner`` already has a record.
        NameUnavailableError
            ``main_name`` is held by another artist.
        InvalidNameError, CapacityExceededError
            Name empty or over ``max_name_len``; too many genres, assets or
            contracts.
        NotUniqueGenreError, NotUniqueAssetError
            Duplicate genre, or two assets with the same fingerprint.
        InsufficientBalanceError
            Free balance below ``base_deposit``.
        """
        with self._lock:
            try:
                artist = self._build_artist(
                    owner, main_name, alias, genres, description, assets, contracts
                )
            except ArtistRegistryError as exc:
                logger.debug("register(%s) rejected: %s", owner, exc.code)
                raise

            self.currency.reserve(owner, self.params.base_deposit)
            self.store.insert(artist)
            self.events.deposit_event(
                ArtistRegistered(
                    owner=owner, main_name=main_name, block_number=artist.registered_at
                )
            )
            logger.info(
                "Registered artist %r for %s at block %d",
                main_name, owner, artist.registered_at,
            )
            return artist

    def _build_artist(
        self,
        owner: str,
        main_name: str,
        alias: str | None,
        genres: Sequence[MusicGenre],
        description: bytes | None,
        assets: Sequence[bytes],
        contracts: Sequence[str],
    ) -> Artist:
        if self.store.contains(owner):
            raise AlreadyRegisteredError(f"{owner!r} is already registered as an artist")
        if not main_name:
            raise InvalidNameError("main_name must not be empty")
        check_name_len(main_name, self.params, field="main_name")
        if self.store.contains_name(main_name):
            raise NameUnavailableError(f"Name {main_name!r} is already taken")
        if alias is not None:
            check_name_len(alias, self.params, field="alias")
        if len(contracts) > self.params.max_contracts:
            raise CapacityExceededError(
                f"{len(contracts)} contracts given, "
                f"at most {self.params.max_contracts} allowed"
            )

        hashed_assets = checked_hash_assets(assets, self.params)
        unique_genres = checked_genres(genres, self.params)

        return Artist(
            owner=owner,
            registered_at=self.clock.now(),
            main_name=main_name,
            alias=alias,
            genres=unique_genres,
            description=None if description is None else fingerprint(description),
            assets=hashed_assets,
            contracts=tuple(contracts),
        )

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, owner: str, update: UpdatableData) -> Artist:
        """Apply one field update to ``owner``'s record and return the result.

        The stored record is replaced only if the whole update validates.
        """
        with self._lock:
            current = self.store.get(owner)
            try:
                if current is None:
                    raise NotRegisteredError(f"{owner!r} is not registered as an artist")
                updated = apply_update(current, update, self.params)
            except ArtistRegistryError as exc:
                logger.debug("update(%s, %s) rejected: %s", owner, update.kind, exc.code)
                raise

            self.store.replace(updated)
            self.events.deposit_event(
                ArtistUpdated(owner=owner, update=update, block_number=self.clock.now())
            )
            logger.info("Updated artist %s: %s", owner, update.kind)
            return updated

    # ------------------------------------------------------------------
    # Unregister
    # ------------------------------------------------------------------

    def can_unregister(self, owner: str) -> Artist:
        """Return the record if ``owner`` may unregister now, else raise.

        Checked in order: registered, not verified, cooldown elapsed (the
        boundary block itself is allowed).
        """
        artist = self.store.get(owner)
        if artist is None:
            raise NotRegisteredError(f"{owner!r} is not registered as an artist")
        if artist.is_verified:
            raise IsVerifiedError(f"{owner!r} is verified and can't unregister")

        elapsed = self.clock.now() - artist.registered_at
        if elapsed < self.params.unregister_period:
            raise PeriodNotPassedError(
                f"{elapsed} of {self.params.unregister_period} blocks elapsed "
                f"since registration"
            )
        return artist

    def unregister(self, owner: str) -> None:
        """Release the deposit and remove ``owner``'s record from both indices."""
        with self._lock:
            try:
                artist = self.can_unregister(owner)
            except ArtistRegistryError as exc:
                logger.debug("unregister(%s) rejected: %s", owner, exc.code)
                raise

            missing = self.currency.unreserve(owner, self.params.base_deposit)
            if missing:
                logger.warning(
                    "Deposit of %s was short by %d on release", owner, missing
                )
            self.store.remove(owner)
            self.events.deposit_event(
                ArtistUnregistered(owner=owner, block_number=self.clock.now())
            )
            logger.info("Unregistered artist %r (%s)", artist.main_name, owner)
