"""Update engine — applies one field-level update to an artist record.

``apply_update`` is pure: it validates against the given record and
returns a new one, or raises. The stored record is only replaced by the
caller after this returns, so no partial mutation is ever observable.

The handler table must cover every ``UpdateKind``; the module refuses to
import otherwise.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from artistledger.core.errors import (
    CapacityExceededError,
    FullError,
    NotFoundError,
    NotUniqueAssetError,
    NotUniqueGenreError,
)
from artistledger.core.hasher import fingerprint, fingerprint_many
from artistledger.models.artist import Artist
from artistledger.models.config import RegistryParams
from artistledger.models.genres import MusicGenre
from artistledger.models.updates import (
    AssetsAdd,
    AssetsRemove,
    DescriptionSet,
    GenresAdd,
    GenresRemove,
    SetAlias,
    UpdatableData,
    UpdateKind,
)


# ---------------------------------------------------------------------------
# Registration-time batch validators
# ---------------------------------------------------------------------------


def checked_genres(
    genres: Iterable[MusicGenre], params: RegistryParams
) -> tuple[MusicGenre, ...]:
    """Return the genres as a tuple, rejecting duplicates and overflow."""
    genres = tuple(genres)
    if len(genres) > params.max_genres:
        raise CapacityExceededError(
            f"{len(genres)} genres given, at most {params.max_genres} allowed"
        )
    seen: set[MusicGenre] = set()
    for genre in genres:
        if genre in seen:
            raise NotUniqueGenreError(f"Genre {genre} appears more than once")
        seen.add(genre)
    return genres


def checked_hash_assets(
    raw_assets: Sequence[bytes], params: RegistryParams
) -> tuple[str, ...]:
    """Fingerprint a batch of raw assets, rejecting duplicate fingerprints."""
    if len(raw_assets) > params.max_assets:
        raise CapacityExceededError(
            f"{len(raw_assets)} assets given, at most {params.max_assets} allowed"
        )
    hashed = fingerprint_many(raw_assets)
    seen: set[str] = set()
    for digest in hashed:
        if digest in seen:
            raise NotUniqueAssetError(f"Asset {digest} appears more than once")
        seen.add(digest)
    return tuple(hashed)


def check_name_len(value: str, params: RegistryParams, *, field: str) -> None:
    """Reject names longer than ``max_name_len`` UTF-8 bytes."""
    size = len(value.encode("utf-8"))
    if size > params.max_name_len:
        raise CapacityExceededError(
            f"{field} is {size} bytes, at most {params.max_name_len} allowed"
        )


# ---------------------------------------------------------------------------
# Per-variant handlers
# ---------------------------------------------------------------------------


def _set_alias(artist: Artist, update: SetAlias, params: RegistryParams) -> Artist:
    if update.alias is not None:
        check_name_len(update.alias, params, field="alias")
    return artist.model_copy(update={"alias": update.alias})


def _genres_add(artist: Artist, update: GenresAdd, params: RegistryParams) -> Artist:
    if len(artist.genres) >= params.max_genres:
        raise FullError(f"Artist already has {params.max_genres} genres")
    if update.genre in artist.genres:
        raise NotUniqueGenreError(f"Genre {update.genre} is already set")
    return artist.model_copy(update={"genres": artist.genres + (update.genre,)})


def _genres_remove(artist: Artist, update: GenresRemove, params: RegistryParams) -> Artist:
    genres = list(artist.genres)
    try:
        genres.remove(update.genre)
    except ValueError:
        raise NotFoundError(f"Genre {update.genre} is not set") from None
    return artist.model_copy(update={"genres": tuple(genres)})


def _genres_clear(artist: Artist, update: UpdatableData, params: RegistryParams) -> Artist:
    return artist.model_copy(update={"genres": ()})


def _description_set(
    artist: Artist, update: DescriptionSet, params: RegistryParams
) -> Artist:
    digest = None if update.description is None else fingerprint(update.description)
    return artist.model_copy(update={"description": digest})


def _assets_add(artist: Artist, update: AssetsAdd, params: RegistryParams) -> Artist:
    if len(artist.assets) >= params.max_assets:
        raise FullError(f"Artist already has {params.max_assets} assets")
    digest = fingerprint(update.asset)
    if params.strict_asset_uniqueness and digest in artist.assets:
        raise NotUniqueAssetError(f"Asset {digest} is already recorded")
    return artist.model_copy(update={"assets": artist.assets + (digest,)})


def _assets_remove(artist: Artist, update: AssetsRemove, params: RegistryParams) -> Artist:
    digest = fingerprint(update.asset)
    assets = list(artist.assets)
    try:
        assets.remove(digest)
    except ValueError:
        raise NotFoundError(f"Asset {digest} is not recorded") from None
    return artist.model_copy(update={"assets": tuple(assets)})


def _assets_clear(artist: Artist, update: UpdatableData, params: RegistryParams) -> Artist:
    return artist.model_copy(update={"assets": ()})


_Handler = Callable[[Artist, UpdatableData, RegistryParams], Artist]

_HANDLERS: dict[UpdateKind, _Handler] = {
    UpdateKind.SET_ALIAS: _set_alias,
    UpdateKind.GENRES_ADD: _genres_add,
    UpdateKind.GENRES_REMOVE: _genres_remove,
    UpdateKind.GENRES_CLEAR: _genres_clear,
    UpdateKind.DESCRIPTION_SET: _description_set,
    UpdateKind.ASSETS_ADD: _assets_add,
    UpdateKind.ASSETS_REMOVE: _assets_remove,
    UpdateKind.ASSETS_CLEAR: _assets_clear,
}

_missing = set(UpdateKind) - set(_HANDLERS)
if _missing:
    raise ImportError(
        f"Update engine has no handler for: {sorted(k.value for k in _missing)}"
    )


def apply_update(
    artist: Artist, update: UpdatableData, params: RegistryParams
) -> Artist:
    """Apply ``update`` to a working copy of ``artist`` and return it.

    Raises
    ------
    FullError
        Adding to genres or assets already at capacity.
    NotUniqueGenreError
        Adding a genre that is already set.
    NotUniqueAssetError
        Adding an asset already recorded (``strict_asset_uniqueness``).
    NotFoundError
        Removing a genre or asset that is not present.
    CapacityExceededError
        Setting an alias longer than ``max_name_len`` bytes.
    """
    handler = _HANDLERS[UpdateKind(update.kind)]
    return handler(artist, update, params)
