"""artistledger data models — all Pydantic v2, all frozen (immutable)."""

from artistledger.models.artist import Artist
from artistledger.models.config import RegistryParams
from artistledger.models.events import (
    ArtistEvent,
    ArtistRegistered,
    ArtistUnregistered,
    ArtistUpdated,
    EventKind,
    EventRecord,
)
from artistledger.models.genres import GENRE_SUBTYPES, GenreFamily, MusicGenre
from artistledger.models.updates import (
    AssetsAdd,
    AssetsClear,
    AssetsRemove,
    DescriptionSet,
    GenresAdd,
    GenresClear,
    GenresRemove,
    SetAlias,
    UpdatableData,
    UpdateKind,
    parse_update,
)

__all__ = [
    # artist
    "Artist",
    # config
    "RegistryParams",
    # genres
    "GenreFamily",
    "MusicGenre",
    "GENRE_SUBTYPES",
    # updates
    "UpdateKind",
    "UpdatableData",
    "SetAlias",
    "GenresAdd",
    "GenresRemove",
    "GenresClear",
    "DescriptionSet",
    "AssetsAdd",
    "AssetsRemove",
    "AssetsClear",
    "parse_update",
    # events
    "EventKind",
    "ArtistEvent",
    "ArtistRegistered",
    "ArtistUnregistered",
    "ArtistUpdated",
    "EventRecord",
]
