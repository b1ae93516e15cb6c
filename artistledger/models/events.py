"""Registry events — append-only, observable by external subscribers."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from artistledger.models.updates import UpdatableData


class EventKind(str, Enum):
    """The three registry events; values match each event's ``kind``."""

    ARTIST_REGISTERED = "artist_registered"
    ARTIST_UNREGISTERED = "artist_unregistered"
    ARTIST_UPDATED = "artist_updated"


class ArtistEventBase(BaseModel):
    """Fields shared by every registry event."""

    model_config = ConfigDict(
        frozen=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    owner: str
    block_number: int


class ArtistRegistered(ArtistEventBase):
    """A new artist got registered."""

    kind: Literal["artist_registered"] = "artist_registered"
    main_name: str


class ArtistUnregistered(ArtistEventBase):
    """An artist has been unregistered and its deposit released."""

    kind: Literal["artist_unregistered"] = "artist_unregistered"


class ArtistUpdated(ArtistEventBase):
    """An artist field was updated.

    ``update`` mirrors the variant as the caller supplied it (raw bytes
    included), not the fingerprint that ended up in the record.
    """

    kind: Literal["artist_updated"] = "artist_updated"
    update: UpdatableData


ArtistEvent = Annotated[
    Union[ArtistRegistered, ArtistUnregistered, ArtistUpdated],
    Field(discriminator="kind"),
]

_EVENT_ADAPTER: TypeAdapter[ArtistEvent] = TypeAdapter(ArtistEvent)


def parse_event(data: dict[str, Any]) -> ArtistEvent:
    """Validate a python dict into its event type."""
    return _EVENT_ADAPTER.validate_python(data)


def parse_event_json(raw: str | bytes) -> ArtistEvent:
    """Validate a JSON document into its event type."""
    return _EVENT_ADAPTER.validate_json(raw)


class EventRecord(BaseModel):
    """A sealed entry of the event ledger.

    ``entry_hash`` covers every other field, ``previous_entry_hash`` links
    to the preceding record. Together they make the log tamper-evident.
    """

    model_config = ConfigDict(frozen=True)

    sequence: int
    kind: EventKind
    owner: str
    block_number: int
    payload_json: str  # canonical event JSON
    previous_entry_hash: str = ""
    entry_hash: str = ""

    def event(self) -> ArtistEvent:
        """Decode the typed event carried by this record."""
        return parse_event_json(self.payload_json)
