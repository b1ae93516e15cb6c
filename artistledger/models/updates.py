"""Field-level update variants for an artist record.

``UpdatableData`` is a closed tagged union: every variant carries a
``kind`` literal and pydantic dispatches on it when validating wire input.
Exactly one field is touched per update.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from artistledger.models.genres import MusicGenre


class UpdateKind(str, Enum):
    """The eight update variants; values match each variant's ``kind``."""

    SET_ALIAS = "set_alias"
    GENRES_ADD = "genres_add"
    GENRES_REMOVE = "genres_remove"
    GENRES_CLEAR = "genres_clear"
    DESCRIPTION_SET = "description_set"
    ASSETS_ADD = "assets_add"
    ASSETS_REMOVE = "assets_remove"
    ASSETS_CLEAR = "assets_clear"


class UpdateBase(BaseModel):
    """Shared config: frozen, raw bytes travel as base64 in JSON."""

    model_config = ConfigDict(
        frozen=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )


class SetAlias(UpdateBase):
    """Replace the alias, or clear it with ``None``."""

    kind: Literal["set_alias"] = "set_alias"
    alias: str | None = None


class GenresAdd(UpdateBase):
    kind: Literal["genres_add"] = "genres_add"
    genre: MusicGenre


class GenresRemove(UpdateBase):
    kind: Literal["genres_remove"] = "genres_remove"
    genre: MusicGenre


class GenresClear(UpdateBase):
    kind: Literal["genres_clear"] = "genres_clear"


class DescriptionSet(UpdateBase):
    """Fingerprint and store new description bytes, or clear with ``None``."""

    kind: Literal["description_set"] = "description_set"
    description: bytes | None = None


class AssetsAdd(UpdateBase):
    kind: Literal["assets_add"] = "assets_add"
    asset: bytes


class AssetsRemove(UpdateBase):
    """Remove the stored fingerprint matching these raw bytes."""

    kind: Literal["assets_remove"] = "assets_remove"
    asset: bytes


class AssetsClear(UpdateBase):
    kind: Literal["assets_clear"] = "assets_clear"


UpdatableData = Annotated[
    Union[
        SetAlias,
        GenresAdd,
        GenresRemove,
        GenresClear,
        DescriptionSet,
        AssetsAdd,
        AssetsRemove,
        AssetsClear,
    ],
    Field(discriminator="kind"),
]

_UPDATE_ADAPTER: TypeAdapter[UpdatableData] = TypeAdapter(UpdatableData)


def parse_update(data: dict[str, Any]) -> UpdatableData:
    """Validate a python dict into its update variant."""
    return _UPDATE_ADAPTER.validate_python(data)


def parse_update_json(raw: str | bytes) -> UpdatableData:
    """Validate a JSON document into its update variant."""
    return _UPDATE_ADAPTER.validate_json(raw)
