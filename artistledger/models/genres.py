"""Music genre catalogue.

A genre is a family plus an optional subtype drawn from that family's
catalogue, e.g. ``electronic/house`` or plain ``jazz``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class GenreFamily(str, Enum):
    """Top-level music genre families."""

    ELECTRONIC = "electronic"
    ROCK = "rock"
    POP = "pop"
    HIP_HOP = "hip_hop"
    JAZZ = "jazz"
    CLASSICAL = "classical"
    BLUES = "blues"
    COUNTRY = "country"
    FOLK = "folk"
    METAL = "metal"
    REGGAE = "reggae"
    RNB = "rnb"
    WORLD = "world"


GENRE_SUBTYPES: dict[GenreFamily, frozenset[str]] = {
    GenreFamily.ELECTRONIC: frozenset({
        "house", "techno", "trance", "drum_and_bass", "dubstep",
        "ambient", "electro", "garage", "hardstyle", "idm",
    }),
    GenreFamily.ROCK: frozenset({
        "alternative", "indie", "punk", "progressive", "psychedelic",
        "hard_rock", "grunge", "post_rock",
    }),
    GenreFamily.POP: frozenset({"synth_pop", "dance_pop", "k_pop", "indie_pop"}),
    GenreFamily.HIP_HOP: frozenset({"trap", "boom_bap", "drill", "lo_fi"}),
    GenreFamily.JAZZ: frozenset({"bebop", "swing", "fusion", "smooth", "free"}),
    GenreFamily.CLASSICAL: frozenset({"baroque", "romantic", "contemporary", "opera"}),
    GenreFamily.BLUES: frozenset({"delta", "chicago", "electric"}),
    GenreFamily.COUNTRY: frozenset({"bluegrass", "americana", "outlaw"}),
    GenreFamily.FOLK: frozenset({"traditional", "contemporary"}),
    GenreFamily.METAL: frozenset({"heavy", "thrash", "death", "black", "doom"}),
    GenreFamily.REGGAE: frozenset({"roots", "dub", "dancehall"}),
    GenreFamily.RNB: frozenset({"soul", "funk", "neo_soul"}),
    GenreFamily.WORLD: frozenset({"afrobeat", "latin", "celtic"}),
}


class MusicGenre(BaseModel):
    """A genre tag. Frozen, hence hashable and usable in set checks."""

    model_config = ConfigDict(frozen=True)

    family: GenreFamily
    subtype: str | None = None

    @model_validator(mode="after")
    def _subtype_in_family(self) -> MusicGenre:
        if self.subtype is not None and self.subtype not in GENRE_SUBTYPES[self.family]:
            raise ValueError(
                f"Unknown subtype {self.subtype!r} for genre family {self.family.value!r}"
            )
        return self

    @classmethod
    def parse(cls, text: str) -> MusicGenre:
        """Parse the ``family[/subtype]`` text form."""
        family, _, subtype = text.strip().lower().partition("/")
        return cls(family=GenreFamily(family), subtype=subtype or None)

    def __str__(self) -> str:
        if self.subtype is None:
            return self.family.value
        return f"{self.family.value}/{self.subtype}"
