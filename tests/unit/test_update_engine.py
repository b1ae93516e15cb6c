"""Tests for the update engine — one variant at a time, pure working copies."""

from __future__ import annotations

import pytest

from artistledger.core.errors import (
    CapacityExceededError,
    FullError,
    NotFoundError,
    NotUniqueAssetError,
    NotUniqueGenreError,
)
from artistledger.core.hasher import fingerprint
from artistledger.core.update_engine import (
    apply_update,
    checked_genres,
    checked_hash_assets,
)
from artistledger.models.config import RegistryParams
from artistledger.models.genres import GenreFamily, MusicGenre
from artistledger.models.updates import (
    AssetsAdd,
    AssetsClear,
    AssetsRemove,
    DescriptionSet,
    GenresAdd,
    GenresClear,
    GenresRemove,
    SetAlias,
)

FAMILIES = [
    MusicGenre(family=GenreFamily.JAZZ),
    MusicGenre(family=GenreFamily.ROCK),
    MusicGenre(family=GenreFamily.POP),
    MusicGenre(family=GenreFamily.BLUES),
    MusicGenre(family=GenreFamily.FOLK),
    MusicGenre(family=GenreFamily.METAL),
]


class TestAlias:
    def test_set_alias(self, make_artist, params):
        updated = apply_update(make_artist(alias="Dark Singer"), SetAlias(alias="new alias"), params)
        assert updated.alias == "new alias"

    def test_clear_alias(self, make_artist, params):
        updated = apply_update(make_artist(alias="Dark Singer"), SetAlias(alias=None), params)
        assert updated.alias is None

    def test_only_alias_changes(self, make_artist, params, house):
        artist = make_artist(alias="a", genres=(house,), description="d" * 64)
        updated = apply_update(artist, SetAlias(alias="b"), params)
        assert updated.model_dump(exclude={"alias"}) == artist.model_dump(exclude={"alias"})

    def test_alias_over_bound_rejected(self, make_artist):
        params = RegistryParams(max_name_len=4)
        with pytest.raises(CapacityExceededError):
            apply_update(make_artist(), SetAlias(alias="toolong"), params)

    def test_alias_bound_counts_utf8_bytes(self, make_artist):
        params = RegistryParams(max_name_len=4)
        # two characters, four bytes
        assert apply_update(make_artist(), SetAlias(alias="éé"), params).alias == "éé"
        with pytest.raises(CapacityExceededError):
            apply_update(make_artist(), SetAlias(alias="ééé"), params)


class TestGenres:
    def test_add(self, make_artist, params, house):
        updated = apply_update(make_artist(), GenresAdd(genre=house), params)
        assert updated.genres == (house,)

    def test_add_duplicate_rejected(self, make_artist, params, house):
        with pytest.raises(NotUniqueGenreError):
            apply_update(make_artist(genres=(house,)), GenresAdd(genre=house), params)

    def test_add_when_full(self, make_artist, params):
        artist = make_artist(genres=tuple(FAMILIES[:5]))
        with pytest.raises(FullError):
            apply_update(artist, GenresAdd(genre=FAMILIES[5]), params)

    def test_full_checked_before_duplicate(self, make_artist, params):
        artist = make_artist(genres=tuple(FAMILIES[:5]))
        with pytest.raises(FullError):
            apply_update(artist, GenresAdd(genre=FAMILIES[0]), params)

    def test_remove(self, make_artist, params, house):
        artist = make_artist(genres=(FAMILIES[0], house, FAMILIES[1]))
        updated = apply_update(artist, GenresRemove(genre=house), params)
        assert updated.genres == (FAMILIES[0], FAMILIES[1])

    def test_remove_missing(self, make_artist, params, house):
        with pytest.raises(NotFoundError):
            apply_update(make_artist(), GenresRemove(genre=house), params)

    def test_clear(self, make_artist, params):
        updated = apply_update(make_artist(genres=tuple(FAMILIES[:3])), GenresClear(), params)
        assert updated.genres == ()


class TestDescription:
    def test_set_stores_fingerprint(self, make_artist, params):
        updated = apply_update(make_artist(), DescriptionSet(description=b"bio"), params)
        assert updated.description == fingerprint(b"bio")

    def test_none_clears(self, make_artist, params):
        artist = make_artist(description=fingerprint(b"bio"))
        assert apply_update(artist, DescriptionSet(description=None), params).description is None


class TestAssets:
    def test_add_stores_fingerprint(self, make_artist, params):
        updated = apply_update(make_artist(), AssetsAdd(asset=b"cover"), params)
        assert updated.assets == (fingerprint(b"cover"),)

    def test_add_when_full(self, make_artist):
        params = RegistryParams(max_assets=2)
        artist = make_artist(assets=(fingerprint(b"a"), fingerprint(b"b")))
        with pytest.raises(FullError):
            apply_update(artist, AssetsAdd(asset=b"c"), params)

    def test_add_duplicate_rejected_when_strict(self, make_artist):
        params = RegistryParams(strict_asset_uniqueness=True)
        artist = make_artist(assets=(fingerprint(b"cover"),))
        with pytest.raises(NotUniqueAssetError):
            apply_update(artist, AssetsAdd(asset=b"cover"), params)

    def test_add_duplicate_allowed_by_default(self, make_artist, params):
        artist = make_artist(assets=(fingerprint(b"cover"),))
        updated = apply_update(artist, AssetsAdd(asset=b"cover"), params)
        assert updated.assets == (fingerprint(b"cover"), fingerprint(b"cover"))

    def test_remove_by_content(self, make_artist, params):
        artist = make_artist(assets=(fingerprint(b"a"), fingerprint(b"b")))
        updated = apply_update(artist, AssetsRemove(asset=b"a"), params)
        assert updated.assets == (fingerprint(b"b"),)

    def test_remove_missing(self, make_artist, params):
        with pytest.raises(NotFoundError):
            apply_update(make_artist(), AssetsRemove(asset=b"never added"), params)

    def test_add_then_remove_restores(self, make_artist, params):
        artist = make_artist(assets=(fingerprint(b"a"), fingerprint(b"b")))
        added = apply_update(artist, AssetsAdd(asset=b"x"), params)
        restored = apply_update(added, AssetsRemove(asset=b"x"), params)
        assert set(restored.assets) == set(artist.assets)

    def test_add_then_remove_restores_when_already_present(self, make_artist, params):
        artist = make_artist(assets=(fingerprint(b"x"), fingerprint(b"b")))
        added = apply_update(artist, AssetsAdd(asset=b"x"), params)
        restored = apply_update(added, AssetsRemove(asset=b"x"), params)
        assert set(restored.assets) == set(artist.assets)
        assert sorted(restored.assets) == sorted(artist.assets)

    def test_clear(self, make_artist, params):
        artist = make_artist(assets=(fingerprint(b"a"),))
        assert apply_update(artist, AssetsClear(), params).assets == ()


class TestPurity:
    def test_input_record_untouched_on_success(self, make_artist, params, house):
        artist = make_artist()
        before = artist.model_dump()
        apply_update(artist, GenresAdd(genre=house), params)
        assert artist.model_dump() == before

    def test_input_record_untouched_on_failure(self, make_artist, params):
        artist = make_artist(genres=tuple(FAMILIES[:5]))
        before = artist.model_dump()
        with pytest.raises(FullError):
            apply_update(artist, GenresAdd(genre=FAMILIES[5]), params)
        assert artist.model_dump() == before


class TestBatchValidators:
    def test_checked_genres_accepts_unique(self, params):
        assert checked_genres(FAMILIES[:3], params) == tuple(FAMILIES[:3])

    def test_checked_genres_rejects_duplicate(self, params, house):
        with pytest.raises(NotUniqueGenreError):
            checked_genres([house, FAMILIES[0], house], params)

    def test_checked_genres_rejects_overflow(self, params):
        with pytest.raises(CapacityExceededError):
            checked_genres(FAMILIES, params)

    def test_checked_hash_assets(self, params):
        assert checked_hash_assets([b"a", b"b"], params) == (fingerprint(b"a"), fingerprint(b"b"))

    def test_checked_hash_assets_rejects_duplicate(self, params):
        with pytest.raises(NotUniqueAssetError):
            checked_hash_assets([b"a", b"b", b"a"], params)

    def test_checked_hash_assets_rejects_overflow(self):
        with pytest.raises(CapacityExceededError):
            checked_hash_assets([b"a", b"b", b"c"], RegistryParams(max_assets=2))
