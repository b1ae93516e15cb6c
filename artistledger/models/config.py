"""Registry constants consumed by the core."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegistryParams(BaseModel):
    """Deposit, cooldown and capacity bounds for one registry instance."""

    model_config = ConfigDict(frozen=True)

    base_deposit: int = Field(default=5, ge=0)
    unregister_period: int = Field(default=10, ge=0)  # in blocks
    max_name_len: int = Field(default=64, ge=1)  # UTF-8 bytes
    max_genres: int = Field(default=5, ge=0)
    max_assets: int = Field(default=32, ge=0)
    max_contracts: int = Field(default=2048, ge=0)
    # When True, AssetsAdd also rejects a fingerprint already recorded.
    strict_asset_uniqueness: bool = False
