"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and ARTISTLEDGER_* environment variables. The
registry constants (deposit, cooldown, capacity bounds) are configuration,
never hard-coded in the registry itself.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from artistledger.models.config import RegistryParams


class RegistrySettings(BaseSettings):
    """Registry configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export ARTISTLEDGER_STATE_PATH=/data/state.db
        export ARTISTLEDGER_UNREGISTER_PERIOD=100
        export ARTISTLEDGER_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARTISTLEDGER_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Storage
    state_path: Path = Path(".artistledger/state.db")

    # Registry constants
    base_deposit: int = 5
    unregister_period: int = 10
    max_name_len: int = 64
    max_genres: int = 5
    max_assets: int = 32
    max_contracts: int = 2048
    strict_asset_uniqueness: bool = False

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    def registry_params(self) -> RegistryParams:
        """Build the frozen constants consumed by the registry core."""
        return RegistryParams(
            base_deposit=self.base_deposit,
            unregister_period=self.unregister_period,
            max_name_len=self.max_name_len,
            max_genres=self.max_genres,
            max_assets=self.max_assets,
            max_contracts=self.max_contracts,
            strict_asset_uniqueness=self.strict_asset_uniqueness,
        )

