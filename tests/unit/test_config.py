"""Tests for env-driven settings."""

from __future__ import annotations

from pathlib import Path

from artistledger.config import RegistrySettings
from artistledger.models.config import RegistryParams


class TestRegistrySettings:
    def test_defaults(self):
        config = RegistrySettings(_env_file=None)
        assert config.environment == "development"
        assert config.log_level == "INFO"
        assert config.state_path == Path(".artistledger/state.db")
        assert config.base_deposit == 5
        assert config.unregister_period == 10
        assert config.strict_asset_uniqueness is False

    def test_is_production(self):
        assert RegistrySettings(_env_file=None).is_production is False
        assert RegistrySettings(_env_file=None, environment="production").is_production is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ARTISTLEDGER_UNREGISTER_PERIOD", "100")
        monkeypatch.setenv("ARTISTLEDGER_STRICT_ASSET_UNIQUENESS", "true")
        config = RegistrySettings(_env_file=None)
        assert config.unregister_period == 100
        assert config.strict_asset_uniqueness is True

    def test_registry_params(self):
        params = RegistrySettings(_env_file=None, max_genres=3, base_deposit=7).registry_params()
        assert isinstance(params, RegistryParams)
        assert params.max_genres == 3
        assert params.base_deposit == 7
        assert params.max_assets == 32
