"""Tests for registry config — env-driven settings."""

from __future__ import annotations

from pathlib import Path

from assetregistry.config import RegistryConfig


class TestRegistryConfig:
    def test_defaults(self):
        config = RegistryConfig()
        assert config.environment == "development"
        assert config.log_level == "INFO"
        assert config.rate_limit_enabled is True
        assert config.rate_limit_requests == 10
        assert config.rate_limit_window_seconds == 60.0
        assert config.default_page_limit == 10
        assert config.max_page_limit == 100
        assert config.strict_metadata_updates is False

    def test_is_production_false_by_default(self):
        config = RegistryConfig()
        assert config.is_production is False

    def test_is_production_when_set(self):
        config = RegistryConfig(environment="production")
        assert config.is_production is True

    def test_default_paths(self):
        config = RegistryConfig()
        assert config.db_path == Path(".assetregistry/registry.db")
        assert config.in_memory is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ASSETREGISTRY_RATE_LIMIT_REQUESTS", "25")
        monkeypatch.setenv("ASSETREGISTRY_DB_PATH", "/data/assets.db")
        monkeypatch.setenv("ASSETREGISTRY_STRICT_METADATA_UPDATES", "true")
        config = RegistryConfig()
        assert config.rate_limit_requests == 25
        assert config.db_path == Path("/data/assets.db")
        assert config.strict_metadata_updates is True
