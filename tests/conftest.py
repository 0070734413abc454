"""Shared test fixtures for the asset registry."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from assetregistry.config import RegistryConfig
from assetregistry.core.kv_store import InMemoryKeyValueStore, SQLiteKeyValueStore
from assetregistry.core.registry import AssetRegistry
from assetregistry.models.assets import AssetType, DigitalAsset

CREATOR_1 = "11111111-1111-4111-8111-111111111111"
CREATOR_2 = "22222222-2222-4222-8222-222222222222"
CREATOR_3 = "33333333-3333-4333-8333-333333333333"
ZERO_HASH = "0" * 64


class FakeClock:
    """Deterministic wall clock; each call returns the current fake time."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class FakeMonotonic:
    """Deterministic monotonic clock (seconds) for the rate limiter."""

    def __init__(self) -> None:
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test databases."""
    return tmp_path


@pytest.fixture
def kv(tmp_dir: Path) -> SQLiteKeyValueStore:
    """Provide a fresh SQLite key-value store in a temp directory."""
    store = SQLiteKeyValueStore(tmp_dir / "registry.db")
    yield store
    store.close()


@pytest.fixture
def memory_kv() -> InMemoryKeyValueStore:
    """Provide a fresh in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def u1() -> str:
    return CREATOR_1


@pytest.fixture
def u2() -> str:
    return CREATOR_2


@pytest.fixture
def u3() -> str:
    return CREATOR_3


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def config(tmp_dir: Path) -> RegistryConfig:
    """Test configuration: temp database, rate limiting off."""
    return RegistryConfig(
        db_path=tmp_dir / "registry.db",
        rate_limit_enabled=False,
    )


@pytest.fixture
def registry(
    kv: SQLiteKeyValueStore, config: RegistryConfig, clock: FakeClock
) -> AssetRegistry:
    """Provide an AssetRegistry wired to the test store and fake clock."""
    return AssetRegistry(kv, config=config, clock=clock)


@pytest.fixture
def metadata() -> dict[str, Any]:
    return {
        "fileFormat": "png",
        "fileSize": 2048,
        "dimensions": "1920x1080",
        "additionalTags": ["art", "digital"],
    }


# ---------------------------------------------------------------------------
# Asset factory, shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_asset(
    registry: AssetRegistry, metadata: dict[str, Any]
) -> Callable[..., DigitalAsset]:
    """Factory fixture: register an asset with sensible defaults."""

    def _factory(
        creator_id: str = CREATOR_1,
        title: str = "Mona Lisa Digital",
        **overrides: Any,
    ) -> DigitalAsset:
        defaults: dict[str, Any] = {
            "title": title,
            "description": "A digital rendition",
            "asset_type": AssetType.IMAGE,
            "creator_id": creator_id,
            "content_hash": ZERO_HASH,
            "metadata": dict(metadata),
        }
        defaults.update(overrides)
        return registry.create_asset(**defaults)

    return _factory


@pytest.fixture
def asset(make_asset: Callable[..., DigitalAsset]) -> DigitalAsset:
    """Convenience: a freshly registered asset owned by CREATOR_1."""
    return make_asset()
