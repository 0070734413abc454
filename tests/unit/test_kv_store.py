"""Tests for the key-value store backends — namespaces, ordering, transactions."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetregistry.core.kv_store import (
    ASSETS_NAMESPACE,
    CREATOR_INDEX_NAMESPACE,
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)


@pytest.fixture(params=["sqlite", "memory"])
def store(request, tmp_path: Path):
    if request.param == "sqlite":
        s = SQLiteKeyValueStore(tmp_path / "kv.db")
    else:
        s = InMemoryKeyValueStore()
    yield s
    s.close()


class TestKeyValueStore:
    def test_satisfies_protocol(self, store):
        assert isinstance(store, KeyValueStore)

    def test_get_missing_returns_none(self, store):
        assert store.get(ASSETS_NAMESPACE, "nope") is None

    def test_insert_and_get(self, store):
        store.insert(ASSETS_NAMESPACE, "k", "v")
        assert store.get(ASSETS_NAMESPACE, "k") == "v"

    def test_insert_overwrites(self, store):
        store.insert(ASSETS_NAMESPACE, "k", "v1")
        store.insert(ASSETS_NAMESPACE, "k", "v2")
        assert store.get(ASSETS_NAMESPACE, "k") == "v2"

    def test_namespaces_do_not_collide(self, store):
        store.insert(ASSETS_NAMESPACE, "same", "asset")
        store.insert(CREATOR_INDEX_NAMESPACE, "same", "index")
        assert store.get(ASSETS_NAMESPACE, "same") == "asset"
        assert store.get(CREATOR_INDEX_NAMESPACE, "same") == "index"

    def test_delete(self, store):
        store.insert(ASSETS_NAMESPACE, "k", "v")
        assert store.delete(ASSETS_NAMESPACE, "k") is True
        assert store.get(ASSETS_NAMESPACE, "k") is None
        assert store.delete(ASSETS_NAMESPACE, "k") is False

    def test_keys_are_ordered_and_scoped(self, store):
        for key in ["c", "a", "b"]:
            store.insert(ASSETS_NAMESPACE, key, key)
        store.insert(CREATOR_INDEX_NAMESPACE, "z", "z")
        assert store.keys(ASSETS_NAMESPACE) == ["a", "b", "c"]
        assert store.keys(CREATOR_INDEX_NAMESPACE) == ["z"]

    def test_transaction_commits(self, store):
        with store.transaction():
            store.insert(ASSETS_NAMESPACE, "a", "1")
            store.insert(ASSETS_NAMESPACE, "b", "2")
        assert store.keys(ASSETS_NAMESPACE) == ["a", "b"]

    def test_transaction_rolls_back_on_error(self, store):
        store.insert(ASSETS_NAMESPACE, "a", "original")
        with pytest.raises(RuntimeError):
            with store.transaction():
                store.insert(ASSETS_NAMESPACE, "a", "changed")
                store.insert(ASSETS_NAMESPACE, "b", "new")
                raise RuntimeError("boom")
        assert store.get(ASSETS_NAMESPACE, "a") == "original"
        assert store.get(ASSETS_NAMESPACE, "b") is None

    def test_nested_transaction_joins_outer(self, store):
        with pytest.raises(RuntimeError):
            with store.transaction():
                with store.transaction():
                    store.insert(ASSETS_NAMESPACE, "inner", "x")
                raise RuntimeError("outer fails")
        assert store.get(ASSETS_NAMESPACE, "inner") is None


class TestSQLiteDurability:
    def test_data_survives_reopen(self, tmp_path: Path):
        path = tmp_path / "durable.db"
        first = SQLiteKeyValueStore(path)
        first.insert(ASSETS_NAMESPACE, "k", "persisted")
        first.close()

        second = SQLiteKeyValueStore(path)
        try:
            assert second.get(ASSETS_NAMESPACE, "k") == "persisted"
        finally:
            second.close()

    def test_creates_parent_directories(self, tmp_path: Path):
        path = tmp_path / "nested" / "dir" / "kv.db"
        store = SQLiteKeyValueStore(path)
        store.close()
        assert path.exists()
