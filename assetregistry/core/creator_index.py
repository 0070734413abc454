"""Creator index — creator id -> ordered list of owned asset ids.

Kept consistent with the asset store on every ownership change. Entries
that become empty are retained as empty lists; an unknown creator reads
the same as an empty one.
"""

from __future__ import annotations

import json
from collections.abc import Iterator

from assetregistry.core.kv_store import CREATOR_INDEX_NAMESPACE, KeyValueStore


class CreatorIndex:
    """Reverse mapping from owner to owned asset ids.

    ``add_asset`` and ``remove_asset`` are idempotent read-modify-writes,
    each applied inside a store transaction so concurrent
    updates to the same entry cannot lose writes.

    Parameters
    ----------
    kv:
        The shared key-value store.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def list_asset_ids(self, creator_id: str) -> list[str]:
        """Return the creator's asset ids in insertion order (empty if unknown)."""
        raw = self._kv.get(CREATOR_INDEX_NAMESPACE, creator_id)
        if raw is None:
            return []
        return list(json.loads(raw))

    def add_asset(self, creator_id: str, asset_id: str) -> None:
        """Append ``asset_id`` unless it is already listed."""
        with self._kv.transaction():
            ids = self.list_asset_ids(creator_id)
            if asset_id in ids:
                return
            ids.append(asset_id)
            self._write(creator_id, ids)

    def remove_asset(self, creator_id: str, asset_id: str) -> None:
        """Remove ``asset_id`` if listed; no error if absent."""
        with self._kv.transaction():
            ids = self.list_asset_ids(creator_id)
            if asset_id not in ids:
                return
            self._write(creator_id, [i for i in ids if i != asset_id])

    def iter_creators(self) -> Iterator[str]:
        """Yield every creator id with an index entry (including empty ones)."""
        yield from self._kv.keys(CREATOR_INDEX_NAMESPACE)

    def _write(self, creator_id: str, ids: list[str]) -> None:
        self._kv.insert(CREATOR_INDEX_NAMESPACE, creator_id, json.dumps(ids))
