"""Asset store — asset id -> DigitalAsset.

The sole writer of asset state. Every mutation is a full overwrite of a
copy produced by the caller (copy-modify-write). There is no delete
method: removal is expressed as ``AssetStatus.DELETED``.
"""

from __future__ import annotations

from collections.abc import Iterator

from assetregistry.core.errors import DuplicateIdError
from assetregistry.core.kv_store import ASSETS_NAMESPACE, KeyValueStore
from assetregistry.models.assets import DigitalAsset


class AssetStore:
    """Typed view over the assets namespace of a ``KeyValueStore``.

    Parameters
    ----------
    kv:
        The shared key-value store.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def create(self, asset: DigitalAsset) -> DigitalAsset:
        """Insert a new record keyed by ``asset.id``.

        Raises ``DuplicateIdError`` if the id is already taken.
        """
        with self._kv.transaction():
            if self._kv.get(ASSETS_NAMESPACE, asset.id) is not None:
                raise DuplicateIdError(f"Asset id already exists: {asset.id}")
            self._kv.insert(ASSETS_NAMESPACE, asset.id, asset.model_dump_json())
        return asset

    def get(self, asset_id: str) -> DigitalAsset | None:
        """Return the asset, or ``None`` if no record exists."""
        raw = self._kv.get(ASSETS_NAMESPACE, asset_id)
        if raw is None:
            return None
        return DigitalAsset.model_validate_json(raw)

    def put(self, asset: DigitalAsset) -> DigitalAsset:
        """Overwrite the record at ``asset.id`` with ``asset``."""
        self._kv.insert(ASSETS_NAMESPACE, asset.id, asset.model_dump_json())
        return asset

    def iter_ids(self) -> Iterator[str]:
        """Yield every stored asset id in key order."""
        yield from self._kv.keys(ASSETS_NAMESPACE)

    def count(self) -> int:
        return len(self._kv.keys(ASSETS_NAMESPACE))
