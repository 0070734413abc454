"""Asset registry — the operation layer over the asset store and creator index.

The AssetRegistry wires together the KeyValueStore, AssetStore,
CreatorIndex, per-asset locks and the rate limiter, and implements the
create / read / list / transfer / update / revoke / delete operations.

Every mutating operation:
1. Takes the per-asset lock for the whole read-modify-write.
2. Resolves the asset (``AssetNotFoundError``).
3. Authorizes the actor against the *current* owner (``UnauthorizedError``).
4. Checks the status transition (``InvalidStateError``).
5. Writes a fresh copy of the asset inside a store transaction.

Nothing is written until all checks pass, so a failed call leaves state
untouched.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from assetregistry.config import RegistryConfig, enforce_production_constraints
from assetregistry.core.asset_store import AssetStore
from assetregistry.core.consistency import verify_index_consistency
from assetregistry.core.creator_index import CreatorIndex
from assetregistry.core.errors import (
    AssetNotFoundError,
    InvalidInputError,
    InvalidStateError,
    RateLimitedError,
    UnauthorizedError,
)
from assetregistry.core.kv_store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from assetregistry.core.locks import KeyedLock
from assetregistry.core.rate_limiter import FixedWindowRateLimiter
from assetregistry.core.validation import is_uuid, validate_registration
from assetregistry.models.assets import (
    VALID_STATUS_TRANSITIONS,
    AssetMetadata,
    AssetPage,
    AssetStatus,
    AssetType,
    DeleteResult,
    DigitalAsset,
    MetadataUpdate,
    Transfer,
    TransferType,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AssetRegistry:
    """Central registry service.

    Parameters
    ----------
    kv:
        Backing key-value store. When omitted, one is opened from
        ``config`` (SQLite at ``config.db_path``, or in-memory when
        ``config.in_memory`` is set).
    config:
        Registry configuration. Uses defaults if not provided.
    clock:
        Wall-clock source for ``registration_date``, ``last_modified`` and
        transfer dates. Defaults to UTC now.
    rate_limiter:
        Per-creator throttle for ``create_asset``. Built from ``config``
        when omitted; ``None`` if ``config.rate_limit_enabled`` is false.
    """

    def __init__(
        self,
        kv: KeyValueStore | None = None,
        *,
        config: RegistryConfig | None = None,
        clock: Callable[[], datetime] | None = None,
        rate_limiter: FixedWindowRateLimiter | None = None,
    ) -> None:
        self.config = config or RegistryConfig()

        # Fails hard if production constraints are violated
        enforce_production_constraints(self.config)

        if kv is None:
            kv = (
                InMemoryKeyValueStore()
                if self.config.in_memory
                else SQLiteKeyValueStore(self.config.db_path)
            )
        self.kv = kv
        self.assets = AssetStore(kv)
        self.creator_index = CreatorIndex(kv)

        self._clock = clock or utc_now
        self._asset_locks = KeyedLock()

        if rate_limiter is None and self.config.rate_limit_enabled:
            rate_limiter = FixedWindowRateLimiter(
                limit=self.config.rate_limit_requests,
                window_seconds=self.config.rate_limit_window_seconds,
            )
        self._rate_limiter = rate_limiter

    def close(self) -> None:
        self.kv.close()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_asset(
        self,
        title: str,
        description: str,
        asset_type: AssetType | str,
        creator_id: str,
        content_hash: str,
        metadata: AssetMetadata | dict[str, Any],
    ) -> DigitalAsset:
        """Register a new asset owned by ``creator_id``.

        Raises ``RateLimitedError`` if the creator's quota is spent and
        ``InvalidInputError`` if any field is malformed.
        """
        if self._rate_limiter is not None and not self._rate_limiter.allow(
            str(creator_id)
        ):
            raise RateLimitedError("Too many requests")

        parsed_type, parsed_metadata = validate_registration(
            title, creator_id, content_hash, asset_type, metadata
        )
        if description is not None and not isinstance(description, str):
            raise InvalidInputError("Invalid description")

        now = self._clock()
        asset = DigitalAsset(
            id=str(uuid.uuid4()),
            title=title,
            description=description or "",
            asset_type=parsed_type,
            creator_id=creator_id,
            content_hash=content_hash,
            registration_date=now,
            last_modified=now,
            transfer_history=[],
            status=AssetStatus.ACTIVE,
            metadata=parsed_metadata,
        )

        with self.kv.transaction():
            self.assets.create(asset)
            self.creator_index.add_asset(creator_id, asset.id)

        logger.info("Asset created: %s (creator=%s)", asset.id, creator_id)
        return asset

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_asset(self, asset_id: str) -> DigitalAsset:
        """Return the asset at ``asset_id``. Public: no authorization."""
        asset = self.assets.get(asset_id)
        if asset is None:
            raise AssetNotFoundError("Asset not found")
        return asset

    def get_assets_by_creator(
        self,
        creator_id: str,
        page: int = 1,
        limit: int | None = None,
    ) -> AssetPage:
        """Return one page of the assets ``creator_id`` currently owns.

        ``total`` counts every id in the creator's index entry. Ids that
        no longer resolve are dropped from the page. ``limit`` is clamped
        to ``config.max_page_limit``.
        """
        if limit is None:
            limit = self.config.default_page_limit
        if page < 1:
            raise InvalidInputError("page must be at least 1")
        if limit < 1:
            raise InvalidInputError("limit must be at least 1")
        limit = min(limit, self.config.max_page_limit)

        asset_ids = self.creator_index.list_asset_ids(creator_id)
        start = (page - 1) * limit
        assets: list[DigitalAsset] = []
        for asset_id in asset_ids[start:start + limit]:
            asset = self.assets.get(asset_id)
            if asset is None:
                logger.warning(
                    "Creator index for %s lists missing asset %s", creator_id, asset_id
                )
                continue
            assets.append(asset)

        return AssetPage(assets=assets, total=len(asset_ids), page=page, limit=limit)

    def is_authorized(self, asset_id: str, actor_id: str) -> bool:
        """Whether ``actor_id`` currently owns ``asset_id``."""
        asset = self.assets.get(asset_id)
        return asset is not None and asset.creator_id == actor_id

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def transfer_asset(
        self,
        asset_id: str,
        from_id: str,
        to_id: str,
        transfer_type: TransferType | str,
    ) -> DigitalAsset:
        """Record a transfer; a FULL transfer also moves ownership.

        Only ACTIVE assets can be transferred. A FULL transfer leaves the
        asset TRANSFERRED, so it cannot be transferred again.
        """
        try:
            parsed_type = TransferType(transfer_type)
        except ValueError:
            raise InvalidInputError("Invalid transfer type") from None
        if not is_uuid(to_id):
            raise InvalidInputError("Invalid recipient ID")

        with self._asset_locks.hold(asset_id):
            asset = self._load_authorized(asset_id, from_id)
            if asset.status != AssetStatus.ACTIVE:
                raise InvalidStateError("Asset is not available for transfer")

            now = self._clock()
            transfer = Transfer(
                id=str(uuid.uuid4()),
                from_id=asset.creator_id,
                to_id=to_id,
                transfer_date=now,
                transfer_type=parsed_type,
            )
            history = [*asset.transfer_history, transfer]

            if parsed_type == TransferType.FULL:
                updated = asset.model_copy(
                    update={
                        "transfer_history": history,
                        "status": AssetStatus.TRANSFERRED,
                        "creator_id": to_id,
                        "last_modified": now,
                    }
                )
                # New owner first: a reader may briefly see the asset under
                # both creators, never under neither.
                with self.kv.transaction():
                    self.creator_index.add_asset(to_id, asset.id)
                    self.assets.put(updated)
                    if to_id != asset.creator_id:
                        self.creator_index.remove_asset(asset.creator_id, asset.id)
            else:
                updated = asset.model_copy(
                    update={"transfer_history": history, "last_modified": now}
                )
                self.assets.put(updated)

        logger.info(
            "Asset transferred: %s (%s %s -> %s)",
            asset_id, parsed_type.value, asset.creator_id, to_id,
        )
        return updated

    def update_asset_metadata(
        self,
        asset_id: str,
        creator_id: str,
        metadata: MetadataUpdate | dict[str, Any],
    ) -> DigitalAsset:
        """Shallow-merge the supplied metadata fields over the stored ones."""
        update = self._parse_metadata_update(metadata)

        with self._asset_locks.hold(asset_id):
            asset = self._load_authorized(asset_id, creator_id)
            if (
                self.config.strict_metadata_updates
                and asset.status != AssetStatus.ACTIVE
            ):
                raise InvalidStateError(
                    f"Cannot update metadata of a {asset.status.value} asset"
                )
            try:
                merged = update.merge_into(asset.metadata)
            except ValueError as exc:
                raise InvalidInputError(f"Invalid metadata: {exc}") from exc
            updated = asset.model_copy(
                update={"metadata": merged, "last_modified": self._clock()}
            )
            self.assets.put(updated)

        logger.info("Asset metadata updated: %s", asset_id)
        return updated

    def revoke_asset(self, asset_id: str, creator_id: str) -> DigitalAsset:
        """Mark the asset REVOKED. Fails if already revoked or deleted."""
        with self._asset_locks.hold(asset_id):
            asset = self._load_authorized(asset_id, creator_id)
            if asset.status == AssetStatus.REVOKED:
                raise InvalidStateError("Asset is already revoked")
            self._check_transition(asset, AssetStatus.REVOKED)
            updated = asset.model_copy(
                update={"status": AssetStatus.REVOKED, "last_modified": self._clock()}
            )
            self.assets.put(updated)

        logger.info("Asset revoked: %s", asset_id)
        return updated

    def delete_asset(self, asset_id: str, creator_id: str) -> DeleteResult:
        """Soft-delete the asset. Repeating the call succeeds."""
        with self._asset_locks.hold(asset_id):
            asset = self._load_authorized(asset_id, creator_id)
            self._check_transition(asset, AssetStatus.DELETED)
            updated = asset.model_copy(
                update={"status": AssetStatus.DELETED, "last_modified": self._clock()}
            )
            self.assets.put(updated)

        logger.info("Asset deleted: %s", asset_id)
        return DeleteResult(asset_id=asset_id)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def verify_consistency(self) -> list[str]:
        """Cross-check the creator index against the asset store."""
        return verify_index_consistency(self.assets, self.creator_index)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load_authorized(self, asset_id: str, actor_id: str) -> DigitalAsset:
        asset = self.assets.get(asset_id)
        if asset is None:
            raise AssetNotFoundError("Asset not found")
        if asset.creator_id != actor_id:
            raise UnauthorizedError("Unauthorized")
        return asset

    @staticmethod
    def _check_transition(asset: DigitalAsset, target: AssetStatus) -> None:
        allowed = VALID_STATUS_TRANSITIONS.get(asset.status, set())
        if target not in allowed:
            raise InvalidStateError(
                f"Cannot move asset from {asset.status.value} to {target.value}"
            )

    @staticmethod
    def _parse_metadata_update(metadata: Any) -> MetadataUpdate:
        if isinstance(metadata, MetadataUpdate):
            return metadata
        if not isinstance(metadata, dict):
            raise InvalidInputError("Invalid metadata")
        try:
            return MetadataUpdate.model_validate(metadata)
        except ValueError as exc:
            raise InvalidInputError(f"Invalid metadata: {exc}") from exc
