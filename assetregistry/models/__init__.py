"""Asset registry data models — all Pydantic v2, all frozen (immutable)."""

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

__all__ = [
    # enums
    "AssetType",
    "AssetStatus",
    "TransferType",
    "VALID_STATUS_TRANSITIONS",
    # records
    "AssetMetadata",
    "MetadataUpdate",
    "Transfer",
    "DigitalAsset",
    # results
    "AssetPage",
    "DeleteResult",
]
