"""Digital asset models — the records held by the registry.

All models are frozen. Mutations produce a new instance via
``model_copy(update=...)`` and are persisted with a full overwrite.
Wire names follow the camelCase layout of the public API
(``creatorId``, ``contentHash``, ``transferHistory``, ...).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AssetType(str, Enum):
    """Kind of content an asset represents. Fixed at creation."""

    IMAGE = "IMAGE"
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"
    CODE = "CODE"


class AssetStatus(str, Enum):
    """Lifecycle status of an asset."""

    ACTIVE = "ACTIVE"
    TRANSFERRED = "TRANSFERRED"
    REVOKED = "REVOKED"
    DELETED = "DELETED"


class TransferType(str, Enum):
    """FULL moves ownership; LICENSE only records an audit entry."""

    FULL = "FULL"
    LICENSE = "LICENSE"


# Valid status transitions, enforced by AssetRegistry.
# DELETED only permits an idempotent re-delete.
VALID_STATUS_TRANSITIONS: dict[AssetStatus, set[AssetStatus]] = {
    AssetStatus.ACTIVE: {
        AssetStatus.TRANSFERRED,
        AssetStatus.REVOKED,
        AssetStatus.DELETED,
    },
    AssetStatus.TRANSFERRED: {AssetStatus.REVOKED, AssetStatus.DELETED},
    AssetStatus.REVOKED: {AssetStatus.DELETED},
    AssetStatus.DELETED: {AssetStatus.DELETED},
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class AssetMetadata(_WireModel):
    """Descriptive metadata about the asset's file.

    ``dimensions`` applies to images and video, ``duration`` (seconds)
    to audio and video.
    """

    file_format: str
    file_size: int = Field(ge=0)
    dimensions: str | None = None
    duration: float | None = None
    additional_tags: list[str] = Field(default_factory=list)


class MetadataUpdate(_WireModel):
    """Partial metadata payload for a shallow merge.

    Only fields explicitly supplied by the caller overwrite the stored
    values; omitted fields are retained.
    """

    file_format: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    dimensions: str | None = None
    duration: float | None = None
    additional_tags: list[str] | None = None

    def merge_into(self, current: AssetMetadata) -> AssetMetadata:
        """Return ``current`` with every supplied field of this update applied.

        The merged result is validated as a whole, so an explicit ``None``
        for a required field raises ``ValidationError``.
        """
        merged = {**current.model_dump(), **self.model_dump(exclude_unset=True)}
        return AssetMetadata.model_validate(merged)


class Transfer(_WireModel):
    """Immutable audit record of an ownership or license change."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    from_id: str
    to_id: str
    transfer_date: datetime = Field(default_factory=_utc_now)
    transfer_type: TransferType


class DigitalAsset(_WireModel):
    """A registered digital asset.

    ``content_hash`` and ``asset_type`` never change after creation.
    ``creator_id`` changes only through a FULL transfer, and
    ``transfer_history`` is append-only.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    description: str = ""
    asset_type: AssetType
    creator_id: str
    content_hash: str
    registration_date: datetime = Field(default_factory=_utc_now)
    last_modified: datetime = Field(default_factory=_utc_now)
    transfer_history: list[Transfer] = Field(default_factory=list)
    status: AssetStatus = AssetStatus.ACTIVE
    metadata: AssetMetadata

    def to_wire(self) -> dict:
        """JSON-compatible dict using the public camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)


class AssetPage(_WireModel):
    """One page of a creator's assets.

    ``total`` is the creator's full asset count, independent of paging.
    """

    assets: list[DigitalAsset]
    total: int
    page: int
    limit: int


class DeleteResult(_WireModel):
    """Confirmation returned by a soft delete."""

    message: str = "Asset deleted successfully"
    asset_id: str
