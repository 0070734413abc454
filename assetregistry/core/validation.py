"""Field-level checks for asset registration requests."""

from __future__ import annotations

import re
from typing import Any

from assetregistry.core.errors import InvalidInputError
from assetregistry.models.assets import AssetMetadata, AssetType

MAX_TITLE_LENGTH = 100

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_CONTENT_HASH_RE = re.compile(r"^[a-fA-F0-9]{64}$")


def is_uuid(value: Any) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.match(value))


def is_content_hash(value: Any) -> bool:
    return isinstance(value, str) and bool(_CONTENT_HASH_RE.match(value))


def validate_registration(
    title: Any,
    creator_id: Any,
    content_hash: Any,
    asset_type: Any,
    metadata: Any,
) -> tuple[AssetType, AssetMetadata]:
    """Check a registration request, returning the coerced type and metadata.

    Raises ``InvalidInputError`` naming the first offending field.
    """
    if not title or not isinstance(title, str) or len(title) > MAX_TITLE_LENGTH:
        raise InvalidInputError("Invalid title")
    if not is_uuid(creator_id):
        raise InvalidInputError("Invalid creator ID")
    if not is_content_hash(content_hash):
        raise InvalidInputError("Invalid content hash")

    try:
        parsed_type = AssetType(asset_type)
    except ValueError:
        raise InvalidInputError("Invalid asset type") from None

    if isinstance(metadata, AssetMetadata):
        return parsed_type, metadata
    if not isinstance(metadata, dict):
        raise InvalidInputError("Invalid metadata")
    try:
        parsed_metadata = AssetMetadata.model_validate(metadata)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid metadata: {exc}") from exc
    return parsed_type, parsed_metadata
