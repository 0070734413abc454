"""Request bodies for the HTTP adapter.

Fields are loose (mostly optional strings) so that the
registry's own validation produces the error messages callers see.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class CreateAssetBody(_Body):
    title: str | None = None
    description: str | None = ""
    asset_type: str | None = None
    creator_id: str | None = None
    content_hash: str | None = None
    metadata: dict[str, Any] | None = None


class TransferBody(_Body):
    from_id: str | None = None
    to_id: str | None = None
    transfer_type: str | None = None


class MetadataBody(_Body):
    creator_id: str | None = None
    metadata: dict[str, Any] | None = None


class ActorBody(_Body):
    creator_id: str | None = None


class HealthResponse(BaseModel):
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Package version")
    storage: str = Field(..., description="Backing store kind")
