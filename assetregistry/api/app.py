"""FastAPI adapter — maps HTTP requests onto AssetRegistry operations.

Routes
------
- ``POST   /assets``                    register an asset
- ``GET    /assets/{asset_id}``         fetch one asset
- ``GET    /creators/{creator_id}/assets?page=&limit=``
- ``POST   /assets/{asset_id}/transfer``
- ``PUT    /assets/{asset_id}/metadata``
- ``POST   /assets/{asset_id}/revoke``
- ``DELETE /assets/{asset_id}``         soft delete
- ``GET    /health``

Registry errors become ``{"error": message}`` with the error's status
code. Anything else is logged and reported as a generic 500.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from assetregistry import __version__
from assetregistry.api.schemas import (
    ActorBody,
    CreateAssetBody,
    HealthResponse,
    MetadataBody,
    TransferBody,
)
from assetregistry.config import RegistryConfig
from assetregistry.core.errors import RegistryError
from assetregistry.core.kv_store import SQLiteKeyValueStore
from assetregistry.core.registry import AssetRegistry

logger = logging.getLogger(__name__)


def create_app(
    registry: AssetRegistry | None = None,
    config: RegistryConfig | None = None,
) -> FastAPI:
    """Build the HTTP application around ``registry``.

    When no registry is given, one is constructed from ``config``.
    """
    registry = registry or AssetRegistry(config=config)

    app = FastAPI(
        title="Digital Asset Registry",
        description="Ownership, transfer history and metadata for digital assets",
        version=__version__,
    )
    app.state.registry = registry

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @app.exception_handler(RegistryError)
    async def _registry_error(request: Request, exc: RegistryError) -> JSONResponse:
        logger.error(
            "%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.kind
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        storage = "sqlite" if isinstance(registry.kv, SQLiteKeyValueStore) else "memory"
        return HealthResponse(status="ok", version=__version__, storage=storage)

    @app.post("/assets")
    def create_asset(body: CreateAssetBody) -> dict[str, Any]:
        asset = registry.create_asset(
            title=body.title,
            description=body.description,
            asset_type=body.asset_type,
            creator_id=body.creator_id,
            content_hash=body.content_hash,
            metadata=body.metadata,
        )
        return asset.to_wire()

    @app.get("/assets/{asset_id}")
    def get_asset(asset_id: str) -> dict[str, Any]:
        return registry.get_asset(asset_id).to_wire()

    @app.get("/creators/{creator_id}/assets")
    def get_assets_by_creator(
        creator_id: str,
        page: int = Query(1),
        limit: int | None = Query(None),
    ) -> dict[str, Any]:
        result = registry.get_assets_by_creator(creator_id, page=page, limit=limit)
        return result.model_dump(mode="json", by_alias=True)

    @app.post("/assets/{asset_id}/transfer")
    def transfer_asset(asset_id: str, body: TransferBody) -> dict[str, Any]:
        asset = registry.transfer_asset(
            asset_id, body.from_id, body.to_id, body.transfer_type
        )
        return asset.to_wire()

    @app.put("/assets/{asset_id}/metadata")
    def update_metadata(asset_id: str, body: MetadataBody) -> dict[str, Any]:
        asset = registry.update_asset_metadata(asset_id, body.creator_id, body.metadata)
        return asset.to_wire()

    @app.post("/assets/{asset_id}/revoke")
    def revoke_asset(asset_id: str, body: ActorBody) -> dict[str, Any]:
        return registry.revoke_asset(asset_id, body.creator_id).to_wire()

    @app.delete("/assets/{asset_id}")
    def delete_asset(asset_id: str, body: ActorBody) -> dict[str, Any]:
        result = registry.delete_asset(asset_id, body.creator_id)
        return {"message": result.message}

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Reduce FastAPI validation errors to location + message pairs."""
    return [
        {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
