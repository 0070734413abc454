"""HTTP adapter for the asset registry (FastAPI)."""

from assetregistry.api.app import create_app

__all__ = ["create_app"]
