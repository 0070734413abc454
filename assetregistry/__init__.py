"""Asset Registry: ownership, transfer history and metadata for digital assets.

Each asset carries the SHA-256 hash of its content and tracks its
current owner, an append-only transfer history and a lifecycle status
(ACTIVE, TRANSFERRED, REVOKED, DELETED). A creator index maps every owner
to the assets they currently hold.
"""

__version__ = "0.1.0"

from assetregistry.core.registry import AssetRegistry

__all__ = ["AssetRegistry", "__version__"]
