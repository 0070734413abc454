"""Cross-check the creator index against the asset store.

Every asset id must appear in exactly one index entry, the one for the
asset's current ``creator_id``. The registry maintains this on every
write; the checker exists to detect divergence after a crash or a manual
edit of the database.
"""

from __future__ import annotations

from assetregistry.core.asset_store import AssetStore
from assetregistry.core.creator_index import CreatorIndex


class IndexConsistencyError(RuntimeError):
    """Raised when the creator index and asset store disagree."""


def verify_index_consistency(
    asset_store: AssetStore, creator_index: CreatorIndex
) -> list[str]:
    """Return a list of problems — empty means consistent."""
    problems: list[str] = []
    listed_under: dict[str, list[str]] = {}

    for creator_id in creator_index.iter_creators():
        for asset_id in creator_index.list_asset_ids(creator_id):
            listed_under.setdefault(asset_id, []).append(creator_id)
            asset = asset_store.get(asset_id)
            if asset is None:
                problems.append(
                    f"Index entry for {creator_id} lists unknown asset {asset_id}"
                )
            elif asset.creator_id != creator_id:
                problems.append(
                    f"Asset {asset_id} is listed under {creator_id} "
                    f"but owned by {asset.creator_id}"
                )

    for asset_id, creators in listed_under.items():
        if len(creators) > 1:
            problems.append(
                f"Asset {asset_id} is listed under {len(creators)} creators: "
                f"{', '.join(creators)}"
            )

    for asset_id in asset_store.iter_ids():
        asset = asset_store.get(asset_id)
        if asset is not None and asset.creator_id not in listed_under.get(asset_id, []):
            problems.append(
                f"Asset {asset_id} is missing from the index entry of "
                f"its owner {asset.creator_id}"
            )

    return problems


def assert_index_consistency(
    asset_store: AssetStore, creator_index: CreatorIndex
) -> None:
    """Raise ``IndexConsistencyError`` listing every problem found."""
    problems = verify_index_consistency(asset_store, creator_index)
    if problems:
        raise IndexConsistencyError(
            "Creator index is inconsistent with the asset store.\n"
            + "\n".join(f"  - {p}" for p in problems)
        )
