from __future__ import annotations

from enum import Enum
from typing import Iterable

from .models import Asset, AssetHealth


class AssetSortOrder(str, Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


def filter_assets(
    assets: Iterable[Asset],
    *,
    search: str = "",
    asset_type: str | None = None,
    order: AssetSortOrder = AssetSortOrder.NAME_ASC,
) -> list[Asset]:
    """Filter assets by a name/id/location search and type, sorted by name."""

    needle = (search or "").strip().casefold()
    selected = [
        asset
        for asset in assets
        if (not needle or any(needle in value.casefold() for value in (asset.name, asset.id, asset.location)))
        and (not asset_type or asset.type == asset_type)
    ]
    return sorted(
        selected,
        key=lambda asset: asset.name.casefold(),
        reverse=AssetSortOrder(order) == AssetSortOrder.NAME_DESC,
    )


def asset_types(assets: Iterable[Asset]) -> list[str]:
    return list(dict.fromkeys(asset.type for asset in assets))


def count_by_health(assets: Iterable[Asset], health: AssetHealth) -> int:
    return sum(1 for asset in assets if asset.health == health)
