"""Facility assets referenced by service requests."""

from .models import Asset, AssetHealth
from .queries import AssetSortOrder, asset_types, filter_assets
from .repository import AssetNotFoundError, AssetRepository
from .service import AssetService

__all__ = [
    "Asset",
    "AssetHealth",
    "AssetNotFoundError",
    "AssetRepository",
    "AssetService",
    "AssetSortOrder",
    "asset_types",
    "filter_assets",
]
