from __future__ import annotations

from app.storage import InMemoryStore, NotFoundError

from .models import Asset


class AssetNotFoundError(NotFoundError):
    """Raised when an asset could not be located."""


class AssetRepository(InMemoryStore[Asset]):
    not_found_error = AssetNotFoundError
    kind = "Asset"
