from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date

from app.permissions import Capability, require
from app.users.models import User

from .models import Asset, AssetHealth
from .queries import AssetSortOrder, filter_assets
from .repository import AssetRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AssetService:
    """Asset listing and maintenance updates."""

    repository: AssetRepository

    def list_assets(
        self,
        *,
        search: str = "",
        asset_type: str | None = None,
        order: AssetSortOrder = AssetSortOrder.NAME_ASC,
    ) -> list[Asset]:
        return filter_assets(self.repository.list(), search=search, asset_type=asset_type, order=order)

    def update_health(self, actor: User, asset_id: str, health: AssetHealth | str) -> Asset:
        require(actor.role, Capability.MANAGE_ASSETS)
        asset = self.repository.get(asset_id)
        updated = self.repository.put(replace(asset, health=AssetHealth(health)))
        logger.info("Asset %s health %s -> %s by %s", asset_id, asset.health.value, updated.health.value, actor.id)
        return updated

    def record_maintenance(
        self,
        actor: User,
        asset_id: str,
        *,
        performed_on: date,
        next_due: date | None = None,
        health: AssetHealth | str | None = None,
    ) -> Asset:
        require(actor.role, Capability.MANAGE_ASSETS)
        asset = self.repository.get(asset_id)
        updated = replace(
            asset,
            last_maintenance=performed_on,
            next_maintenance=next_due if next_due is not None else asset.next_maintenance,
            health=AssetHealth(health) if health is not None else asset.health,
        )
        logger.info("Asset %s maintained on %s by %s", asset_id, performed_on.isoformat(), actor.id)
        return self.repository.put(updated)
