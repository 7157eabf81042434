from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class AssetHealth(str, Enum):
    GOOD = "Good"
    POOR = "Poor"
    CRITICAL = "Critical"
    OBSOLETE = "Obsolete"


@dataclass(frozen=True, slots=True)
class Asset:
    """Physical asset a request may refer to."""

    id: str
    name: str
    type: str
    location: str
    health: AssetHealth
    last_maintenance: date | None = None
    # None when no further maintenance is scheduled.
    next_maintenance: date | None = None

    def is_maintenance_due(self, today: date) -> bool:
        return self.next_maintenance is not None and self.next_maintenance <= today
