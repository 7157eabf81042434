from __future__ import annotations

from dataclasses import dataclass

from app.permissions import CapabilitySet, Role, permissions_for


@dataclass(frozen=True, slots=True)
class User:
    """Person acting on requests, identified by a stable id."""

    id: str
    name: str
    email: str
    role: Role

    @property
    def permissions(self) -> CapabilitySet:
        return permissions_for(self.role)
