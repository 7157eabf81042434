"""Role-based capability model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Supported roles."""

    EMPLOYEE = "Employee"
    FACILITY_MANAGER = "Facility Manager"
    MAINTENANCE_TECHNICIAN = "Maintenance Technician"
    OPERATIONS_MANAGER = "Operations Manager"
    ADMIN = "Admin"


class Capability(str, Enum):
    """Named capabilities; values match the ``CapabilitySet`` attributes."""

    VIEW_DASHBOARD = "can_view_dashboard"
    CREATE_REQUEST = "can_create_request"
    VIEW_OWN_REQUESTS = "can_view_own_requests"
    VIEW_ALL_REQUESTS = "can_view_all_requests"
    EDIT_REQUEST = "can_edit_request"
    APPROVE_REJECT = "can_approve_reject"
    ASSIGN_TECHNICIAN = "can_assign_technician"
    MANAGE_ASSETS = "can_manage_assets"
    VIEW_AUDIT_LOGS = "can_view_audit_logs"
    MANAGE_USERS = "can_manage_users"


class PermissionDeniedError(PermissionError):
    """Raised when a role lacks the capability an operation needs."""

    def __init__(self, role: Role, capability: Capability) -> None:
        self.role = role
        self.capability = capability
        super().__init__(f"Role '{role.value}' lacks capability '{capability.value}'")


@dataclass(frozen=True, slots=True)
class CapabilitySet:
    """Fixed vector of the ten capability flags."""

    can_view_dashboard: bool = False
    can_create_request: bool = False
    can_view_own_requests: bool = False
    can_view_all_requests: bool = False
    can_edit_request: bool = False
    can_approve_reject: bool = False
    can_assign_technician: bool = False
    can_manage_assets: bool = False
    can_view_audit_logs: bool = False
    can_manage_users: bool = False

    def allows(self, capability: Capability) -> bool:
        return bool(getattr(self, capability.value))

    def granted(self) -> frozenset[Capability]:
        return frozenset(capability for capability in Capability if self.allows(capability))

    def as_dict(self) -> dict[str, bool]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


_ALL = CapabilitySet(**{capability.value: True for capability in Capability})

_MANAGER = CapabilitySet(**{capability.value: capability != Capability.MANAGE_USERS for capability in Capability})

ROLE_CAPABILITIES: Mapping[Role, CapabilitySet] = MappingProxyType(
    {
        Role.EMPLOYEE: CapabilitySet(
            can_view_dashboard=True,
            can_create_request=True,
            can_view_own_requests=True,
        ),
        Role.FACILITY_MANAGER: _MANAGER,
        # Technicians see every request routed to them and update work and assets.
        Role.MAINTENANCE_TECHNICIAN: CapabilitySet(
            can_view_dashboard=True,
            can_view_all_requests=True,
            can_edit_request=True,
            can_manage_assets=True,
        ),
        Role.OPERATIONS_MANAGER: _MANAGER,
        Role.ADMIN: _ALL,
    }
)

DEFAULT_ROLE = Role.EMPLOYEE


def parse_role(value: object) -> Role | None:
    """Return the ``Role`` named by ``value`` or ``None`` when unknown."""

    if isinstance(value, Role):
        return value
    if isinstance(value, str):
        text = value.strip()
        for role in Role:
            if text.lower() in (role.value.lower(), role.name.lower()):
                return role
    return None


def permissions_for(role: object) -> CapabilitySet:
    """Return the capability set for ``role``.

    Unknown roles get the least-privileged (Employee) set; this never raises.
    """

    parsed = parse_role(role)
    if parsed is None:
        logger.debug("Unknown role %r; falling back to %s", role, DEFAULT_ROLE.value)
        parsed = DEFAULT_ROLE
    return ROLE_CAPABILITIES[parsed]


def require(role: object, capability: Capability) -> None:
    """Raise ``PermissionDeniedError`` unless ``role`` grants ``capability``."""

    if not permissions_for(role).allows(capability):
        raise PermissionDeniedError(parse_role(role) or DEFAULT_ROLE, capability)
