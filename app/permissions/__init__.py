"""Role and capability lookup."""

from .roles import (
    DEFAULT_ROLE,
    ROLE_CAPABILITIES,
    Capability,
    CapabilitySet,
    PermissionDeniedError,
    Role,
    parse_role,
    permissions_for,
    require,
)

__all__ = [
    "DEFAULT_ROLE",
    "ROLE_CAPABILITIES",
    "Capability",
    "CapabilitySet",
    "PermissionDeniedError",
    "Role",
    "parse_role",
    "permissions_for",
    "require",
]
