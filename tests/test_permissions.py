import pytest

from app.permissions import (
    Capability,
    CapabilitySet,
    PermissionDeniedError,
    Role,
    parse_role,
    permissions_for,
    require,
)

EXPECTED = {
    Role.EMPLOYEE: {
        Capability.VIEW_DASHBOARD,
        Capability.CREATE_REQUEST,
        Capability.VIEW_OWN_REQUESTS,
    },
    Role.FACILITY_MANAGER: set(Capability) - {Capability.MANAGE_USERS},
    Role.MAINTENANCE_TECHNICIAN: {
        Capability.VIEW_DASHBOARD,
        Capability.VIEW_ALL_REQUESTS,
        Capability.EDIT_REQUEST,
        Capability.MANAGE_ASSETS,
    },
    Role.OPERATIONS_MANAGER: set(Capability) - {Capability.MANAGE_USERS},
    Role.ADMIN: set(Capability),
}


@pytest.mark.parametrize("role", list(Role))
def test_permissions_for_returns_fixed_vector(role):
    assert permissions_for(role).granted() == EXPECTED[role]


def test_permissions_for_accepts_role_strings():
    assert permissions_for("Facility Manager") is permissions_for(Role.FACILITY_MANAGER)
    assert permissions_for("admin") is permissions_for(Role.ADMIN)


@pytest.mark.parametrize("value", ["Janitor", "", None, 42])
def test_unknown_role_falls_back_to_employee(value):
    assert permissions_for(value) == permissions_for(Role.EMPLOYEE)
    assert parse_role(value) is None


def test_capability_set_has_ten_flags():
    flags = CapabilitySet().as_dict()
    assert len(flags) == 10
    assert not any(flags.values())
    assert len(Capability) == 10


def test_permissions_are_shared_between_callers():
    first = permissions_for(Role.ADMIN)
    with pytest.raises(AttributeError):
        first.can_manage_users = False  # type: ignore[misc]
    assert permissions_for(Role.ADMIN).can_manage_users


def test_require_raises_for_missing_capability():
    require(Role.ADMIN, Capability.MANAGE_USERS)
    with pytest.raises(PermissionDeniedError) as exc:
        require(Role.MAINTENANCE_TECHNICIAN, Capability.APPROVE_REJECT)

    assert exc.value.role == Role.MAINTENANCE_TECHNICIAN
    assert exc.value.capability == Capability.APPROVE_REJECT
