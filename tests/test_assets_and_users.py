from datetime import date

import pytest

from app.assets.models import AssetHealth
from app.assets.queries import AssetSortOrder, asset_types, filter_assets
from app.assets.repository import AssetNotFoundError
from app.assets.service import AssetService
from app.permissions import PermissionDeniedError, Role
from app.users.queries import filter_users, list_users


def test_filter_assets_by_search_type_and_order(repositories):
    _, assets, _ = repositories

    in_building_a = filter_assets(assets.list(), search="building a")
    assert [asset.id for asset in in_building_a] == ["AST001", "AST004", "AST005"]

    descending = filter_assets(assets.list(), order=AssetSortOrder.NAME_DESC)
    assert descending[0].name == "Printer Marketing Dept"

    plumbing = filter_assets(assets.list(), asset_type="Plumbing")
    assert [asset.id for asset in plumbing] == ["AST002"]
    assert asset_types(assets.list()) == ["HVAC", "Plumbing", "Furniture", "IT", "Office Equipment"]


def test_asset_maintenance_schedule(repositories):
    _, assets, _ = repositories

    assert assets.get("AST002").is_maintenance_due(date(2023, 11, 2))
    assert not assets.get("AST005").is_maintenance_due(date(2030, 1, 1))


def test_update_health_requires_manage_assets(repositories, people):
    _, assets, _ = repositories
    service = AssetService(assets)

    updated = service.update_health(people["technician"], "AST002", "Good")
    assert updated.health == AssetHealth.GOOD
    assert assets.get("AST002").health == AssetHealth.GOOD

    with pytest.raises(PermissionDeniedError):
        service.update_health(people["employee"], "AST002", AssetHealth.POOR)
    with pytest.raises(AssetNotFoundError):
        service.update_health(people["admin"], "AST999", AssetHealth.POOR)


def test_record_maintenance(repositories, people):
    _, assets, _ = repositories
    service = AssetService(assets)

    updated = service.record_maintenance(
        people["manager"],
        "AST001",
        performed_on=date(2023, 10, 30),
        next_due=date(2024, 1, 30),
        health=AssetHealth.GOOD,
    )

    assert updated.last_maintenance == date(2023, 10, 30)
    assert updated.next_maintenance == date(2024, 1, 30)
    assert service.list_assets(search="AST001")[0] == updated


def test_record_maintenance_keeps_schedule_when_not_given(repositories, people):
    _, assets, _ = repositories
    service = AssetService(assets)

    updated = service.record_maintenance(people["technician"], "AST003", performed_on=date(2023, 11, 5))

    assert updated.last_maintenance == date(2023, 11, 5)
    assert updated.next_maintenance == date(2024, 10, 24)
    assert updated.health == AssetHealth.GOOD


def test_user_listing(repositories, people):
    _, _, users = repositories

    assert [user.id for user in filter_users(users.list(), search="smith")] == ["USR002", "USR004"]
    assert [user.id for user in filter_users(users.list(), role=Role.EMPLOYEE)] == [
        "USR001",
        "USR005",
        "USR006",
        "USR008",
    ]
    assert len(list_users(people["admin"], users.list())) == 9
    with pytest.raises(PermissionDeniedError):
        list_users(people["manager"], users.list())


def test_display_name_resolution(repositories):
    _, _, users = repositories

    assert users.display_name("USR003") == "John Doe"
    assert users.display_name("IT Dept") == "IT Dept"
    assert users.display_name(None) is None
    assert users.get("USR009").permissions.can_manage_users
