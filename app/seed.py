"""Demo dataset for the facility desk."""

from __future__ import annotations

import logging
from datetime import date

from app.assets.models import Asset, AssetHealth
from app.assets.repository import AssetRepository
from app.permissions import Role
from app.requests.repository import RequestRepository
from app.requests.schemas import load_requests
from app.users.models import User
from app.users.repository import UserRepository

logger = logging.getLogger(__name__)

SAMPLE_USERS: tuple[User, ...] = (
    User("USR001", "Alice Johnson", "alice.j@example.com", Role.EMPLOYEE),
    User("USR002", "Bob Smith", "bob.s@example.com", Role.FACILITY_MANAGER),
    User("USR003", "John Doe", "john.d@example.com", Role.MAINTENANCE_TECHNICIAN),
    User("USR004", "Jane Smith", "jane.s@example.com", Role.MAINTENANCE_TECHNICIAN),
    User("USR005", "Charlie Brown", "charlie.b@example.com", Role.EMPLOYEE),
    User("USR006", "David Lee", "david.l@example.com", Role.EMPLOYEE),
    User("USR007", "Eve Green", "eve.g@example.com", Role.OPERATIONS_MANAGER),
    User("USR008", "Frank White", "frank.w@example.com", Role.EMPLOYEE),
    User("USR009", "Admin User", "admin@example.com", Role.ADMIN),
)

SAMPLE_ASSETS: tuple[Asset, ...] = (
    Asset(
        "AST001",
        "AC Unit Server Room 3",
        "HVAC",
        "Building A, Server Room 3",
        AssetHealth.CRITICAL,
        date(2023, 9, 15),
        date(2023, 12, 15),
    ),
    Asset(
        "AST002",
        "Faucet Break Room 1",
        "Plumbing",
        "Building B, Break Room 1",
        AssetHealth.POOR,
        date(2022, 5, 20),
        date(2023, 11, 1),
    ),
    Asset(
        "AST003",
        "Office Chair Cubicle 12",
        "Furniture",
        "Building C, Cubicle 12",
        AssetHealth.GOOD,
        date(2023, 10, 24),
        date(2024, 10, 24),
    ),
    Asset(
        "AST004",
        "Network Switch 4A",
        "IT",
        "Building A, 4th Floor",
        AssetHealth.CRITICAL,
        date(2023, 8, 1),
        date(2023, 11, 1),
    ),
    Asset(
        "AST005",
        "Printer Marketing Dept",
        "Office Equipment",
        "Building A, Marketing Dept",
        AssetHealth.OBSOLETE,
        date(2021, 1, 1),
        None,
    ),
)


def _step(stage: str, at: str | None = None, by: str | None = None, sla: str = "On Track", *, done: bool = True) -> dict:
    return {"stage": stage, "date": at, "completed": done and at is not None, "by": by, "slaStatus": sla}


def _pending(stage: str, sla: str = "On Track") -> dict:
    return _step(stage, sla=sla, done=False)


def _audit(at: str, user: str, action: str, details: str) -> dict:
    return {"timestamp": at, "user": user, "action": action, "details": details}


# "IT Dept" is an external team rather than a user account.
SAMPLE_REQUESTS: tuple[dict, ...] = (
    {
        "id": "REQ001",
        "title": "AC Unit Malfunction - Server Room 3",
        "description": (
            "The air conditioning unit in Server Room 3 is making loud noises and not cooling properly. "
            "Temperature is rising."
        ),
        "status": "In Progress",
        "priority": "High",
        "reporter": "USR001",
        "assignee": "USR003",
        "createdAt": "2023-10-26T10:00:00Z",
        "updatedAt": "2023-10-27T14:30:00Z",
        "assetId": "AST001",
        "location": "Building A, 3rd Floor, Server Room 3",
        "category": "HVAC",
        "files": [{"name": "ac_unit_photo.jpg", "url": "#"}],
        "workflow": [
            _step("Submitted", "2023-10-26T10:00:00Z", "USR001"),
            _step("Reviewed", "2023-10-26T11:00:00Z", "USR002"),
            _step("Assigned", "2023-10-26T12:00:00Z", "USR002"),
            _step("Work Started", "2023-10-27T09:00:00Z", "USR003"),
            _pending("Work Completed"),
            _pending("Approved"),
        ],
        "auditLog": [
            _audit("2023-10-26T10:00:00Z", "USR001", "created request", "Initial submission."),
            _audit("2023-10-26T11:00:00Z", "USR002", "reviewed request", "Marked as high priority."),
            _audit("2023-10-26T12:00:00Z", "USR002", "assigned technician", "Assigned to USR003."),
            _audit("2023-10-27T09:00:00Z", "USR003", "started work", "Began diagnostics on AC unit."),
        ],
    },
    {
        "id": "REQ002",
        "title": "Leaky Faucet - Break Room 1",
        "description": "The faucet in Break Room 1 has a constant drip, wasting water.",
        "status": "Pending",
        "priority": "Medium",
        "reporter": "USR005",
        "assignee": None,
        "createdAt": "2023-10-25T14:15:00Z",
        "updatedAt": "2023-10-25T14:15:00Z",
        "assetId": "AST002",
        "location": "Building B, 1st Floor, Break Room 1",
        "category": "Plumbing",
        "files": [],
        "workflow": [
            _step("Submitted", "2023-10-25T14:15:00Z", "USR005"),
            _pending("Reviewed"),
            _pending("Assigned"),
            _pending("Work Started"),
            _pending("Work Completed"),
            _pending("Approved"),
        ],
        "auditLog": [
            _audit("2023-10-25T14:15:00Z", "USR005", "created request", "Initial submission."),
        ],
    },
    {
        "id": "REQ003",
        "title": "Office Chair Broken - Cubicle 12",
        "description": "The office chair in Cubicle 12 has a broken backrest and is unusable.",
        "status": "Approved",
        "priority": "Low",
        "reporter": "USR006",
        "assignee": "USR004",
        "createdAt": "2023-10-24T09:30:00Z",
        "updatedAt": "2023-10-24T12:00:00Z",
        "assetId": "AST003",
        "location": "Building C, 2nd Floor, Cubicle 12",
        "category": "Furniture",
        "files": [],
        "workflow": [
            _step("Submitted", "2023-10-24T09:30:00Z", "USR006"),
            _step("Reviewed", "2023-10-24T10:00:00Z", "USR002"),
            _step("Assigned", "2023-10-24T10:30:00Z", "USR002"),
            _pending("Work Started"),
            _step("Work Completed", "2023-10-24T11:00:00Z", "USR004"),
            _step("Approved", "2023-10-24T12:00:00Z", "USR002"),
        ],
        "auditLog": [
            _audit("2023-10-24T09:30:00Z", "USR006", "created request", "Initial submission."),
            _audit("2023-10-24T10:00:00Z", "USR002", "reviewed request", "Approved for replacement."),
            _audit("2023-10-24T10:30:00Z", "USR002", "assigned technician", "Assigned to USR004."),
            _audit("2023-10-24T11:00:00Z", "USR004", "completed work", "Replaced broken office chair."),
            _audit("2023-10-24T12:00:00Z", "USR002", "approved resolution", "Request closed."),
        ],
    },
    {
        "id": "REQ004",
        "title": "Network outage - entire 4th floor",
        "description": (
            "The network is down on the entire 4th floor of Building A. "
            "Employees cannot access shared drives or internet."
        ),
        "status": "Exception",
        "priority": "Critical",
        "reporter": "USR007",
        "assignee": "IT Dept",
        "createdAt": "2023-10-28T08:00:00Z",
        "updatedAt": "2023-10-28T09:00:00Z",
        "assetId": "AST004",
        "location": "Building A, 4th Floor",
        "category": "IT/Network",
        "files": [],
        "workflow": [
            _step("Submitted", "2023-10-28T08:00:00Z", "USR007"),
            _step("Reviewed", "2023-10-28T08:15:00Z", "USR007", "At Risk"),
            _step("Assigned", "2023-10-28T08:30:00Z", "USR007", "At Risk"),
            _step("Work Started", "2023-10-28T09:00:00Z", "IT Dept", "Breached", done=False),
            _pending("Work Completed", "Breached"),
            _pending("Approved", "Breached"),
        ],
        "auditLog": [
            _audit("2023-10-28T08:00:00Z", "USR007", "created request", "Network outage reported."),
            _audit(
                "2023-10-28T08:15:00Z",
                "USR007",
                "reviewed request",
                "Escalated to Critical priority due to business impact.",
            ),
            _audit("2023-10-28T08:30:00Z", "USR007", "assigned technician", "Assigned to IT Department."),
        ],
    },
    {
        "id": "REQ005",
        "title": "Printer not working - Marketing Dept",
        "description": "The printer in the marketing department is constantly offline. Needs repair or replacement.",
        "status": "Rejected",
        "priority": "Medium",
        "reporter": "USR008",
        "assignee": None,
        "createdAt": "2023-10-23T16:00:00Z",
        "updatedAt": "2023-10-23T17:00:00Z",
        "assetId": "AST005",
        "location": "Building A, 2nd Floor, Marketing Dept",
        "category": "Office Equipment",
        "files": [],
        "workflow": [
            _step("Submitted", "2023-10-23T16:00:00Z", "USR008"),
            _step("Reviewed", "2023-10-23T16:30:00Z", "USR002"),
            _step("Rejected", "2023-10-23T17:00:00Z", "USR002"),
        ],
        "auditLog": [
            _audit("2023-10-23T16:00:00Z", "USR008", "created request", "Printer issue reported."),
            _audit("2023-10-23T16:30:00Z", "USR002", "reviewed request", "Checked printer, found it outdated."),
            _audit(
                "2023-10-23T17:00:00Z",
                "USR002",
                "rejected request",
                "Recommended new printer purchase instead of repair due to age. Request closed.",
            ),
        ],
    },
)


def load_sample_data(
    requests: RequestRepository,
    assets: AssetRepository,
    users: UserRepository,
) -> None:
    """Populate the repositories with the demo users, assets and requests."""

    for user in SAMPLE_USERS:
        users.put(user)
    for asset in SAMPLE_ASSETS:
        assets.put(asset)
    for request in load_requests(list(SAMPLE_REQUESTS)):
        requests.put(request)
    logger.info(
        "Loaded sample data: %d users, %d assets, %d requests",
        len(users),
        len(assets),
        len(requests),
    )
