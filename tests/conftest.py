from datetime import datetime, timedelta, timezone

import pytest

from app.assets.repository import AssetRepository
from app.permissions import Role
from app.requests.repository import RequestRepository
from app.requests.service import RequestService
from app.requests.workflow import WorkflowEngine
from app.seed import load_sample_data
from app.users.models import User
from app.users.repository import UserRepository


class TickingClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(minutes=1)):
        self.current = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def engine(clock):
    counter = iter(range(1, 10_000))
    return WorkflowEngine(clock=clock, id_factory=lambda: f"REQ{next(counter):04d}")


@pytest.fixture
def leak_fields():
    return {"title": "Leak", "description": "drip", "priority": "Medium", "category": "Plumbing"}


@pytest.fixture
def repositories():
    requests, assets, users = RequestRepository(), AssetRepository(), UserRepository()
    load_sample_data(requests, assets, users)
    return requests, assets, users


@pytest.fixture
def service(repositories, engine):
    requests, assets, users = repositories
    return RequestService(requests, users=users, assets=assets, engine=engine)


@pytest.fixture
def people(repositories):
    _, _, users = repositories
    return {
        "employee": users.get("USR005"),
        "manager": users.get("USR002"),
        "technician": users.get("USR003"),
        "other_technician": users.get("USR004"),
        "operations": users.get("USR007"),
        "admin": users.get("USR009"),
    }


@pytest.fixture
def make_user():
    def factory(role: Role, user_id: str = "USR900") -> User:
        return User(user_id, f"{role.value} tester", f"{user_id.lower()}@example.com", role)

    return factory
