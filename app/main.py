from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from opentelemetry.sdk.trace import TracerProvider

from app.assets.repository import AssetRepository
from app.assets.service import AssetService
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging, init_tracer, shutdown_tracer
from app.dashboard import DashboardSummary, build_dashboard
from app.requests.repository import RequestRepository
from app.requests.service import RequestService
from app.requests.sla import SlaPolicy
from app.requests.state import RequestStateMachine
from app.requests.workflow import Clock, WorkflowEngine, utcnow
from app.seed import load_sample_data
from app.users.models import User
from app.users.repository import UserRepository


@dataclass(slots=True)
class FacilityDesk:
    """Wired-up repositories and services for one session."""

    settings: Settings
    requests: RequestService
    assets: AssetService
    users: UserRepository
    sla_policy: SlaPolicy
    clock: Clock = utcnow
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    tracer_provider: TracerProvider | None = None

    def dashboard(self, viewer: User, *, now: datetime | None = None) -> DashboardSummary:
        return build_dashboard(
            viewer,
            self.requests.repository.list(),
            self.assets.repository.list(),
            now=now or self.clock(),
            policy=self.sla_policy,
        )

    def close(self) -> None:
        shutdown_tracer(self.tracer_provider)
        self.tracer_provider = None


def create_desk(settings: Settings | None = None, *, clock: Clock = utcnow) -> FacilityDesk:
    settings = settings or get_settings()
    logger = configure_logging(settings)
    tracer_provider = init_tracer(settings)

    request_repository = RequestRepository()
    asset_repository = AssetRepository()
    user_repository = UserRepository()
    if settings.load_sample_data:
        load_sample_data(request_repository, asset_repository, user_repository)

    engine = WorkflowEngine(
        state_machine=RequestStateMachine(settings.exception_policy),
        clock=clock,
    )
    logger.info("Facility desk ready (exception policy: %s)", settings.exception_policy.value)
    return FacilityDesk(
        settings=settings,
        requests=RequestService(
            request_repository,
            users=user_repository,
            assets=asset_repository,
            engine=engine,
        ),
        assets=AssetService(asset_repository),
        users=user_repository,
        sla_policy=SlaPolicy.from_settings(settings),
        clock=clock,
        logger=logger,
        tracer_provider=tracer_provider,
    )
