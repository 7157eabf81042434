"""Dashboard KPIs computed from the in-memory repositories."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from app.assets.models import Asset, AssetHealth
from app.assets.queries import count_by_health
from app.permissions import Capability, require
from app.requests.models import AuditEntry, Request
from app.requests.queries import recent_activity
from app.requests.sla import SlaPolicy, sla_compliance_rate
from app.requests.state import RequestStatus
from app.users.models import User


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    open_requests: int
    critical_assets: int
    status_distribution: dict[RequestStatus, int] = field(default_factory=dict)
    sla_compliance_rate: float | None = None
    recent_activity: list[AuditEntry] = field(default_factory=list)


def build_dashboard(
    viewer: User,
    requests: Iterable[Request],
    assets: Iterable[Asset],
    *,
    now: datetime,
    policy: SlaPolicy | None = None,
    activity_limit: int = 5,
) -> DashboardSummary:
    """Summarise open work, asset health, SLA compliance and recent activity."""

    require(viewer.role, Capability.VIEW_DASHBOARD)
    requests = list(requests)
    counts = Counter(request.status for request in requests)
    return DashboardSummary(
        open_requests=sum(1 for request in requests if not request.is_terminal),
        critical_assets=count_by_health(assets, AssetHealth.CRITICAL),
        status_distribution={status: counts.get(status, 0) for status in RequestStatus},
        sla_compliance_rate=sla_compliance_rate(requests, now, policy),
        recent_activity=recent_activity(requests, limit=activity_limit),
    )
