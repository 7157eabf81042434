"""Advisory SLA evaluation for service requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterable, Mapping

from .models import Request
from .state import Priority, SlaStatus

if TYPE_CHECKING:
    from app.core.config import Settings

DEFAULT_SLA_HOURS: Mapping[Priority, float] = {
    Priority.CRITICAL: 2,
    Priority.HIGH: 8,
    Priority.MEDIUM: 24,
    Priority.LOW: 72,
}


@dataclass(frozen=True)
class SlaPolicy:
    """Allowed resolution time per priority."""

    hours: Mapping[Priority, float] = field(default_factory=lambda: dict(DEFAULT_SLA_HOURS))
    at_risk_ratio: float = 0.75

    @classmethod
    def from_settings(cls, settings: Settings) -> SlaPolicy:
        hours = dict(DEFAULT_SLA_HOURS)
        for name, value in settings.sla_hours.items():
            hours[Priority(name)] = float(value)
        return cls(hours=hours, at_risk_ratio=settings.sla_at_risk_ratio)

    def allowed(self, priority: Priority) -> timedelta:
        return timedelta(hours=self.hours.get(priority, DEFAULT_SLA_HOURS[priority]))

    def due_at(self, request: Request) -> datetime:
        return request.created_at + self.allowed(request.priority)


def evaluate_sla(request: Request, now: datetime, policy: SlaPolicy | None = None) -> SlaStatus:
    """Classify a request's schedule health.

    Closed requests are measured up to their last update rather than ``now``.
    """

    policy = policy or SlaPolicy()
    reference = request.updated_at if request.is_terminal else now
    elapsed = reference - request.created_at
    allowed = policy.allowed(request.priority)
    if elapsed > allowed:
        return SlaStatus.BREACHED
    if elapsed >= allowed * policy.at_risk_ratio:
        return SlaStatus.AT_RISK
    return SlaStatus.ON_TRACK


def sla_compliance_rate(requests: Iterable[Request], now: datetime, policy: SlaPolicy | None = None) -> float | None:
    """Share of requests not in breach, or ``None`` when there are none."""

    statuses = [evaluate_sla(request, now, policy) for request in requests]
    if not statuses:
        return None
    compliant = sum(1 for status in statuses if status != SlaStatus.BREACHED)
    return compliant / len(statuses)
