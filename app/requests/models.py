from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from .state import TERMINAL_STATUSES, Priority, RequestStatus, SlaStatus, Stage


@dataclass(frozen=True, slots=True)
class Attachment:
    """File attached to a request."""

    name: str
    url: str


@dataclass(frozen=True, slots=True)
class WorkflowStep:
    """One milestone in a request's workflow."""

    stage: Stage
    completed: bool = False
    date: datetime | None = None
    by: str | None = None
    sla_status: SlaStatus = SlaStatus.ON_TRACK

    def complete(self, *, at: datetime, by: str) -> WorkflowStep:
        # An already completed step keeps its original date and actor.
        if self.completed:
            return self
        return replace(self, completed=True, date=at, by=by)


@dataclass(frozen=True, slots=True)
class AuditEntry:
    """History entry describing one state-changing action on a request."""

    timestamp: datetime
    user: str
    action: str
    details: str


@dataclass(frozen=True, slots=True)
class Request:
    """Aggregate representing a facility service request."""

    id: str
    title: str
    description: str
    category: str
    priority: Priority
    status: RequestStatus
    reporter: str
    created_at: datetime
    updated_at: datetime
    location: str = ""
    assignee: str | None = None
    asset_id: str | None = None
    workflow: tuple[WorkflowStep, ...] = ()
    audit_log: tuple[AuditEntry, ...] = ()
    files: tuple[Attachment, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def step(self, stage: Stage) -> WorkflowStep | None:
        for item in self.workflow:
            if item.stage == stage:
                return item
        return None

    def completed_stages(self) -> list[Stage]:
        return [item.stage for item in self.workflow if item.completed]

    def involves(self, identity: str) -> bool:
        """Return whether ``identity`` reported or is assigned to the request."""

        return identity in (self.reporter, self.assignee)
