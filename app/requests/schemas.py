"""Serialized form of requests, using the camel-case keys of the demo data."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from .models import Attachment, AuditEntry, Request, WorkflowStep
from .state import Priority, RequestStatus, SlaStatus, Stage


class _Schema(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class AttachmentSnapshot(_Schema):
    name: str
    url: str


class WorkflowStepSnapshot(_Schema):
    stage: Stage
    completed: bool = False
    date: datetime | None = None
    by: str | None = None
    sla_status: SlaStatus = SlaStatus.ON_TRACK


class AuditEntrySnapshot(_Schema):
    timestamp: datetime
    user: str
    action: str
    details: str = ""


class RequestSnapshot(_Schema):
    id: str
    title: str
    description: str
    status: RequestStatus
    priority: Priority
    reporter: str
    assignee: str | None = None
    created_at: datetime
    updated_at: datetime
    asset_id: str | None = None
    location: str = ""
    category: str
    files: list[AttachmentSnapshot] = Field(default_factory=list)
    workflow: list[WorkflowStepSnapshot] = Field(default_factory=list)
    audit_log: list[AuditEntrySnapshot] = Field(default_factory=list)

    @classmethod
    def from_request(cls, request: Request) -> RequestSnapshot:
        return cls.model_validate(request)

    def to_request(self) -> Request:
        return Request(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            priority=self.priority,
            status=self.status,
            reporter=self.reporter,
            created_at=self.created_at,
            updated_at=self.updated_at,
            location=self.location,
            assignee=self.assignee,
            asset_id=self.asset_id,
            workflow=tuple(
                WorkflowStep(
                    stage=step.stage,
                    completed=step.completed,
                    date=step.date,
                    by=step.by,
                    sla_status=step.sla_status,
                )
                for step in self.workflow
            ),
            audit_log=tuple(
                AuditEntry(timestamp=entry.timestamp, user=entry.user, action=entry.action, details=entry.details)
                for entry in self.audit_log
            ),
            files=tuple(Attachment(name=item.name, url=item.url) for item in self.files),
        )


_SNAPSHOT_LIST = TypeAdapter(list[RequestSnapshot])


def dump_requests(requests: Iterable[Request]) -> bytes:
    """Serialize requests to JSON with camel-case keys."""

    snapshots = [RequestSnapshot.from_request(request) for request in requests]
    return _SNAPSHOT_LIST.dump_json(snapshots, by_alias=True)


def load_requests(payload: str | bytes | list[dict]) -> list[Request]:
    """Parse requests from JSON text or already-decoded camel-case dicts."""

    if isinstance(payload, (str, bytes)):
        snapshots = _SNAPSHOT_LIST.validate_json(payload)
    else:
        snapshots = _SNAPSHOT_LIST.validate_python(payload)
    return [snapshot.to_request() for snapshot in snapshots]
