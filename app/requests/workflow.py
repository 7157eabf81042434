from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Mapping
from uuid import uuid4

from .errors import InvalidTransitionError, ValidationError
from .models import Attachment, AuditEntry, Request, WorkflowStep
from .state import (
    WORKFLOW_STAGES,
    Priority,
    RequestStateMachine,
    RequestStatus,
    Stage,
    implied_stages,
)

Clock = Callable[[], datetime]

REQUIRED_FIELDS: tuple[str, ...] = ("title", "description", "priority", "category")
CREATE_FIELDS: frozenset[str] = frozenset(REQUIRED_FIELDS) | {"location", "asset_id", "files"}
EDITABLE_FIELDS: frozenset[str] = CREATE_FIELDS | {"status", "assignee"}

_FIELD_LABELS = {
    "title": "Title",
    "description": "Description",
    "priority": "Priority",
    "category": "Category",
    "status": "Status",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_request_id() -> str:
    return uuid4().hex[:9].upper()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _optional_text(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return str(value).strip()


def coerce_attachment(value: Attachment | Mapping[str, str] | str) -> Attachment:
    if isinstance(value, Attachment):
        return value
    if isinstance(value, str):
        name, url = value, None
    elif isinstance(value, Mapping):
        name, url = value.get("name"), value.get("url")
    else:
        raise ValueError(f"Unsupported attachment: {value!r}.")
    if _is_blank(name):
        raise ValueError("Attachment name is required.")
    return Attachment(name=str(name).strip(), url=str(url or "#"))


def coerce_attachments(value: Any) -> tuple[Attachment, ...]:
    """Normalise one attachment or a collection of them."""

    if value is None:
        return ()
    if isinstance(value, (str, Attachment, Mapping)):
        value = (value,)
    elif not isinstance(value, Iterable):
        raise ValueError(f"Unsupported attachments: {value!r}.")
    return tuple(coerce_attachment(item) for item in value)


def _coerce_fields(values: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    """Normalise raw field values, raising ``ValidationError`` on bad input."""

    errors: dict[str, str] = {}
    coerced: dict[str, Any] = {}
    for name, value in values.items():
        if name not in allowed:
            errors[name] = "Unknown field."
            continue
        if name in _FIELD_LABELS and _is_blank(value):
            errors[name] = f"{_FIELD_LABELS[name]} is required."
            continue
        if name == "priority":
            try:
                coerced[name] = Priority(value)
            except ValueError:
                errors[name] = f"Priority must be one of: {', '.join(p.value for p in Priority)}."
        elif name == "status":
            try:
                coerced[name] = RequestStatus(value)
            except ValueError:
                errors[name] = f"Status must be one of: {', '.join(s.value for s in RequestStatus)}."
        elif name in ("assignee", "asset_id"):
            coerced[name] = _optional_text(value)
        elif name == "files":
            try:
                coerced[name] = coerce_attachments(value)
            except ValueError as exc:
                errors[name] = str(exc)
        else:
            coerced[name] = str(value).strip()
    if errors:
        raise ValidationError(errors)
    return coerced


def complete_stages(
    workflow: Iterable[WorkflowStep],
    stages: Iterable[Stage],
    *,
    at: datetime,
    by: str,
) -> tuple[WorkflowStep, ...]:
    """Mark ``stages`` completed, appending a missing Rejected step.

    Completion never overwrites an existing date or actor.
    """

    steps = list(workflow)
    wanted = set(stages)
    if Stage.REJECTED in wanted and all(step.stage != Stage.REJECTED for step in steps):
        steps.append(WorkflowStep(stage=Stage.REJECTED))
    return tuple(step.complete(at=at, by=by) if step.stage in wanted else step for step in steps)


@dataclass(slots=True)
class WorkflowEngine:
    """Apply lifecycle operations to requests.

    The engine does not check permissions; callers do that before invoking
    it. Every operation returns a new ``Request`` and leaves its input
    untouched, so a failed operation has no effect.
    """

    state_machine: RequestStateMachine = field(default_factory=RequestStateMachine)
    clock: Clock = utcnow
    id_factory: Callable[[], str] = generate_request_id

    def _now(self, previous: datetime | None = None) -> datetime:
        now = self.clock()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def create(self, fields: Mapping[str, Any], actor: str) -> Request:
        missing = {
            name: f"{_FIELD_LABELS[name]} is required."
            for name in REQUIRED_FIELDS
            if _is_blank(fields.get(name))
        }
        if missing:
            raise ValidationError(missing)
        values = _coerce_fields(fields, CREATE_FIELDS)

        now = self._now()
        workflow = complete_stages(
            (WorkflowStep(stage=stage) for stage in WORKFLOW_STAGES),
            (Stage.SUBMITTED,),
            at=now,
            by=actor,
        )
        return Request(
            id=self.id_factory(),
            title=values["title"],
            description=values["description"],
            category=values["category"],
            priority=values["priority"],
            status=self.state_machine.initial_state(),
            reporter=actor,
            created_at=now,
            updated_at=now,
            location=values.get("location", ""),
            asset_id=values.get("asset_id"),
            workflow=workflow,
            audit_log=(AuditEntry(timestamp=now, user=actor, action="created request", details="Initial submission."),),
            files=values.get("files", ()),
        )

    def assign(self, request: Request, technician: str, actor: str) -> Request:
        if request.status != RequestStatus.PENDING:
            raise InvalidTransitionError(
                request.status, RequestStatus.IN_PROGRESS, "only pending requests can be assigned"
            )
        if _is_blank(technician):
            raise ValidationError({"assignee": "Technician is required."})
        return self._apply(
            request,
            actor=actor,
            action="assigned technician",
            details=f"Assigned to {technician}.",
            changes={"status": RequestStatus.IN_PROGRESS, "assignee": technician},
        )

    def approve(self, request: Request, actor: str, details: str | None = None) -> Request:
        self.state_machine.assert_transition(request.status, RequestStatus.APPROVED)
        return self._apply(
            request,
            actor=actor,
            action="approved request",
            details=details or "Request resolution approved.",
            changes={"status": RequestStatus.APPROVED},
        )

    def reject(self, request: Request, actor: str, details: str | None = None) -> Request:
        self.state_machine.assert_transition(request.status, RequestStatus.REJECTED)
        return self._apply(
            request,
            actor=actor,
            action="rejected request",
            details=details or "Request rejected.",
            changes={"status": RequestStatus.REJECTED},
        )

    def review(self, request: Request, actor: str, details: str | None = None) -> Request:
        if request.status not in (RequestStatus.PENDING, RequestStatus.IN_PROGRESS):
            raise InvalidTransitionError(
                request.status, request.status, "only pending or in-progress requests can be reviewed"
            )
        return self._apply(
            request,
            actor=actor,
            action="reviewed request",
            details=details or "Request reviewed.",
            stages=(Stage.REVIEWED,),
        )

    def complete_work(self, request: Request, actor: str, details: str | None = None) -> Request:
        if request.status != RequestStatus.IN_PROGRESS:
            raise InvalidTransitionError(
                request.status, request.status, "work can only be completed on in-progress requests"
            )
        return self._apply(
            request,
            actor=actor,
            action="completed work",
            details=details or "Work completed.",
            stages=(Stage.WORK_COMPLETED,),
        )

    def flag_exception(self, request: Request, actor: str, details: str | None = None) -> Request:
        self.state_machine.assert_transition(request.status, RequestStatus.EXCEPTION)
        return self._apply(
            request,
            actor=actor,
            action="flagged exception",
            details=details or "Request flagged as exception.",
            changes={"status": RequestStatus.EXCEPTION},
        )

    def edit(self, request: Request, changes: Mapping[str, Any], actor: str) -> Request:
        if request.is_terminal:
            raise InvalidTransitionError(request.status, request.status, "closed requests cannot be edited")
        values = _coerce_fields(changes, EDITABLE_FIELDS)

        new_status = values.get("status", request.status)
        if new_status != request.status:
            self.state_machine.assert_transition(request.status, new_status, via_edit=True)

        changed = sorted(name for name, value in values.items() if getattr(request, name) != value)
        details = f"Fields updated: {', '.join(changed)}." if changed else "Fields updated via edit form."
        return self._apply(request, actor=actor, action="updated request", details=details, changes=values)

    def _apply(
        self,
        request: Request,
        *,
        actor: str,
        action: str,
        details: str,
        changes: Mapping[str, Any] | None = None,
        stages: Iterable[Stage] = (),
    ) -> Request:
        """Build the next version of ``request`` with one audit entry appended."""

        changes = dict(changes or {})
        now = self._now(request.updated_at)
        status = changes.get("status", request.status)
        assignee = changes.get("assignee", request.assignee)
        workflow = complete_stages(
            request.workflow,
            (*stages, *implied_stages(status, assignee)),
            at=now,
            by=actor,
        )
        entry = AuditEntry(timestamp=now, user=actor, action=action, details=details)
        return replace(
            request,
            **changes,
            workflow=workflow,
            audit_log=(*request.audit_log, entry),
            updated_at=now,
        )
