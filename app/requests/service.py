from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Sequence

from opentelemetry import trace

from app.assets.repository import AssetRepository
from app.permissions import Capability, PermissionDeniedError, Role, permissions_for, require
from app.storage import NotFoundError
from app.users.models import User
from app.users.repository import UserRepository

from .errors import RequestServiceError, ValidationError
from .models import Attachment, AuditEntry, Request
from .queries import SortOrder, categories, filter_requests, is_visible_to
from .repository import RequestRepository
from .state import RequestStatus
from .workflow import WorkflowEngine

logger = logging.getLogger(__name__)
_tracer = trace.get_tracer(__name__)


@dataclass(frozen=True, slots=True)
class RequestActions:
    """What a user may do with one request right now."""

    editable: bool
    actionable: bool
    assignable: bool
    audit_visible: bool


@dataclass(slots=True)
class RequestService:
    """Permission-gated orchestration of request lifecycle operations."""

    repository: RequestRepository
    users: UserRepository = field(default_factory=UserRepository)
    assets: AssetRepository = field(default_factory=AssetRepository)
    engine: WorkflowEngine = field(default_factory=WorkflowEngine)

    @contextmanager
    def _operation(self, name: str, actor: User, request_id: str | None = None) -> Iterator[None]:
        with _tracer.start_as_current_span(f"requests.{name}") as span:
            span.set_attribute("facility.actor", actor.id)
            span.set_attribute("facility.role", actor.role.value)
            if request_id is not None:
                span.set_attribute("facility.request_id", request_id)
            try:
                yield
            except (PermissionDeniedError, RequestServiceError, NotFoundError) as exc:
                span.record_exception(exc)
                logger.warning("%s refused for %s on %s: %s", name, actor.id, request_id or "-", exc)
                raise

    def _transition(
        self,
        name: str,
        actor: User,
        request_id: str,
        capability: Capability,
        apply: Callable[[Request], Request],
    ) -> Request:
        with self._operation(name, actor, request_id):
            require(actor.role, capability)
            current = self.repository.get(request_id)
            updated = apply(current)
            self.repository.put(updated)
            logger.info(
                "Request %s: %s by %s (%s -> %s)",
                request_id,
                name,
                actor.id,
                current.status.value,
                updated.status.value,
            )
            return updated

    def _check_asset(self, asset_id: str | None) -> None:
        asset_id = (asset_id or "").strip()
        if asset_id and asset_id not in self.assets:
            raise ValidationError({"asset_id": f"Unknown asset {asset_id}."})

    def _technician(self, technician_id: str) -> User:
        technician = self.users.find(technician_id)
        if technician is None or technician.role != Role.MAINTENANCE_TECHNICIAN:
            raise ValidationError({"assignee": f"{technician_id} is not a maintenance technician."})
        return technician

    def create_request(
        self,
        actor: User,
        *,
        title: str,
        description: str,
        priority: str,
        category: str,
        location: str = "",
        asset_id: str | None = None,
        files: Sequence[Attachment | Mapping[str, str] | str] = (),
    ) -> Request:
        with self._operation("create", actor):
            require(actor.role, Capability.CREATE_REQUEST)
            self._check_asset(asset_id)
            request = self.engine.create(
                {
                    "title": title,
                    "description": description,
                    "priority": priority,
                    "category": category,
                    "location": location,
                    "asset_id": asset_id,
                    "files": files,
                },
                actor.id,
            )
            self.repository.put(request)
            logger.info("Request %s created by %s", request.id, actor.id)
            return request

    def get_request(self, viewer: User, request_id: str) -> Request:
        with self._operation("get", viewer, request_id):
            request = self.repository.get(request_id)
            if not is_visible_to(request, viewer.id, viewer.permissions):
                raise PermissionDeniedError(viewer.role, Capability.VIEW_ALL_REQUESTS)
            return request

    def list_requests(
        self,
        viewer: User,
        *,
        search: str = "",
        status: RequestStatus | None = None,
        order: SortOrder = SortOrder.NEWEST,
    ) -> list[Request]:
        return filter_requests(
            self.repository.list(),
            search=search,
            status=status,
            viewer_id=viewer.id,
            permissions=viewer.permissions,
            order=order,
        )

    def assign_technician(self, actor: User, request_id: str, technician_id: str) -> Request:
        def apply(request: Request) -> Request:
            technician = self._technician(technician_id.strip())
            return self.engine.assign(request, technician.id, actor.id)

        return self._transition("assign", actor, request_id, Capability.ASSIGN_TECHNICIAN, apply)

    def approve(self, actor: User, request_id: str, details: str | None = None) -> Request:
        return self._transition(
            "approve",
            actor,
            request_id,
            Capability.APPROVE_REJECT,
            lambda request: self.engine.approve(request, actor.id, details),
        )

    def reject(self, actor: User, request_id: str, details: str | None = None) -> Request:
        return self._transition(
            "reject",
            actor,
            request_id,
            Capability.APPROVE_REJECT,
            lambda request: self.engine.reject(request, actor.id, details),
        )

    def review(self, actor: User, request_id: str, details: str | None = None) -> Request:
        return self._transition(
            "review",
            actor,
            request_id,
            Capability.APPROVE_REJECT,
            lambda request: self.engine.review(request, actor.id, details),
        )

    def complete_work(self, actor: User, request_id: str, details: str | None = None) -> Request:
        return self._transition(
            "complete_work",
            actor,
            request_id,
            Capability.EDIT_REQUEST,
            lambda request: self.engine.complete_work(request, actor.id, details),
        )

    def flag_exception(self, actor: User, request_id: str, details: str | None = None) -> Request:
        return self._transition(
            "flag_exception",
            actor,
            request_id,
            Capability.EDIT_REQUEST,
            lambda request: self.engine.flag_exception(request, actor.id, details),
        )

    def edit_request(self, actor: User, request_id: str, changes: Mapping[str, Any]) -> Request:
        def apply(request: Request) -> Request:
            values = dict(changes)
            if "asset_id" in values:
                self._check_asset(values["asset_id"])
            if isinstance(values.get("assignee"), str) and values["assignee"].strip():
                values["assignee"] = self._technician(values["assignee"].strip()).id
            return self.engine.edit(request, values, actor.id)

        return self._transition("edit", actor, request_id, Capability.EDIT_REQUEST, apply)

    def get_audit_log(self, viewer: User, request_id: str) -> list[AuditEntry]:
        """Return the request's audit entries in the order they were recorded."""

        with self._operation("audit", viewer, request_id):
            request = self.repository.get(request_id)
            if not self.available_actions(viewer, request).audit_visible:
                raise PermissionDeniedError(viewer.role, Capability.VIEW_AUDIT_LOGS)
            return list(request.audit_log)

    def available_actions(self, user: User, request: Request) -> RequestActions:
        permissions = permissions_for(user.role)
        open_for_decision = request.status in (RequestStatus.PENDING, RequestStatus.IN_PROGRESS)
        return RequestActions(
            editable=permissions.can_edit_request and not request.is_terminal,
            actionable=permissions.can_approve_reject and open_for_decision,
            assignable=permissions.can_assign_technician and request.status == RequestStatus.PENDING,
            audit_visible=permissions.can_view_audit_logs or request.involves(user.id),
        )

    def available_technicians(self) -> list[User]:
        return self.users.technicians()

    def available_categories(self) -> list[str]:
        return categories(self.repository.list())
