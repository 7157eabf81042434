"""Service request domain models, workflow engine and services."""

from .errors import InvalidTransitionError, RequestNotFoundError, RequestServiceError, ValidationError
from .models import Attachment, AuditEntry, Request, WorkflowStep
from .repository import RequestRepository
from .service import RequestActions, RequestService
from .state import (
    ExceptionPolicy,
    Priority,
    RequestStateMachine,
    RequestStatus,
    SlaStatus,
    Stage,
    implied_stages,
)
from .workflow import WorkflowEngine

__all__ = [
    "Attachment",
    "AuditEntry",
    "ExceptionPolicy",
    "InvalidTransitionError",
    "Priority",
    "Request",
    "RequestActions",
    "RequestNotFoundError",
    "RequestRepository",
    "RequestService",
    "RequestServiceError",
    "RequestStateMachine",
    "RequestStatus",
    "SlaStatus",
    "Stage",
    "ValidationError",
    "WorkflowEngine",
    "WorkflowStep",
    "implied_stages",
]
