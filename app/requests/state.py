from __future__ import annotations

from enum import Enum

from .errors import InvalidTransitionError


class RequestStatus(str, Enum):
    """Supported states for a service request's lifecycle."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    EXCEPTION = "Exception"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class SlaStatus(str, Enum):
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    BREACHED = "Breached"


class Stage(str, Enum):
    """Named milestones of a request's workflow."""

    SUBMITTED = "Submitted"
    REVIEWED = "Reviewed"
    ASSIGNED = "Assigned"
    WORK_STARTED = "Work Started"
    WORK_COMPLETED = "Work Completed"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# Happy-path order; REJECTED is appended as an alternate terminal branch.
WORKFLOW_STAGES: tuple[Stage, ...] = (
    Stage.SUBMITTED,
    Stage.REVIEWED,
    Stage.ASSIGNED,
    Stage.WORK_STARTED,
    Stage.WORK_COMPLETED,
    Stage.APPROVED,
)

TERMINAL_STATUSES: frozenset[RequestStatus] = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


class ExceptionPolicy(str, Enum):
    """How the Exception status participates in the lifecycle.

    ``escape_hatch`` keeps it outside the transition graph: only a generic
    edit can enter or leave it. ``state`` models it as a regular state with
    its own edges.
    """

    ESCAPE_HATCH = "escape_hatch"
    STATE = "state"


def implied_stages(status: RequestStatus, assignee: str | None) -> tuple[Stage, ...]:
    """Milestones that must be completed for a request in ``status``.

    Every transition goes through this function so the status and the
    workflow never disagree.
    """

    stages: list[Stage] = []
    if assignee:
        stages.append(Stage.ASSIGNED)
    if status == RequestStatus.IN_PROGRESS:
        stages.append(Stage.WORK_STARTED)
    elif status == RequestStatus.APPROVED:
        stages.extend((Stage.WORK_COMPLETED, Stage.APPROVED))
    elif status == RequestStatus.REJECTED:
        stages.append(Stage.REJECTED)
    return tuple(stages)


class RequestStateMachine:
    """Validate request status transitions."""

    _TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
        RequestStatus.PENDING: frozenset(
            {RequestStatus.IN_PROGRESS, RequestStatus.APPROVED, RequestStatus.REJECTED}
        ),
        RequestStatus.IN_PROGRESS: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
        RequestStatus.APPROVED: frozenset(),
        RequestStatus.REJECTED: frozenset(),
        RequestStatus.EXCEPTION: frozenset(),
    }

    _EXCEPTION_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
        RequestStatus.PENDING: frozenset({RequestStatus.EXCEPTION}),
        RequestStatus.IN_PROGRESS: frozenset({RequestStatus.EXCEPTION}),
        RequestStatus.EXCEPTION: frozenset({RequestStatus.IN_PROGRESS, RequestStatus.REJECTED}),
    }

    def __init__(self, exception_policy: ExceptionPolicy = ExceptionPolicy.ESCAPE_HATCH) -> None:
        self.exception_policy = ExceptionPolicy(exception_policy)

    @staticmethod
    def initial_state() -> RequestStatus:
        return RequestStatus.PENDING

    @staticmethod
    def is_terminal(status: RequestStatus) -> bool:
        return status in TERMINAL_STATUSES

    def allowed_targets(self, current: RequestStatus, *, via_edit: bool = False) -> frozenset[RequestStatus]:
        """Statuses reachable from ``current``.

        ``via_edit`` marks a generic field edit; under the escape-hatch policy
        only edits may enter or leave Exception.
        """

        targets = set(self._TRANSITIONS.get(current, frozenset()))
        if self.exception_policy == ExceptionPolicy.STATE:
            targets |= self._EXCEPTION_TRANSITIONS.get(current, frozenset())
        elif via_edit:
            if current == RequestStatus.EXCEPTION:
                targets |= {status for status in RequestStatus if status != RequestStatus.EXCEPTION}
            elif not self.is_terminal(current):
                targets.add(RequestStatus.EXCEPTION)
        return frozenset(targets)

    def can_transition(self, current: RequestStatus, new: RequestStatus, *, via_edit: bool = False) -> bool:
        return new in self.allowed_targets(current, via_edit=via_edit)

    def assert_transition(self, current: RequestStatus, new: RequestStatus, *, via_edit: bool = False) -> None:
        if not self.can_transition(current, new, via_edit=via_edit):
            raise InvalidTransitionError(current, new)
