import pytest

from app.requests.errors import InvalidTransitionError
from app.requests.state import (
    ExceptionPolicy,
    RequestStateMachine,
    RequestStatus,
    Stage,
    implied_stages,
)


def test_state_machine_allows_expected_transitions():
    machine = RequestStateMachine()
    assert machine.initial_state() == RequestStatus.PENDING
    assert machine.can_transition(RequestStatus.PENDING, RequestStatus.IN_PROGRESS)
    assert machine.can_transition(RequestStatus.PENDING, RequestStatus.APPROVED)
    assert machine.can_transition(RequestStatus.PENDING, RequestStatus.REJECTED)
    assert machine.can_transition(RequestStatus.IN_PROGRESS, RequestStatus.APPROVED)
    assert machine.can_transition(RequestStatus.IN_PROGRESS, RequestStatus.REJECTED)


@pytest.mark.parametrize("terminal", [RequestStatus.APPROVED, RequestStatus.REJECTED])
def test_terminal_states_have_no_outgoing_transitions(terminal):
    machine = RequestStateMachine()
    assert machine.allowed_targets(terminal) == frozenset()
    assert machine.allowed_targets(terminal, via_edit=True) == frozenset()
    with pytest.raises(InvalidTransitionError):
        machine.assert_transition(terminal, terminal)


def test_in_progress_cannot_return_to_pending():
    machine = RequestStateMachine()
    with pytest.raises(InvalidTransitionError) as exc:
        machine.assert_transition(RequestStatus.IN_PROGRESS, RequestStatus.PENDING)

    assert exc.value.current == RequestStatus.IN_PROGRESS
    assert exc.value.target == RequestStatus.PENDING


def test_escape_hatch_only_reaches_exception_through_edits():
    machine = RequestStateMachine(ExceptionPolicy.ESCAPE_HATCH)
    assert not machine.can_transition(RequestStatus.PENDING, RequestStatus.EXCEPTION)
    assert machine.can_transition(RequestStatus.PENDING, RequestStatus.EXCEPTION, via_edit=True)
    assert machine.can_transition(RequestStatus.EXCEPTION, RequestStatus.PENDING, via_edit=True)
    assert not machine.can_transition(RequestStatus.EXCEPTION, RequestStatus.APPROVED)


def test_state_policy_models_exception_edges():
    machine = RequestStateMachine(ExceptionPolicy.STATE)
    assert machine.can_transition(RequestStatus.IN_PROGRESS, RequestStatus.EXCEPTION)
    assert machine.allowed_targets(RequestStatus.EXCEPTION) == {RequestStatus.IN_PROGRESS, RequestStatus.REJECTED}
    assert not machine.can_transition(RequestStatus.EXCEPTION, RequestStatus.PENDING, via_edit=True)


def test_policy_accepts_configuration_strings():
    assert RequestStateMachine("state").exception_policy == ExceptionPolicy.STATE


def test_implied_stages_follow_status_and_assignee():
    assert implied_stages(RequestStatus.PENDING, None) == ()
    assert implied_stages(RequestStatus.IN_PROGRESS, "USR003") == (Stage.ASSIGNED, Stage.WORK_STARTED)
    assert implied_stages(RequestStatus.APPROVED, None) == (Stage.WORK_COMPLETED, Stage.APPROVED)
    assert implied_stages(RequestStatus.REJECTED, None) == (Stage.REJECTED,)
    assert implied_stages(RequestStatus.EXCEPTION, None) == ()
