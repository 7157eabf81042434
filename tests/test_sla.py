from datetime import datetime, timedelta, timezone

from app.core.config import Settings
from app.requests.sla import SlaPolicy, evaluate_sla, sla_compliance_rate
from app.requests.state import Priority, SlaStatus


def _at(text: str) -> datetime:
    return datetime.fromisoformat(text).replace(tzinfo=timezone.utc)


def test_open_request_moves_from_on_track_to_breached(repositories):
    requests, _, _ = repositories
    faucet = requests.get("REQ002")  # Medium, 24 hours allowed

    assert evaluate_sla(faucet, _at("2023-10-25T16:00:00")) == SlaStatus.ON_TRACK
    assert evaluate_sla(faucet, _at("2023-10-26T10:00:00")) == SlaStatus.AT_RISK
    assert evaluate_sla(faucet, _at("2023-10-27T10:00:00")) == SlaStatus.BREACHED


def test_closed_request_is_measured_at_last_update(repositories):
    requests, _, _ = repositories
    chair = requests.get("REQ003")

    assert evaluate_sla(chair, _at("2030-01-01T00:00:00")) == SlaStatus.ON_TRACK


def test_policy_from_settings_overrides_hours():
    settings = Settings(sla_hours={"Critical": 1, "Low": 100}, sla_at_risk_ratio=0.5)

    policy = SlaPolicy.from_settings(settings)

    assert policy.allowed(Priority.CRITICAL) == timedelta(hours=1)
    assert policy.allowed(Priority.LOW) == timedelta(hours=100)
    assert policy.allowed(Priority.HIGH) == timedelta(hours=8)
    assert policy.at_risk_ratio == 0.5


def test_compliance_rate(repositories):
    requests, _, _ = repositories

    rate = sla_compliance_rate(requests.list(), _at("2023-10-28T09:00:00"))

    assert rate == 0.6
    assert sla_compliance_rate([], _at("2023-10-28T09:00:00")) is None
