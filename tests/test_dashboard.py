from datetime import datetime, timezone

from app.dashboard import build_dashboard
from app.requests.state import RequestStatus


def test_dashboard_summarises_sample_data(repositories, people):
    requests, assets, _ = repositories

    summary = build_dashboard(
        people["employee"],
        requests.list(),
        assets.list(),
        now=datetime(2023, 10, 28, 9, 0, tzinfo=timezone.utc),
    )

    assert summary.open_requests == 3
    assert summary.critical_assets == 2
    assert summary.status_distribution == {status: 1 for status in RequestStatus}
    assert summary.sla_compliance_rate == 0.6
    assert [entry.user for entry in summary.recent_activity] == ["USR007", "USR001", "USR005", "USR006", "USR008"]


def test_dashboard_reflects_new_requests(service, repositories, people):
    requests, assets, _ = repositories
    service.create_request(
        people["employee"],
        title="Flickering light",
        description="Hallway light flickers.",
        priority="Low",
        category="Electrical",
    )

    summary = build_dashboard(people["admin"], requests.list(), assets.list(), now=datetime.now(timezone.utc))

    assert summary.open_requests == 4
    assert summary.status_distribution[RequestStatus.PENDING] == 2
