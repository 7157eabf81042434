import json

from app.requests.schemas import RequestSnapshot, dump_requests, load_requests
from app.requests.state import RequestStatus, SlaStatus, Stage
from app.seed import SAMPLE_REQUESTS


def test_sample_requests_load_with_parsed_types(repositories):
    requests, _, _ = repositories
    outage = requests.get("REQ004")

    assert outage.status == RequestStatus.EXCEPTION
    assert outage.created_at.tzinfo is not None
    started = outage.step(Stage.WORK_STARTED)
    assert not started.completed
    assert started.date is not None
    assert started.sla_status == SlaStatus.BREACHED

    printer = requests.get("REQ005")
    assert [step.stage for step in printer.workflow] == [Stage.SUBMITTED, Stage.REVIEWED, Stage.REJECTED]


def test_completed_sample_steps_have_date_and_actor(repositories):
    requests, _, _ = repositories
    for request in requests.list():
        for step in request.workflow:
            if step.completed:
                assert step.date is not None and step.by is not None


def test_dump_uses_camel_case_keys(repositories):
    requests, _, _ = repositories

    payload = json.loads(dump_requests([requests.get("REQ001")]))

    assert payload[0]["assetId"] == "AST001"
    assert payload[0]["auditLog"][0]["action"] == "created request"
    assert payload[0]["workflow"][0]["slaStatus"] == "On Track"
    assert payload[0]["files"] == [{"name": "ac_unit_photo.jpg", "url": "#"}]


def test_dump_and_load_preserve_requests(repositories):
    requests, _, _ = repositories

    restored = load_requests(dump_requests(requests.list()))

    assert restored == requests.list()


def test_snapshot_from_engine_request(engine, leak_fields):
    request = engine.create(leak_fields, "Charlie")

    snapshot = RequestSnapshot.from_request(request)

    assert snapshot.to_request() == request
    assert len(SAMPLE_REQUESTS) == 5
