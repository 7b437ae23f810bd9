from __future__ import annotations

import pytest

from src.campus_attendance.campus_attendance.main import create_app
from src.campus_attendance.campus_attendance.snapshots.repository import InMemorySnapshotRepository


@pytest.fixture
def client(monkeypatch, snapshot):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(snapshot_repo=InMemorySnapshotRepository(snapshot))
    return app.test_client()


def test_requests_without_actor_are_rejected(client):
    res = client.get("/api/ledger")
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_actor_can_come_from_header(client):
    res = client.get("/api/dashboard", headers={"X-Actor-Id": "T1"})
    assert res.status_code == 200
    assert res.get_json()["stats"]["today_shift"] in {"Day Shift", "Unassigned"}


def test_access_endpoint_returns_decision(client):
    res = client.get("/api/access", query_string={"actor_id": "A1", "target_id": "SA1"})
    body = res.get_json()

    assert res.status_code == 200
    assert body["visible"] is False
    assert body["deletable"] is True


def test_access_endpoint_requires_target(client):
    res = client.get("/api/access", query_string={"actor_id": "A1"})
    assert res.status_code == 400


def test_unknown_actor_is_a_validation_error(client):
    res = client.get("/api/directory", query_string={"actor_id": "NOPE"})
    assert res.status_code == 400
    assert res.get_json()["message"] == "Actor does not exist"


def test_directory_filters_by_role(client):
    res = client.get("/api/directory", query_string={"actor_id": "T1", "role": "STUDENT"})
    ids = [row["id"] for row in res.get_json()["rows"]]
    assert ids == ["ST1"]


def test_ledger_endpoint(client):
    res = client.get(
        "/api/ledger",
        query_string={"actor_id": "SA1", "start": "2026-02-10", "end": "2026-02-10", "user_id": "T1"},
    )
    rows = res.get_json()["rows"]

    assert res.status_code == 200
    assert [r["record_id"] for r in rows] == ["R1"]
    assert rows[0]["shift_label"] == "Day Shift"
    assert rows[0]["is_late"] is True


def test_ledger_rejects_bad_dates(client):
    res = client.get("/api/ledger", query_string={"actor_id": "SA1", "start": "10/02/2026"})
    assert res.status_code == 400


def test_roster_endpoint(client):
    res = client.get("/api/roster", query_string={"actor_id": "SA1", "week_of": "2026-02-11"})
    body = res.get_json()

    assert body["week_start"] == "2026-02-09"
    t1 = next(r for r in body["rows"] if r["id"] == "T1")
    assert {c["shift_label"] for c in t1["days"]} == {"Day Shift"}


def test_shift_resolve_uses_class_binding(client):
    res = client.get("/api/shifts/resolve", query_string={"actor_id": "T1", "user_id": "ST1", "date": "2026-02-10"})
    assert res.get_json()["shift"]["label"] == "Morning Shift"


def test_shift_resolve_outside_any_binding(client):
    res = client.get("/api/shifts/resolve", query_string={"actor_id": "SA1", "user_id": "T2", "date": "2026-02-10"})
    assert res.get_json()["shift"] is None


def test_shift_resolve_respects_visibility(client):
    res = client.get("/api/shifts/resolve", query_string={"actor_id": "T1", "user_id": "T2", "date": "2026-02-10"})
    assert res.status_code == 403


def test_punch_endpoint_opens_a_record(client):
    res = client.post("/api/attendance/punch", query_string={"actor_id": "T2"})
    body = res.get_json()

    assert res.status_code == 200
    assert body["action"] == "checkin"
    assert body["record"]["method"] == "Terminal"


def test_manual_entry_endpoint(client):
    res = client.post(
        "/api/attendance/manual",
        query_string={"actor_id": "SCA1"},
        json={"user_id": "T1", "date": "2026-02-10", "status": "Absent", "method": "Proxy"},
    )
    record = res.get_json()["record"]

    assert res.status_code == 200
    assert record["id"] == "R1"
    assert record["method"] == "Proxy"


def test_manual_entry_for_protected_identity_is_forbidden(client):
    res = client.post(
        "/api/attendance/manual",
        query_string={"actor_id": "T1"},
        json={"user_id": "SCA1", "date": "2026-02-10", "status": "Present"},
    )
    assert res.status_code == 403


def test_review_endpoint(client):
    res = client.get("/api/attendance/R1/review", query_string={"actor_id": "SA1"})
    body = res.get_json()

    assert body["is_late"] is True
    assert body["worked_hours"] == 7.7


def test_directory_reports_jurisdiction(client):
    res = client.get("/api/directory", query_string={"actor_id": "SA1"})
    rows = {row["id"]: row for row in res.get_json()["rows"]}

    assert rows["RP1"]["jurisdiction"] == {"kind": "School", "name": "Thibyan Central High"}
    assert rows["RP3"]["jurisdiction"] is None
