from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.breaktime_system.breaktime_system.main import create_app

T0 = datetime(2026, 2, 1, 10, 0, 0)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(T0)


@pytest.fixture
def client(clock):
    app = create_app("config.testing", clock=clock)
    return app.test_client()


def _signup(client, username: str, dept_id=None) -> int:
    resp = client.post(
        "/api/auth/signup",
        json={"username": username, "password": "password1", "name": username.title(), "departmentId": dept_id},
    )
    assert resp.status_code == 201
    return resp.get_json()["user"]["id"]


def test_start_and_end_break_round_trip(client, clock):
    resp = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "tea1"})
    assert resp.status_code == 201
    body = resp.get_json()
    break_id = body["break"]["id"]
    assert body["break"]["active"] is True
    assert body["break"]["date"] == "2026-02-01"
    assert body["breakType"]["code"] == "tea1"

    clock.advance(minutes=14, seconds=30)
    resp = client.post(f"/api/breaks/{break_id}/end", json={"userId": 1})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["break"]["durationMinutes"] == 15
    assert body["break"]["active"] is False
    assert body["summary"]["totalUsed"] == 15
    assert body["summary"]["totalRemaining"] == 55


def test_capacity_full_is_reported_with_counts(client):
    for name in ("ann", "ben", "cat"):
        uid = _signup(client, name)
        assert client.post("/api/breaks/start", json={"userId": uid, "breakTypeCode": "tea1"}).status_code == 201

    resp = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "tea1"})

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["kind"] == "CapacityExceeded"
    assert body["currentCount"] == 3
    assert body["limit"] == 3
    assert body["breakTypeCode"] == "tea1"


def test_second_start_returns_active_break(client):
    first = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "bio"}).get_json()

    resp = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "tea2"})

    assert resp.status_code == 409
    assert resp.get_json()["kind"] == "BreakAlreadyActive"
    assert resp.get_json()["activeBreak"]["id"] == first["break"]["id"]


def test_start_with_unknown_user_or_type(client):
    assert client.post("/api/breaks/start", json={"userId": 77, "breakTypeCode": "tea1"}).status_code == 404
    resp = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "nap"})
    assert resp.status_code == 404
    assert resp.get_json()["kind"] == "BreakTypeNotFound"


def test_start_requires_user_and_code(client):
    assert client.post("/api/breaks/start", json={"breakTypeCode": "tea1"}).status_code == 400
    assert client.post("/api/breaks/start", json={"userId": 1}).status_code == 400


def test_end_other_break_is_rejected(client):
    started = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "tea1"}).get_json()

    resp = client.post(f"/api/breaks/{started['break']['id'] + 100}/end", json={"userId": 1})

    assert resp.status_code == 404
    body = resp.get_json()
    assert body["kind"] == "InvalidBreakTarget"
    assert body["error"] == f"Break {started['break']['id'] + 100} is not your active break"
    assert body["breakId"] == started["break"]["id"] + 100
    assert body["activeBreakId"] == started["break"]["id"]


def test_end_without_active_break(client):
    resp = client.post("/api/breaks/1/end", json={"userId": 1})

    assert resp.status_code == 404
    assert resp.get_json()["kind"] == "BreakNotFound"
    assert resp.get_json()["error"] == "Break not found"
    assert "activeBreakId" not in resp.get_json()


def test_active_break_endpoint(client, clock):
    assert client.get("/api/breaks/active?userId=1").get_json() == {"activeBreak": None}

    client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "dinner"})
    clock.advance(seconds=90)
    body = client.get("/api/breaks/active?userId=1").get_json()

    assert body["activeBreak"]["breakTypeId"] == 3
    assert body["breakType"]["name"] == "Dinner Break"
    assert body["elapsedDisplay"] == "01:30"


def test_active_break_requires_user_id(client):
    assert client.get("/api/breaks/active").status_code == 400


def test_summary_and_history(client, clock):
    started = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "tea1"}).get_json()
    clock.advance(minutes=5)
    client.post(f"/api/breaks/{started['break']['id']}/end", json={"userId": 1})

    summary = client.get("/api/breaks/summary?userId=1&date=2026-02-01").get_json()["summary"]
    history = client.get("/api/breaks/history?userId=1").get_json()["breaks"]
    other_day = client.get("/api/breaks/summary?userId=1&date=2026-01-31").get_json()["summary"]

    assert summary["totalUsed"] == 5
    assert [u["code"] for u in summary["breakTypeUsage"]] == ["tea1", "tea2", "dinner", "bio"]
    assert len(history) == 1
    assert history[0]["breakType"]["code"] == "tea1"
    assert other_day["totalUsed"] == 0


def test_invalid_date_is_bad_request(client):
    assert client.get("/api/breaks/summary?userId=1&date=01-02-2026").status_code == 400


def test_availability_endpoint(client):
    rows = client.get("/api/break-types/availability").get_json()["availability"]

    assert [r["code"] for r in rows] == ["tea1", "tea2", "dinner", "bio"]
    assert rows[-1]["limit"] == "unlimited"
    assert all(r["isAvailable"] for r in rows)


def test_break_types_endpoint(client):
    types = client.get("/api/break-types").get_json()["breakTypes"]

    assert types[0]["maxConcurrent"] == 3
    assert types[3]["maxConcurrent"] == "unlimited"


def test_department_stats_endpoint(client, clock):
    dept = client.post("/api/departments", json={"name": "Quality", "code": "QA"}).get_json()["department"]
    heavy = _signup(client, "heavy", dept["id"])
    light = _signup(client, "light", dept["id"])

    b = client.post("/api/breaks/start", json={"userId": heavy, "breakTypeCode": "dinner"}).get_json()
    c = client.post("/api/breaks/start", json={"userId": light, "breakTypeCode": "bio"}).get_json()
    clock.advance(minutes=5)
    client.post(f"/api/breaks/{c['break']['id']}/end", json={"userId": light})
    clock.advance(minutes=70)
    client.post(f"/api/breaks/{b['break']['id']}/end", json={"userId": heavy})

    stats = client.get(f"/api/departments/{dept['id']}/stats?date=2026-02-01").get_json()["stats"]

    assert stats["departmentCode"] == "QA"
    assert stats["employeeCount"] == 2
    assert stats["totalBreakMinutes"] == 80
    assert stats["averageBreakMinutes"] == 40
    assert stats["exceededCount"] == 1


def test_department_stats_unknown(client):
    assert client.get("/api/departments/999/stats").status_code == 404


def test_login(client):
    ok = client.post("/api/auth/login", json={"username": "jsmith", "password": "password123"})
    bad = client.post("/api/auth/login", json={"username": "jsmith", "password": "wrong"})
    missing = client.post("/api/auth/login", json={"username": "jsmith"})

    assert ok.status_code == 200
    assert ok.get_json()["user"]["name"] == "John Smith"
    assert "password" not in ok.get_json()["user"]
    assert bad.status_code == 401
    assert missing.status_code == 400


def test_signup_duplicate_username(client):
    resp = client.post("/api/auth/signup", json={"username": "jsmith", "password": "password1"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Username already exists"


def test_department_and_user_lookups(client):
    assert len(client.get("/api/departments").get_json()["departments"]) == 5
    assert client.get("/api/departments/1").get_json()["department"]["code"] == "ENG"
    assert client.get("/api/departments/42").status_code == 404
    assert [u["username"] for u in client.get("/api/departments/1/users").get_json()["users"]] == ["jsmith"]
    assert client.get("/api/users/1").get_json()["user"]["username"] == "jsmith"
    assert client.get("/api/users/42").status_code == 404

    created = client.post("/api/users", json={"username": "zed", "password": "zedzed", "departmentId": 2})
    assert created.status_code == 201
    assert len(client.get("/api/users").get_json()["users"]) == 2


@pytest.mark.parametrize("user_id", [1.9, 0, -3, "abc", True])
def test_start_rejects_invalid_user_id(client, user_id):
    resp = client.post("/api/breaks/start", json={"userId": user_id, "breakTypeCode": "tea1"})

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "ValidationError"
    assert client.get("/api/breaks/active?userId=1").get_json() == {"activeBreak": None}


def test_whole_float_user_id_is_accepted(client):
    resp = client.post("/api/breaks/start", json={"userId": 1.0, "breakTypeCode": "tea1"})

    assert resp.status_code == 201
    assert resp.get_json()["break"]["userId"] == 1


def test_store_failure_is_a_generic_server_error():
    app = create_app("config.testing")
    app.extensions["breaktime_container"].close()

    resp = app.test_client().post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "tea1"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_container_is_closed_once_by_the_app_finalizer():
    app = create_app("config.testing")
    container = app.extensions["breaktime_container"]
    finalizer = app.extensions["breaktime_container_close"]

    assert finalizer.alive
    finalizer()

    assert not finalizer.alive
    assert not container.database.is_open


def test_summary_reports_per_type_exceeded_flag(client, clock):
    started = client.post("/api/breaks/start", json={"userId": 1, "breakTypeCode": "bio"}).get_json()
    clock.advance(minutes=11)
    client.post(f"/api/breaks/{started['break']['id']}/end", json={"userId": 1})

    usage = client.get("/api/breaks/summary?userId=1").get_json()["summary"]["breakTypeUsage"]

    assert {u["code"]: u["exceeded"] for u in usage} == {"tea1": False, "tea2": False, "dinner": False, "bio": True}
