from evalcycle.models.evaluation_cycle import EvaluationCycle
from evalcycle.models.evaluation_record import EvaluationRecord
from tests.helpers import (
    auth,
    create_admin,
    create_employee,
    create_team,
    create_user,
    full_answers,
)

ADMIN = {"X-User-Email": "admin@local.test"}


def _open(client, year=2025, headers=ADMIN):
    return client.post("/annual-evaluations/cycles", headers=headers, json={"year": year})


def test_open_cycle_creates_records(client, db_session):
    create_admin(db_session)
    create_team(db_session)

    r = _open(client)
    assert r.status_code == 201
    body = r.json()
    assert body["year"] == 2025
    assert body["status"] == "active"
    assert body["start_date"] == "2025-12-01"
    assert body["end_date"] == "2026-02-28"

    assert db_session.query(EvaluationRecord).count() == 3


def test_open_cycle_requires_admin(client, db_session):
    create_team(db_session)

    r = _open(client, headers=auth("A100"))
    assert r.status_code == 403
    assert db_session.query(EvaluationCycle).count() == 0


def test_open_cycle_requires_header(client, db_session):
    r = client.post("/annual-evaluations/cycles", json={"year": 2025})
    assert r.status_code == 401


def test_open_cycle_rejects_out_of_range_year(client, db_session):
    create_admin(db_session)
    r = _open(client, year=1999)
    assert r.status_code == 422


def test_open_cycle_missing_supervisors(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    create_employee(db_session, "D400", "Dave")

    r = _open(client)
    assert r.status_code == 409
    detail = r.json()["detail"]
    assert detail["code"] == "missing_supervisors"
    assert detail["count"] == 1
    assert detail["names"] == ["Dave"]

    assert db_session.query(EvaluationCycle).count() == 0
    assert db_session.query(EvaluationRecord).count() == 0


def test_open_cycle_duplicate_year(client, db_session):
    create_admin(db_session)
    create_team(db_session)

    assert _open(client).status_code == 201
    r = _open(client)
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "duplicate_year"
    assert r.json()["detail"]["year"] == 2025
    assert db_session.query(EvaluationRecord).count() == 3


def test_user_flagged_admin_can_open(client, db_session):
    create_user(db_session, "root@local.test", "Root", is_admin=True)
    create_team(db_session)

    r = _open(client, headers={"X-User-Email": "root@local.test"})
    assert r.status_code == 201


def test_list_and_get_cycles(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    _open(client, year=2024)
    created = _open(client, year=2025).json()

    r = client.get("/annual-evaluations/cycles", headers=auth("B200"))
    assert r.status_code == 200
    assert [c["year"] for c in r.json()] == [2025, 2024]

    r = client.get(f"/annual-evaluations/cycles/{created['id']}", headers=auth("B200"))
    assert r.status_code == 200
    assert r.json()["year"] == 2025


def test_get_cycle_not_found(client, db_session):
    create_admin(db_session)
    r = client.get(
        "/annual-evaluations/cycles/00000000-0000-0000-0000-000000000000", headers=ADMIN
    )
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "not_found"


def test_close_cycle_is_idempotent(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    cycle_id = _open(client).json()["id"]

    r1 = client.post(f"/annual-evaluations/cycles/{cycle_id}/close", headers=ADMIN)
    assert r1.status_code == 200
    assert r1.json()["status"] == "closed"

    r2 = client.post(f"/annual-evaluations/cycles/{cycle_id}/close", headers=ADMIN)
    assert r2.status_code == 200
    assert r2.json()["status"] == "closed"
    assert r2.json()["updated_at"] == r1.json()["updated_at"]


def test_close_cycle_requires_admin(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    cycle_id = _open(client).json()["id"]

    r = client.post(f"/annual-evaluations/cycles/{cycle_id}/close", headers=auth("C300"))
    assert r.status_code == 403


def test_list_cycle_evaluations(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    cycle_id = _open(client).json()["id"]

    r = client.get(f"/annual-evaluations/cycles/{cycle_id}/evaluations", headers=ADMIN)
    assert r.status_code == 200
    items = r.json()
    assert len(items) == 3
    assert {i["staff_name"] for i in items} == {"Alice", "Bob", "Carol"}
    by_staff = {i["staff_name"]: i for i in items}
    assert by_staff["Alice"]["supervisor_name"] == "Carol"
    assert by_staff["Carol"]["supervisor_name"] == "Alice"
    assert all(i["status"] == "pending_staff" for i in items)


def test_list_cycle_evaluations_filter_and_pagination(client, db_session):
    create_admin(db_session)
    team = create_team(db_session)
    cycle_id = _open(client).json()["id"]

    records = client.get(f"/annual-evaluations/cycles/{cycle_id}/evaluations", headers=ADMIN).json()
    alice_record = next(i for i in records if i["staff_employee_id"] == str(team["alice"].id))
    client.post(
        f"/annual-evaluations/evaluations/{alice_record['id']}/staff-submission",
        headers=auth("A100"),
        json={"answers": full_answers(4)},
    )

    r = client.get(
        f"/annual-evaluations/cycles/{cycle_id}/evaluations",
        headers=ADMIN,
        params={"status": "pending_supervisor"},
    )
    assert r.status_code == 200
    assert [i["id"] for i in r.json()] == [alice_record["id"]]

    r = client.get(
        f"/annual-evaluations/cycles/{cycle_id}/evaluations",
        headers=ADMIN,
        params={"limit": 2, "include_pagination": "true"},
    )
    body = r.json()
    assert len(body["items"]) == 2
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["has_more"] is True


def test_list_cycle_evaluations_rejects_unknown_status(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    cycle_id = _open(client).json()["id"]

    r = client.get(
        f"/annual-evaluations/cycles/{cycle_id}/evaluations",
        headers=ADMIN,
        params={"status": "archived"},
    )
    assert r.status_code == 422


def test_cycle_stats_endpoint(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    cycle_id = _open(client).json()["id"]

    r = client.get(f"/annual-evaluations/cycles/{cycle_id}/stats", headers=auth("A100"))
    assert r.status_code == 200
    assert r.json() == {
        "cycle_id": cycle_id,
        "year": 2025,
        "total": 3,
        "pending_staff": 3,
        "pending_supervisor": 0,
        "completed": 0,
        "percent_complete": 0,
    }


def test_year_stats_endpoint(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    _open(client)

    r = client.get("/annual-evaluations/stats/2025", headers=ADMIN)
    assert r.status_code == 200
    assert r.json() == {"year": 2025, "total": 3, "staff_submitted": 0, "supervisor_submitted": 0}

    r = client.get("/annual-evaluations/stats/2030", headers=ADMIN)
    assert r.status_code == 200
    assert r.json()["total"] == 0


def test_staff_without_supervisors_endpoint(client, db_session):
    create_admin(db_session)
    create_team(db_session)
    create_employee(db_session, "Z900", "Zed")
    create_employee(db_session, "Y800", "Yara")
    create_employee(db_session, "X700", "Xavier", is_active=False)

    r = client.get("/annual-evaluations/staff-without-supervisors", headers=ADMIN)
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 2
    assert [i["name"] for i in body["items"]] == ["Yara", "Zed"]

    r = client.get("/annual-evaluations/staff-without-supervisors", headers=auth("A100"))
    assert r.status_code == 403
