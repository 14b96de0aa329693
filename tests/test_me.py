import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from evalcycle.api.serializers import load_names
from evalcycle.core.errors import DependencyUnavailable
from evalcycle.db.session import get_db
from evalcycle.main import app
from evalcycle.models.evaluation_record import EvaluationRecord
from evalcycle.models.user import User
from evalcycle.services.cycle_manager import close_cycle, open_cycle
from evalcycle.services.evaluation_workflow import submit_staff_evaluation, submit_supervisor_evaluation
from tests.helpers import (
    auth,
    create_admin,
    create_team,
    create_user,
    full_answers,
    record_for,
)


def test_me_requires_header(db_session):
    client = TestClient(app)
    r = client.get("/me")
    assert r.status_code == 401


def test_me_returns_user(db_session):
    # seed user
    u = User(email="admin@local.test", full_name="Admin Local", is_admin=True)
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)

    client = TestClient(app)
    r = client.get("/me", headers={"X-User-Email": "admin@local.test"})
    assert r.status_code == 200
    body = r.json()
    assert body["email"] == "admin@local.test"
    assert body["is_admin"] is True
    assert body["employee_id"] is None


def test_me_reports_admin_role_and_supervisor(db_session):
    create_admin(db_session)
    team = create_team(db_session)

    client = TestClient(app)
    assert client.get("/me", headers=auth("admin@local.test")).json()["is_admin"] is True

    body = client.get("/me", headers=auth("A100")).json()
    assert body["is_admin"] is False
    assert body["employee_id"] == str(team["alice"].id)
    assert body["supervisor_employee_id"] == str(team["carol"].id)


def test_my_annual_evaluations_requires_auth(db_session):
    client = TestClient(app)
    r = client.get("/me/annual-evaluations")
    assert r.status_code == 401


def test_my_annual_evaluations_no_employee(db_session):
    """Users without an employee record get an empty list"""
    create_user(db_session, "user@test.com")
    client = TestClient(app)
    r = client.get("/me/annual-evaluations", headers={"X-User-Email": "user@test.com"})
    assert r.status_code == 200
    assert r.json() == []


def test_my_annual_evaluations_across_years(db_session):
    admin = create_admin(db_session)
    team = create_team(db_session)
    c2024 = open_cycle(db_session, year=2024, initiated_by=admin)
    close_cycle(db_session, cycle_id=c2024.id, actor=admin)
    c2025 = open_cycle(db_session, year=2025, initiated_by=admin)

    old = record_for(db_session, c2024, team["alice"])
    submit_staff_evaluation(db_session, old.id, full_answers(3))

    client = TestClient(app)
    r = client.get("/me/annual-evaluations", headers=auth("A100"))
    assert r.status_code == 200
    items = r.json()
    assert {i["cycle_id"] for i in items} == {str(c2024.id), str(c2025.id)}
    assert all(i["staff_employee_id"] == str(team["alice"].id) for i in items)

    r = client.get("/me/annual-evaluations", headers=auth("A100"), params={"pending_only": "true"})
    items = r.json()
    assert len(items) == 1
    assert items[0]["cycle_id"] == str(c2025.id)
    assert items[0]["status"] == "pending_staff"


def test_my_supervisee_evaluations_only_after_staff_submitted(db_session):
    admin = create_admin(db_session)
    team = create_team(db_session)
    cycle = open_cycle(db_session, year=2025, initiated_by=admin)

    client = TestClient(app)
    # carol supervises alice and bob, nobody has submitted yet
    assert client.get("/me/supervisee-evaluations", headers=auth("C300")).json() == []

    alice_record = record_for(db_session, cycle, team["alice"])
    submit_staff_evaluation(db_session, alice_record.id, full_answers(3))

    r = client.get("/me/supervisee-evaluations", headers=auth("C300"))
    assert r.status_code == 200
    items = r.json()
    assert [i["id"] for i in items] == [str(alice_record.id)]
    assert items[0]["staff_name"] == "Alice"
    assert items[0]["status"] == "pending_supervisor"

    submit_supervisor_evaluation(db_session, alice_record.id, full_answers(4))
    r = client.get(
        "/me/supervisee-evaluations", headers=auth("C300"), params={"cycle_id": str(cycle.id)}
    )
    assert [i["status"] for i in r.json()] == ["completed"]

    # bob supervises nobody
    assert client.get("/me/supervisee-evaluations", headers=auth("B200")).json() == []


def test_my_pending_supervisee_count(db_session):
    admin = create_admin(db_session)
    team = create_team(db_session)
    cycle = open_cycle(db_session, year=2025, initiated_by=admin)
    for name in ("alice", "bob"):
        submit_staff_evaluation(db_session, record_for(db_session, cycle, team[name]).id, full_answers(3))

    client = TestClient(app)
    r = client.get("/me/pending-supervisee-count", headers=auth("C300"))
    assert r.status_code == 200
    assert r.json() == {"supervisor_employee_id": str(team["carol"].id), "pending": 2}

    r = client.get("/me/pending-supervisee-count", headers=auth("admin@local.test"))
    assert r.json() == {"supervisor_employee_id": None, "pending": 0}


class _RecordsUnreachable:
    """Real session, except that reads of evaluation records lose the connection."""

    def __init__(self, inner, fail_on):
        self._inner = inner
        self._fail_on = fail_on

    def query(self, *entities, **kwargs):
        if entities and entities[0] is self._fail_on:
            raise OperationalError("SELECT annual_evaluations", {}, Exception("connection refused"))
        return self._inner.query(*entities, **kwargs)

    def __getattr__(self, name):
        return getattr(self._inner, name)


@pytest.mark.parametrize("path", ["/me/annual-evaluations", "/me/supervisee-evaluations"])
def test_my_evaluation_lists_report_unreachable_store(db_session, path):
    create_team(db_session)

    def _flaky_db():
        yield _RecordsUnreachable(db_session, EvaluationRecord)

    app.dependency_overrides[get_db] = _flaky_db
    client = TestClient(app)
    r = client.get(path, headers=auth("C300"))

    assert r.status_code == 503
    assert r.json()["detail"]["code"] == "dependency_unavailable"


def test_name_lookup_reports_unreachable_store(db_session):
    from evalcycle.models.employee import Employee

    admin = create_admin(db_session)
    team = create_team(db_session)
    cycle = open_cycle(db_session, year=2025, initiated_by=admin)
    record = record_for(db_session, cycle, team["alice"])

    with pytest.raises(DependencyUnavailable):
        load_names(_RecordsUnreachable(db_session, Employee.id), [record])
