import uuid
from collections.abc import Iterable

from sqlalchemy.orm import Session

from evalcycle.core.errors import dependency_guard
from evalcycle.core.scoring import ScoreSummary
from evalcycle.models.employee import Employee
from evalcycle.models.evaluation_cycle import EvaluationCycle
from evalcycle.models.evaluation_record import EvaluationRecord
from evalcycle.schemas.cycle import CycleOut
from evalcycle.schemas.evaluation import EvaluationOut, ScoreSummaryOut


def cycle_to_out(c: EvaluationCycle) -> CycleOut:
    return CycleOut(
        id=str(c.id),
        year=c.year,
        start_date=c.start_date,
        end_date=c.end_date,
        status=c.status,
        created_by_user_id=str(c.created_by_user_id) if c.created_by_user_id else None,
        created_at=c.created_at,
        updated_at=c.updated_at,
    )


def load_names(db: Session, records: Iterable[EvaluationRecord]) -> dict[uuid.UUID, str]:
    """Display names for every staff member and snapshot supervisor on the records, in one query."""
    ids: set[uuid.UUID] = set()
    for r in records:
        ids.add(r.staff_employee_id)
        if r.supervisor_employee_id:
            ids.add(r.supervisor_employee_id)
    if not ids:
        return {}
    with dependency_guard("employee name lookup"):
        rows = db.query(Employee.id, Employee.display_name).filter(Employee.id.in_(ids)).all()
    return {row[0]: row[1] for row in rows}


def record_to_out(r: EvaluationRecord, names: dict[uuid.UUID, str] | None = None) -> EvaluationOut:
    names = names or {}
    return EvaluationOut(
        id=str(r.id),
        cycle_id=str(r.cycle_id),
        staff_employee_id=str(r.staff_employee_id),
        staff_name=names.get(r.staff_employee_id),
        supervisor_employee_id=str(r.supervisor_employee_id) if r.supervisor_employee_id else None,
        supervisor_name=names.get(r.supervisor_employee_id) if r.supervisor_employee_id else None,
        status=r.status,
        staff_answers=r.staff_answers,
        supervisor_answers=r.supervisor_answers,
        staff_submitted_at=r.staff_submitted_at,
        supervisor_submitted_at=r.supervisor_submitted_at,
        created_at=r.created_at,
        updated_at=r.updated_at,
        version=r.version,
    )


def summary_to_out(s: ScoreSummary) -> ScoreSummaryOut:
    return ScoreSummaryOut(total=s.total, percentage=s.percentage, rating=s.rating)
