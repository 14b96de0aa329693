import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from evalcycle.api.serializers import load_names, record_to_out
from evalcycle.core.errors import dependency_guard
from evalcycle.core.rbac import is_admin
from evalcycle.core.security import get_current_employee, get_current_user
from evalcycle.db.session import get_db
from evalcycle.models.employee import Employee
from evalcycle.models.evaluation_record import EvaluationRecord, EvaluationStatus
from evalcycle.models.user import User
from evalcycle.schemas.evaluation import EvaluationOut
from evalcycle.schemas.stats import PendingSuperviseeCount
from evalcycle.services import progress

router = APIRouter(tags=["me"])


@router.get("/me")
def me(
    current_user: User = Depends(get_current_user),
    employee: Employee | None = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    """Get current user information including linked employee and supervisor"""
    return {
        "id": str(current_user.id),
        "email": current_user.email,
        "full_name": current_user.full_name,
        "is_admin": is_admin(db, current_user),
        "is_active": current_user.is_active,
        "employee_id": str(employee.id) if employee else None,
        "supervisor_employee_id": (
            str(employee.supervisor_employee_id)
            if employee and employee.supervisor_employee_id
            else None
        ),
    }


@router.get("/me/annual-evaluations", response_model=list[EvaluationOut])
def my_annual_evaluations(
    pending_only: bool = Query(default=False, description="Only evaluations still awaiting my self-assessment"),
    db: Session = Depends(get_db),
    employee: Employee | None = Depends(get_current_employee),
):
    """My own evaluations across all years, newest first."""
    if not employee:
        return []

    with dependency_guard("my evaluations listing"):
        query = db.query(EvaluationRecord).filter(EvaluationRecord.staff_employee_id == employee.id)
        if pending_only:
            query = query.filter(EvaluationRecord.status == EvaluationStatus.PENDING_STAFF.value)

        records = query.order_by(EvaluationRecord.created_at.desc(), EvaluationRecord.id.asc()).all()
        names = load_names(db, records)
    return [record_to_out(r, names) for r in records]


@router.get("/me/supervisee-evaluations", response_model=list[EvaluationOut])
def my_supervisee_evaluations(
    cycle_id: uuid.UUID | None = Query(default=None, description="Filter by cycle ID"),
    db: Session = Depends(get_db),
    employee: Employee | None = Depends(get_current_employee),
):
    """
    Evaluations where I am the snapshot supervisor and the staff member has
    already submitted (pending_supervisor or completed).
    """
    if not employee:
        return []

    with dependency_guard("supervisee evaluations listing"):
        query = db.query(EvaluationRecord).filter(
            EvaluationRecord.supervisor_employee_id == employee.id,
            EvaluationRecord.status.in_(
                [EvaluationStatus.PENDING_SUPERVISOR.value, EvaluationStatus.COMPLETED.value]
            ),
        )
        if cycle_id:
            query = query.filter(EvaluationRecord.cycle_id == cycle_id)

        records = query.order_by(EvaluationRecord.created_at.asc(), EvaluationRecord.id.asc()).all()
        names = load_names(db, records)
    return [record_to_out(r, names) for r in records]


@router.get("/me/pending-supervisee-count", response_model=PendingSuperviseeCount)
def my_pending_supervisee_count(
    db: Session = Depends(get_db),
    employee: Employee | None = Depends(get_current_employee),
):
    if not employee:
        return PendingSuperviseeCount(supervisor_employee_id=None, pending=0)
    return PendingSuperviseeCount(
        supervisor_employee_id=str(employee.id),
        pending=progress.pending_supervisee_count(db, employee.id),
    )
