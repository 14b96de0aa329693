from fastapi import HTTPException
from sqlalchemy.orm import Session

from evalcycle.core.rbac import is_admin
from evalcycle.core.security import get_employee_for_user
from evalcycle.models.evaluation_record import EvaluationRecord
from evalcycle.models.user import User


def assert_user_is_staff(db: Session, user: User, record: EvaluationRecord):
    emp = get_employee_for_user(db, user)
    if not emp or emp.id != record.staff_employee_id:
        raise HTTPException(status_code=403, detail="Only the evaluated staff member can perform this action")


def assert_user_is_supervisor(db: Session, user: User, record: EvaluationRecord):
    # Checked against the snapshot taken at cycle open, not the live relation
    emp = get_employee_for_user(db, user)
    if not emp or record.supervisor_employee_id is None or emp.id != record.supervisor_employee_id:
        raise HTTPException(status_code=403, detail="Only the assigned supervisor can perform this action")


def assert_user_can_view(db: Session, user: User, record: EvaluationRecord):
    if is_admin(db, user):
        return
    emp = get_employee_for_user(db, user)
    if not emp or emp.id not in (record.staff_employee_id, record.supervisor_employee_id):
        raise HTTPException(status_code=403, detail="Not allowed to view this evaluation")
