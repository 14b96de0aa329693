from sqlalchemy.orm import Session

from evalcycle.core.questions import QUESTION_IDS
from evalcycle.models.user import User
from evalcycle.models.employee import Employee
from evalcycle.models.rbac import Role, UserRole
from evalcycle.models.evaluation_cycle import EvaluationCycle
from evalcycle.models.evaluation_record import EvaluationRecord

def ensure_role(db, name: str) -> Role:
    r = db.query(Role).filter(Role.name == name).one_or_none()
    if r:
        return r
    r = Role(name=name)
    db.add(r)
    db.commit()
    db.refresh(r)
    return r

def create_user(db, email: str, full_name="User", is_admin=False) -> User:
    u = User(email=email, full_name=full_name, is_active=True, is_admin=is_admin)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u

def grant_role(db, user: User, role_name: str):
    role = ensure_role(db, role_name)
    exists = db.query(UserRole).filter(UserRole.user_id == user.id, UserRole.role_id == role.id).one_or_none()
    if not exists:
        db.add(UserRole(user_id=user.id, role_id=role.id))
        db.commit()

def create_admin(db, email: str = "admin@local.test") -> User:
    admin = create_user(db, email, "Admin")
    grant_role(db, admin, "ADMIN")
    return admin

def create_employee(
    db,
    employee_number: str,
    display_name: str,
    user: User | None = None,
    supervisor: Employee | None = None,
    is_active: bool = True,
) -> Employee:
    e = Employee(
        employee_number=employee_number,
        display_name=display_name,
        user_id=(user.id if user else None),
        supervisor_employee_id=(supervisor.id if supervisor else None),
        is_active=is_active,
    )
    db.add(e)
    db.commit()
    db.refresh(e)
    return e

def set_supervisor(db: Session, employee: Employee, supervisor: Employee | None) -> Employee:
    employee.supervisor_employee_id = supervisor.id if supervisor else None
    db.commit()
    db.refresh(employee)
    return employee

def create_staff_with_login(db, employee_number: str, name: str, supervisor: Employee | None = None) -> Employee:
    """Employee linked to a user whose email is <employee_number>@local.test"""
    user = create_user(db, f"{employee_number.lower()}@local.test", name)
    return create_employee(db, employee_number, name, user=user, supervisor=supervisor)

def create_team(db: Session) -> dict[str, Employee]:
    """
    Three active staff, each with a supervisor:
      carol supervises alice and bob; alice supervises carol.
    """
    alice = create_staff_with_login(db, "A100", "Alice")
    bob = create_staff_with_login(db, "B200", "Bob")
    carol = create_staff_with_login(db, "C300", "Carol")
    set_supervisor(db, alice, carol)
    set_supervisor(db, bob, carol)
    set_supervisor(db, carol, alice)
    return {"alice": alice, "bob": bob, "carol": carol}

def full_answers(level: int = 3) -> dict[str, int]:
    return {qid: level for qid in QUESTION_IDS}

def record_for(db: Session, cycle: EvaluationCycle, staff: Employee) -> EvaluationRecord:
    return (
        db.query(EvaluationRecord)
        .filter(
            EvaluationRecord.cycle_id == cycle.id,
            EvaluationRecord.staff_employee_id == staff.id,
        )
        .one()
    )

def auth(employee_number_or_email: str) -> dict[str, str]:
    email = employee_number_or_email if "@" in employee_number_or_email else f"{employee_number_or_email.lower()}@local.test"
    return {"X-User-Email": email}
