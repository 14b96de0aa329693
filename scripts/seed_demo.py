from sqlalchemy.orm import Session

from evalcycle.core.rbac import ADMIN
from evalcycle.db.session import SessionLocal
from evalcycle.models.user import User
from evalcycle.models.employee import Employee
from evalcycle.models.rbac import Role, UserRole

# employee_number, display_name, email, department, supervisor employee_number
DEMO_STAFF = [
    ("E100", "Dana Director", "director@local.test", "Management", "E200"),
    ("E200", "Sam Supervisor", "supervisor@local.test", "Operations", "E100"),
    ("E300", "Alex Staff", "staff1@local.test", "Operations", "E200"),
    ("E400", "Robin Staff", "staff2@local.test", "Operations", "E200"),
    ("E500", "Jordan Staff", "staff3@local.test", "Finance", "E100"),
]


def get_or_create_user(db: Session, email: str, full_name: str, is_admin_flag: bool = False) -> User:
    u = db.query(User).filter(User.email == email).one_or_none()
    if u:
        return u
    u = User(email=email, full_name=full_name, is_active=True, is_admin=is_admin_flag)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def get_or_create_role(db: Session, name: str) -> Role:
    r = db.query(Role).filter(Role.name == name).one_or_none()
    if r:
        return r
    r = Role(name=name)
    db.add(r)
    db.commit()
    db.refresh(r)
    return r


def ensure_user_role(db: Session, user_id, role_id):
    ur = (
        db.query(UserRole)
        .filter(UserRole.user_id == user_id, UserRole.role_id == role_id)
        .one_or_none()
    )
    if ur:
        return ur
    ur = UserRole(user_id=user_id, role_id=role_id)
    db.add(ur)
    db.commit()
    db.refresh(ur)
    return ur


def get_or_create_employee(
    db: Session, employee_number: str, display_name: str, email: str, department: str, user_id=None
) -> Employee:
    e = db.query(Employee).filter(Employee.employee_number == employee_number).one_or_none()
    if e:
        # ensure link if provided
        if user_id and e.user_id != user_id:
            e.user_id = user_id
            db.commit()
            db.refresh(e)
        return e

    e = Employee(
        employee_number=employee_number,
        display_name=display_name,
        email=email,
        department=department,
        is_active=True,
        user_id=user_id,
    )
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


def main():
    db = SessionLocal()
    try:
        # ---- Admin ----
        admin_role = get_or_create_role(db, ADMIN)
        admin_user = get_or_create_user(db, "admin@local.test", "Admin Local", is_admin_flag=True)
        ensure_user_role(db, admin_user.id, admin_role.id)

        # ---- Staff, each with a login ----
        employees: dict[str, Employee] = {}
        for number, name, email, department, _ in DEMO_STAFF:
            user = get_or_create_user(db, email, name)
            employees[number] = get_or_create_employee(db, number, name, email, department, user_id=user.id)

        # ---- Supervisors (every active staff member needs one before a cycle can open) ----
        for number, _, _, _, supervisor_number in DEMO_STAFF:
            employees[number].supervisor_employee_id = employees[supervisor_number].id
        db.commit()

        print("\n=== Demo Seed Complete ===")
        print("Users (use as X-User-Email header):")
        print(f"  admin: {admin_user.email}")
        for number, name, email, _, supervisor_number in DEMO_STAFF:
            print(f"  {email:<24} {name:<16} supervisor: {employees[supervisor_number].display_name}")

        print("\nNext actions:")
        print("  1) (Admin) Open the cycle: POST /annual-evaluations/cycles {\"year\": 2025}")
        print("  2) (Staff) List my evaluations: GET /me/annual-evaluations?pending_only=true")
        print("  3) (Staff) Submit: POST /annual-evaluations/evaluations/{evaluation_id}/staff-submission")
        print("  4) (Supervisor) Review: POST /annual-evaluations/evaluations/{evaluation_id}/supervisor-submission")
        print("  5) (Admin) Progress: GET /annual-evaluations/cycles/{cycle_id}/stats")
        print()

    finally:
        db.close()


if __name__ == "__main__":
    main()
