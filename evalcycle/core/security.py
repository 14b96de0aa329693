from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from evalcycle.core.errors import dependency_guard
from evalcycle.db.session import get_db
from evalcycle.models.employee import Employee
from evalcycle.models.user import User


def get_current_user(
    x_user_email: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """
    DEV AUTH: pass X-User-Email header to simulate logged-in user.
    Example: X-User-Email: admin@local.test
    """
    if not x_user_email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Email header (dev auth)",
        )

    with dependency_guard("user lookup"):
        user = db.query(User).filter(User.email == x_user_email).one_or_none()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Invalid or inactive user")
    return user


def get_employee_for_user(db: Session, user: User) -> Employee | None:
    with dependency_guard("employee lookup"):
        return db.query(Employee).filter(Employee.user_id == user.id).one_or_none()


def get_current_employee(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> Employee | None:
    """Staff record linked to the caller, if any (admins need not be staff)."""
    return get_employee_for_user(db, user)
