import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from evalcycle.core.security import get_current_user
from evalcycle.db.session import get_db
from evalcycle.models.employee import Employee
from evalcycle.models.user import User
from evalcycle.schemas.employee import EmployeeOut, EmployeeWithSupervisorOut
from evalcycle.schemas.pagination import paginated

router = APIRouter(prefix="/employees", tags=["employees"])


def employee_to_out(e: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=str(e.id),
        employee_number=e.employee_number,
        display_name=e.display_name,
        email=e.email,
        department=e.department,
        is_active=e.is_active,
        supervisor_employee_id=str(e.supervisor_employee_id) if e.supervisor_employee_id else None,
        user_id=str(e.user_id) if e.user_id else None,
    )


@router.get("")
def list_employees(
    search: str | None = Query(default=None, description="Search by employee number or display name"),
    active_only: bool = Query(default=True, description="Only active staff"),
    without_supervisor: bool = Query(default=False, description="Only staff with no supervisor assigned"),
    limit: int = Query(default=100, ge=1, le=500, description="Maximum number of results"),
    offset: int = Query(default=0, ge=0, description="Number of results to skip"),
    include_pagination: bool = Query(default=False, description="Include pagination metadata"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """
    List the staff roster with optional search and pagination.

    Use ?include_pagination=true to get pagination metadata.
    """
    query = db.query(Employee)

    if active_only:
        query = query.filter(Employee.is_active.is_(True))
    if without_supervisor:
        query = query.filter(Employee.supervisor_employee_id.is_(None))

    if search:
        search_term = f"%{search.lower()}%"
        query = query.filter(
            (Employee.employee_number.ilike(search_term))
            | (Employee.display_name.ilike(search_term))
        )

    # Get total count before pagination
    total = query.count()

    employees = query.order_by(Employee.display_name.asc()).offset(offset).limit(limit).all()
    items = [employee_to_out(e) for e in employees]

    return paginated(items, total=total, limit=limit, offset=offset, include_pagination=include_pagination)


@router.get("/{employee_id}", response_model=EmployeeWithSupervisorOut)
def get_employee(
    employee_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """
    Employee details with the name of their current supervisor.
    """
    employee = db.get(Employee, employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return EmployeeWithSupervisorOut(
        **employee_to_out(employee).model_dump(),
        supervisor_name=employee.supervisor.display_name if employee.supervisor else None,
    )
