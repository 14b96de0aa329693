from pydantic import BaseModel


class EmployeeOut(BaseModel):
    id: str
    employee_number: str
    display_name: str
    email: str | None
    department: str | None
    is_active: bool
    supervisor_employee_id: str | None
    user_id: str | None


class EmployeeWithSupervisorOut(EmployeeOut):
    supervisor_name: str | None
