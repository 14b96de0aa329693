from pydantic import BaseModel


class CycleProgressOut(BaseModel):
    """Record counts by status for one cycle"""
    cycle_id: str
    year: int
    total: int = 0
    pending_staff: int = 0
    pending_supervisor: int = 0
    completed: int = 0
    percent_complete: int = 0  # completed / total as a whole percent, halves up; 0 for an empty cycle


class YearStatsOut(BaseModel):
    """Submission counts across every record of a year's cycle"""
    year: int
    total: int = 0
    staff_submitted: int = 0
    supervisor_submitted: int = 0


class StaffWithoutSupervisorOut(BaseModel):
    id: str
    name: str


class StaffWithoutSupervisorList(BaseModel):
    count: int
    items: list[StaffWithoutSupervisorOut]


class PendingSuperviseeCount(BaseModel):
    supervisor_employee_id: str | None
    pending: int
