"""
Read-only view of the staff roster.

Supervisor assignments are owned by user management; the evaluation engine
only reads them. The "active staff without a supervisor" query lives here
once so the dashboard signal and the cycle-open precondition cannot drift
apart.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from sqlalchemy.orm import Session

from evalcycle.core.errors import dependency_guard
from evalcycle.models.employee import Employee


@dataclass(frozen=True)
class StaffEntry:
    id: uuid.UUID
    name: str
    supervisor_id: uuid.UUID | None = None


class Directory:
    def __init__(self, db: Session):
        self.db = db

    def list_active_staff(self) -> list[StaffEntry]:
        with dependency_guard("directory.list_active_staff"):
            rows = (
                self.db.query(Employee.id, Employee.display_name, Employee.supervisor_employee_id)
                .filter(Employee.is_active.is_(True))
                .order_by(Employee.display_name.asc(), Employee.id.asc())
                .all()
            )
        return [StaffEntry(id=r[0], name=r[1], supervisor_id=r[2]) for r in rows]

    def list_active_staff_without_supervisor(self) -> list[StaffEntry]:
        with dependency_guard("directory.list_active_staff_without_supervisor"):
            rows = (
                self.db.query(Employee.id, Employee.display_name)
                .filter(
                    Employee.is_active.is_(True),
                    Employee.supervisor_employee_id.is_(None),
                )
                .order_by(Employee.display_name.asc(), Employee.id.asc())
                .all()
            )
        return [StaffEntry(id=r[0], name=r[1]) for r in rows]
