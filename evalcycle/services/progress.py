"""
Read-only progress figures for dashboards.

Reads take no locks; a figure may trail an in-flight submission.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from evalcycle.core.directory import Directory, StaffEntry
from evalcycle.core.errors import dependency_guard
from evalcycle.core.scoring import percent_of
from evalcycle.models.evaluation_cycle import EvaluationCycle
from evalcycle.models.evaluation_record import EvaluationRecord, EvaluationStatus
from evalcycle.services.cycle_manager import get_cycle


@dataclass(frozen=True)
class CycleProgress:
    cycle_id: uuid.UUID
    year: int
    total: int
    pending_staff: int
    pending_supervisor: int
    completed: int
    percent_complete: int


@dataclass(frozen=True)
class YearProgress:
    year: int
    total: int
    staff_submitted: int
    supervisor_submitted: int


def cycle_stats(db: Session, cycle_id: uuid.UUID) -> CycleProgress:
    cycle = get_cycle(db, cycle_id)

    with dependency_guard("cycle stats"):
        rows = (
            db.query(EvaluationRecord.status, func.count(EvaluationRecord.id))
            .filter(EvaluationRecord.cycle_id == cycle.id)
            .group_by(EvaluationRecord.status)
            .all()
        )
    by_status = {status: count for status, count in rows}

    pending_staff = by_status.get(EvaluationStatus.PENDING_STAFF.value, 0)
    pending_supervisor = by_status.get(EvaluationStatus.PENDING_SUPERVISOR.value, 0)
    completed = by_status.get(EvaluationStatus.COMPLETED.value, 0)
    total = pending_staff + pending_supervisor + completed

    return CycleProgress(
        cycle_id=cycle.id,
        year=cycle.year,
        total=total,
        pending_staff=pending_staff,
        pending_supervisor=pending_supervisor,
        completed=completed,
        percent_complete=percent_of(completed, total),
    )


def year_stats(db: Session, year: int) -> YearProgress:
    """Counts by presence of answers, so a completed record counts toward both."""
    with dependency_guard("year stats"):
        total, staff_submitted, supervisor_submitted = (
            db.query(
                func.count(EvaluationRecord.id),
                func.coalesce(
                    func.sum(case((EvaluationRecord.staff_answers.is_not(None), 1), else_=0)), 0
                ),
                func.coalesce(
                    func.sum(case((EvaluationRecord.supervisor_answers.is_not(None), 1), else_=0)), 0
                ),
            )
            .join(EvaluationCycle, EvaluationCycle.id == EvaluationRecord.cycle_id)
            .filter(EvaluationCycle.year == year)
            .one()
        )

    return YearProgress(
        year=year,
        total=int(total),
        staff_submitted=int(staff_submitted),
        supervisor_submitted=int(supervisor_submitted),
    )


def staff_without_supervisors(db: Session) -> list[StaffEntry]:
    # Same query the cycle-open precondition uses
    return Directory(db).list_active_staff_without_supervisor()


def pending_supervisee_count(db: Session, supervisor_employee_id: uuid.UUID) -> int:
    with dependency_guard("supervisee count"):
        return (
            db.query(func.count(EvaluationRecord.id))
            .filter(
                EvaluationRecord.supervisor_employee_id == supervisor_employee_id,
                EvaluationRecord.status == EvaluationStatus.PENDING_SUPERVISOR.value,
            )
            .scalar()
        ) or 0
