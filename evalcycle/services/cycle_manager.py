"""
Opening and closing annual evaluation cycles.

Opening a cycle is the only multi-row write in the engine: the cycle row and
one pending_staff record per active staff member are inserted in a single
transaction, or nothing is.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from evalcycle.core.audit import CYCLE_ENTITY, log_event
from evalcycle.core.directory import Directory
from evalcycle.core.errors import DuplicateYear, MissingSupervisors, NotFound, dependency_guard
from evalcycle.models.evaluation_cycle import CycleStatus, EvaluationCycle
from evalcycle.models.evaluation_record import EvaluationRecord, EvaluationStatus
from evalcycle.models.user import User

logger = logging.getLogger(__name__)


def cycle_window(year: int) -> tuple[date, date]:
    """Dec 1 of `year` through Feb 28 of the following year."""
    return date(year, 12, 1), date(year + 1, 2, 28)


def _cycle_exists(db: Session, year: int) -> bool:
    with dependency_guard("cycle lookup"):
        return (
            db.query(EvaluationCycle.id).filter(EvaluationCycle.year == year).first()
            is not None
        )


def get_cycle(db: Session, cycle_id: uuid.UUID) -> EvaluationCycle:
    with dependency_guard("cycle lookup"):
        cycle = db.get(EvaluationCycle, cycle_id)
    if not cycle:
        raise NotFound("Cycle", cycle_id)
    return cycle


def list_cycles(db: Session) -> list[EvaluationCycle]:
    with dependency_guard("cycle listing"):
        return db.query(EvaluationCycle).order_by(EvaluationCycle.year.desc()).all()


def open_cycle(
    db: Session,
    *,
    year: int,
    initiated_by: User | None,
    directory: Directory | None = None,
) -> EvaluationCycle:
    directory = directory or Directory(db)

    without_supervisor = directory.list_active_staff_without_supervisor()
    if without_supervisor:
        logger.warning(
            "cycle open blocked: %d active staff without supervisor", len(without_supervisor),
            extra={"year": year},
        )
        raise MissingSupervisors([s.name for s in without_supervisor])

    if _cycle_exists(db, year):
        raise DuplicateYear(year)

    staff = directory.list_active_staff()

    # A supervisor may have been unassigned between the two directory reads
    unassigned = [s.name for s in staff if s.supervisor_id is None]
    if unassigned:
        raise MissingSupervisors(unassigned)

    start_date, end_date = cycle_window(year)

    try:
        with dependency_guard("cycle open"):
            cycle = EvaluationCycle(
                year=year,
                start_date=start_date,
                end_date=end_date,
                status=CycleStatus.ACTIVE.value,
                created_by_user_id=initiated_by.id if initiated_by else None,
            )
            db.add(cycle)
            db.flush()  # ensures cycle.id exists for the records

            db.add_all(
                [
                    EvaluationRecord(
                        cycle_id=cycle.id,
                        staff_employee_id=s.id,
                        supervisor_employee_id=s.supervisor_id,
                        status=EvaluationStatus.PENDING_STAFF.value,
                    )
                    for s in staff
                ]
            )

            log_event(
                db=db,
                actor=initiated_by,
                action="CYCLE_OPENED",
                entity_type=CYCLE_ENTITY,
                entity_id=cycle.id,
                metadata={
                    "year": year,
                    "start_date": str(start_date),
                    "end_date": str(end_date),
                    "records": len(staff),
                },
            )

            db.flush()
            db.commit()
    except IntegrityError as e:
        db.rollback()
        # lost a race with another open() for the same year
        if _cycle_exists(db, year):
            raise DuplicateYear(year) from e
        raise
    except Exception:
        db.rollback()
        raise

    logger.info(
        "evaluation cycle opened",
        extra={"year": year, "cycle_id": str(cycle.id), "records": len(staff)},
    )
    db.refresh(cycle)
    return cycle


def close_cycle(db: Session, *, cycle_id: uuid.UUID, actor: User | None = None) -> EvaluationCycle:
    """Mark a cycle closed. Closing a closed cycle is a no-op; records are left as they are."""
    cycle = get_cycle(db, cycle_id)

    if cycle.status == CycleStatus.CLOSED:
        return cycle

    prev = cycle.status
    try:
        with dependency_guard("cycle close"):
            cycle.status = CycleStatus.CLOSED.value

            log_event(
                db=db,
                actor=actor,
                action="CYCLE_CLOSED",
                entity_type=CYCLE_ENTITY,
                entity_id=cycle.id,
                metadata={"year": cycle.year, "from": prev, "to": cycle.status},
            )

            db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("evaluation cycle closed", extra={"year": cycle.year, "cycle_id": str(cycle.id)})
    db.refresh(cycle)
    return cycle
