import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from evalcycle.api.serializers import cycle_to_out, load_names, record_to_out
from evalcycle.core.errors import dependency_guard
from evalcycle.core.rbac import require_roles
from evalcycle.core.security import get_current_user
from evalcycle.db.session import get_db
from evalcycle.models.evaluation_record import EvaluationRecord, EvaluationStatus
from evalcycle.models.user import User
from evalcycle.schemas.cycle import CycleOpen, CycleOut
from evalcycle.schemas.pagination import paginated
from evalcycle.schemas.stats import (
    CycleProgressOut,
    StaffWithoutSupervisorList,
    StaffWithoutSupervisorOut,
    YearStatsOut,
)
from evalcycle.services import cycle_manager, progress

router = APIRouter(prefix="/annual-evaluations", tags=["annual-evaluation-cycles"])


@router.get("/cycles", response_model=list[CycleOut])
def list_cycles(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """All cycles, newest year first."""
    return [cycle_to_out(c) for c in cycle_manager.list_cycles(db)]


@router.post("/cycles", response_model=CycleOut, status_code=status.HTTP_201_CREATED)
def open_cycle(
    payload: CycleOpen,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("ADMIN")),
):
    """
    Open the cycle for `year` and create one pending_staff evaluation per
    active staff member. Refused with 409 while any active staff member has
    no supervisor, or when the year already has a cycle.
    """
    c = cycle_manager.open_cycle(db, year=payload.year, initiated_by=current_user)
    return cycle_to_out(c)


@router.get("/cycles/{cycle_id}", response_model=CycleOut)
def get_cycle(
    cycle_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return cycle_to_out(cycle_manager.get_cycle(db, cycle_id))


@router.post("/cycles/{cycle_id}/close", response_model=CycleOut)
def close_cycle(
    cycle_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("ADMIN")),
):
    # Idempotent success: closing a CLOSED cycle returns it unchanged
    c = cycle_manager.close_cycle(db, cycle_id=cycle_id, actor=current_user)
    return cycle_to_out(c)


@router.get("/cycles/{cycle_id}/evaluations")
def list_cycle_evaluations(
    cycle_id: uuid.UUID,
    status: EvaluationStatus | None = Query(default=None, description="Filter by status"),
    limit: int = Query(default=100, ge=1, le=500, description="Maximum number of results"),
    offset: int = Query(default=0, ge=0, description="Number of results to skip"),
    include_pagination: bool = Query(default=False, description="Include pagination metadata"),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("ADMIN")),
):
    """
    Every evaluation in a cycle with staff and supervisor names.

    Use ?include_pagination=true to get pagination metadata.
    """
    cycle = cycle_manager.get_cycle(db, cycle_id)

    with dependency_guard("cycle evaluations listing"):
        query = db.query(EvaluationRecord).filter(EvaluationRecord.cycle_id == cycle.id)
        if status:
            query = query.filter(EvaluationRecord.status == status.value)

        total = query.count()
        records = (
            query.order_by(EvaluationRecord.created_at.asc(), EvaluationRecord.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        names = load_names(db, records)

    items = [record_to_out(r, names) for r in records]

    return paginated(items, total=total, limit=limit, offset=offset, include_pagination=include_pagination)


@router.get("/cycles/{cycle_id}/stats", response_model=CycleProgressOut)
def get_cycle_progress(
    cycle_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    p = progress.cycle_stats(db, cycle_id)
    return CycleProgressOut(
        cycle_id=str(p.cycle_id),
        year=p.year,
        total=p.total,
        pending_staff=p.pending_staff,
        pending_supervisor=p.pending_supervisor,
        completed=p.completed,
        percent_complete=p.percent_complete,
    )


@router.get("/stats/{year}", response_model=YearStatsOut)
def get_year_stats(
    year: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    s = progress.year_stats(db, year)
    return YearStatsOut(
        year=s.year,
        total=s.total,
        staff_submitted=s.staff_submitted,
        supervisor_submitted=s.supervisor_submitted,
    )


@router.get("/staff-without-supervisors", response_model=StaffWithoutSupervisorList)
def list_staff_without_supervisors(
    db: Session = Depends(get_db),
    _: User = Depends(require_roles("ADMIN")),
):
    """Active staff blocking the next cycle open."""
    staff = progress.staff_without_supervisors(db)
    return StaffWithoutSupervisorList(
        count=len(staff),
        items=[StaffWithoutSupervisorOut(id=str(s.id), name=s.name) for s in staff],
    )
