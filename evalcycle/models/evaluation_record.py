import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, UniqueConstraint, CheckConstraint, Integer, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
import sqlalchemy as sa

from evalcycle.db.base import Base


class EvaluationStatus(str, enum.Enum):
    PENDING_STAFF = "pending_staff"
    PENDING_SUPERVISOR = "pending_supervisor"
    COMPLETED = "completed"


# The only legal moves; anything else is an invalid transition.
TRANSITIONS: dict[EvaluationStatus, EvaluationStatus | None] = {
    EvaluationStatus.PENDING_STAFF: EvaluationStatus.PENDING_SUPERVISOR,
    EvaluationStatus.PENDING_SUPERVISOR: EvaluationStatus.COMPLETED,
    EvaluationStatus.COMPLETED: None,
}

# SQL NULL for None, not a JSON 'null' literal, so the CHECKs below see it
AnswersType = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")


class EvaluationRecord(Base):
    """One staff member's two-phase answers and status within a cycle."""

    __tablename__ = "annual_evaluations"
    __table_args__ = (
        UniqueConstraint("cycle_id", "staff_employee_id", name="uq_annual_evaluations_cycle_staff"),
        CheckConstraint(
            "status IN ('pending_staff','pending_supervisor','completed')",
            name="ck_annual_evaluations_status",
        ),
        # pending_staff => nothing submitted yet
        CheckConstraint(
            "(status <> 'pending_staff') OR ("
            "staff_answers IS NULL AND staff_submitted_at IS NULL "
            "AND supervisor_answers IS NULL AND supervisor_submitted_at IS NULL)",
            name="ck_annual_eval_pending_staff",
        ),
        # pending_supervisor => staff half only
        CheckConstraint(
            "(status <> 'pending_supervisor') OR ("
            "staff_answers IS NOT NULL AND staff_submitted_at IS NOT NULL "
            "AND supervisor_answers IS NULL AND supervisor_submitted_at IS NULL)",
            name="ck_annual_eval_pending_supervisor",
        ),
        # completed => both halves
        CheckConstraint(
            "(status <> 'completed') OR ("
            "staff_answers IS NOT NULL AND staff_submitted_at IS NOT NULL "
            "AND supervisor_answers IS NOT NULL AND supervisor_submitted_at IS NOT NULL)",
            name="ck_annual_eval_completed",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    cycle_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("annual_evaluation_cycles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    staff_employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    # Snapshot of the staff member's supervisor when the cycle opened
    supervisor_employee_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    staff_answers: Mapped[dict | None] = mapped_column(AnswersType, nullable=True)
    supervisor_answers: Mapped[dict | None] = mapped_column(AnswersType, nullable=True)

    staff_submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    supervisor_submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EvaluationStatus.PENDING_STAFF.value
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
        onupdate=datetime.utcnow,
    )
    # Optimistic locking
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    __mapper_args__ = {"version_id_col": version}

    @property
    def state(self) -> EvaluationStatus:
        return EvaluationStatus(self.status)
