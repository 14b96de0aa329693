import enum
import uuid
from datetime import datetime, date

from sqlalchemy import Integer, String, Date, DateTime, ForeignKey, CheckConstraint, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import sqlalchemy as sa

from evalcycle.db.base import Base


class CycleStatus(str, enum.Enum):
    ACTIVE = "active"
    CLOSED = "closed"


class EvaluationCycle(Base):
    """One yearly run of the annual evaluation, Dec 1 to Feb 28 of the following year."""

    __tablename__ = "annual_evaluation_cycles"
    __table_args__ = (
        UniqueConstraint("year", name="uq_annual_evaluation_cycles_year"),
        CheckConstraint(
            "status IN ('active','closed')",
            name="ck_annual_evaluation_cycles_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    year: Mapped[int] = mapped_column(Integer, nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default=CycleStatus.ACTIVE.value)

    created_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
        onupdate=datetime.utcnow,
    )

    @property
    def is_closed(self) -> bool:
        return self.status == CycleStatus.CLOSED
