import uuid
from sqlalchemy import Boolean, String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from evalcycle.db.base import Base


class Employee(Base):
    """A staff member in the directory. Maintained by user management, read by the evaluation engine."""

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    employee_number: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    department: Mapped[str | None] = mapped_column(String(200), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Live relation; evaluation records keep their own snapshot of it
    supervisor_employee_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Optional link to system user (not all employees will be users)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    user = relationship("User")
    supervisor = relationship("Employee", remote_side=[id])
