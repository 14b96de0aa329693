from datetime import date, datetime
from pydantic import BaseModel, Field


class CycleOpen(BaseModel):
    year: int = Field(ge=2000, le=2100, description="Cycle runs Dec 1 of this year to Feb 28 of the next")


class CycleOut(BaseModel):
    id: str
    year: int
    start_date: date
    end_date: date
    status: str
    created_by_user_id: str | None
    created_at: datetime
    updated_at: datetime
