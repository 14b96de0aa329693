from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class AnswersPayload(BaseModel):
    # Levels are checked by the engine so a bad value reports which question it was
    answers: dict[str, Any] = Field(description="question id -> level (1-5) for every question")


class EvaluationOut(BaseModel):
    id: str
    cycle_id: str
    staff_employee_id: str
    staff_name: str | None = None
    supervisor_employee_id: str | None
    supervisor_name: str | None = None
    status: str
    staff_answers: dict[str, int] | None
    supervisor_answers: dict[str, int] | None
    staff_submitted_at: datetime | None
    supervisor_submitted_at: datetime | None
    created_at: datetime
    updated_at: datetime
    version: int


class ScoreSummaryOut(BaseModel):
    total: int
    percentage: int
    rating: str


class QuestionComparisonOut(BaseModel):
    question_id: str
    short_label: str
    staff_level: int | None
    supervisor_level: int | None
    staff_score: int
    supervisor_score: int
    difference: int


class EvaluationResultOut(BaseModel):
    """Evaluation with both score summaries and the per-question comparison"""
    evaluation: EvaluationOut
    cycle_year: int
    staff_score: ScoreSummaryOut | None
    supervisor_score: ScoreSummaryOut | None
    questions: list[QuestionComparisonOut]
