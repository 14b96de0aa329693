import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from evalcycle.api.serializers import load_names, record_to_out, summary_to_out
from evalcycle.core.access import assert_user_can_view, assert_user_is_staff, assert_user_is_supervisor
from evalcycle.core.questions import LEVEL_LABELS, LEVEL_POINTS, MAX_TOTAL_SCORE, questions_by_category
from evalcycle.core.scoring import compare_answers, score_summary
from evalcycle.core.security import get_current_user
from evalcycle.db.session import get_db
from evalcycle.models.user import User
from evalcycle.schemas.evaluation import (
    AnswersPayload,
    EvaluationOut,
    EvaluationResultOut,
    QuestionComparisonOut,
)
from evalcycle.schemas.questions import (
    LevelOut,
    QuestionCatalogOut,
    QuestionCategoryOut,
    QuestionLevelOut,
    QuestionOut,
)
from evalcycle.services import cycle_manager
from evalcycle.services.evaluation_workflow import (
    get_record,
    submit_staff_evaluation,
    submit_supervisor_evaluation,
)

router = APIRouter(prefix="/annual-evaluations", tags=["annual-evaluations"])


@router.get("/questions", response_model=QuestionCatalogOut)
def get_question_catalog():
    """The competency questions grouped by category, plus the level scale."""
    categories = [
        QuestionCategoryOut(
            category=category,
            category_code=questions[0].category_code,
            questions=[
                QuestionOut(
                    id=q.id,
                    category=q.category,
                    category_code=q.category_code,
                    short_label=q.short_label,
                    prompt=q.prompt,
                    levels=[
                        QuestionLevelOut(
                            level=level,
                            label=LEVEL_LABELS[level],
                            points=points,
                            description=q.level_description(level),
                        )
                        for level, points in LEVEL_POINTS.items()
                    ],
                )
                for q in questions
            ],
        )
        for category, questions in questions_by_category().items()
    ]
    return QuestionCatalogOut(
        levels=[
            LevelOut(level=level, label=LEVEL_LABELS[level], points=points)
            for level, points in LEVEL_POINTS.items()
        ],
        max_total_score=MAX_TOTAL_SCORE,
        categories=categories,
    )


@router.get("/evaluations/{evaluation_id}", response_model=EvaluationOut)
def get_evaluation(
    evaluation_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    record = get_record(db, evaluation_id)
    assert_user_can_view(db, user, record)
    return record_to_out(record, load_names(db, [record]))


@router.post("/evaluations/{evaluation_id}/staff-submission", response_model=EvaluationOut)
def submit_staff(
    evaluation_id: uuid.UUID,
    payload: AnswersPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Staff self-assessment. Write-once: a second submission is rejected with
    409 already_submitted and the first answers stay.
    """
    record = get_record(db, evaluation_id)
    assert_user_is_staff(db, user, record)

    record = submit_staff_evaluation(db, evaluation_id, payload.answers, actor=user)
    return record_to_out(record, load_names(db, [record]))


@router.post("/evaluations/{evaluation_id}/supervisor-submission", response_model=EvaluationOut)
def submit_supervisor(
    evaluation_id: uuid.UUID,
    payload: AnswersPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Supervisor review; only allowed once the staff member has submitted."""
    record = get_record(db, evaluation_id)
    assert_user_is_supervisor(db, user, record)

    record = submit_supervisor_evaluation(db, evaluation_id, payload.answers, actor=user)
    return record_to_out(record, load_names(db, [record]))


@router.get("/evaluations/{evaluation_id}/result", response_model=EvaluationResultOut)
def get_evaluation_result(
    evaluation_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    record = get_record(db, evaluation_id)
    assert_user_can_view(db, user, record)
    cycle = cycle_manager.get_cycle(db, record.cycle_id)

    staff = score_summary(record.staff_answers) if record.staff_answers is not None else None
    supervisor = (
        score_summary(record.supervisor_answers) if record.supervisor_answers is not None else None
    )

    return EvaluationResultOut(
        evaluation=record_to_out(record, load_names(db, [record])),
        cycle_year=cycle.year,
        staff_score=summary_to_out(staff) if staff else None,
        supervisor_score=summary_to_out(supervisor) if supervisor else None,
        questions=[
            QuestionComparisonOut(
                question_id=row.question_id,
                short_label=row.short_label,
                staff_level=row.staff_level,
                supervisor_level=row.supervisor_level,
                staff_score=row.staff_score,
                supervisor_score=row.supervisor_score,
                difference=row.difference,
            )
            for row in compare_answers(record.staff_answers, record.supervisor_answers)
        ],
    )
