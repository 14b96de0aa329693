from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from evalcycle.core.errors import InvalidLevel
from evalcycle.core.questions import LEVEL_POINTS, MAX_TOTAL_SCORE, QUESTIONS

# Highest band first; first match wins.
RATING_BANDS: tuple[tuple[int, str], ...] = (
    (80, "Excellent"),
    (60, "Good"),
    (40, "Moderate"),
    (20, "Weak"),
)
LOWEST_RATING = "Very Weak"


@dataclass(frozen=True)
class ScoreSummary:
    total: int
    percentage: int
    rating: str


@dataclass(frozen=True)
class QuestionComparison:
    question_id: str
    short_label: str
    staff_level: int | None
    supervisor_level: int | None
    staff_score: int
    supervisor_score: int
    difference: int


def score_of(level: int) -> int:
    # bool is an int subclass; True must not count as level 1
    if isinstance(level, bool) or not isinstance(level, int) or level not in LEVEL_POINTS:
        raise InvalidLevel(level)
    return LEVEL_POINTS[level]


def total_score(answers: Mapping[str, int]) -> int:
    """Sum of points over answered questions; unanswered ones count 0."""
    total = 0
    for question_id, level in answers.items():
        try:
            total += score_of(level)
        except InvalidLevel:
            raise InvalidLevel(level, question_id=question_id) from None
    return total


def percent_of(part: int, whole: int) -> int:
    """part / whole as a whole percent, halves rounded up (1 of 8 is 13). 0 when whole is 0."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (2 * whole)


def percentage(answers: Mapping[str, int]) -> int:
    return percent_of(total_score(answers), MAX_TOTAL_SCORE)


def rating_label(pct: int | float) -> str:
    for threshold, label in RATING_BANDS:
        if pct >= threshold:
            return label
    return LOWEST_RATING


def score_summary(answers: Mapping[str, int] | None) -> ScoreSummary:
    answers = answers or {}
    pct = percentage(answers)
    return ScoreSummary(total=total_score(answers), percentage=pct, rating=rating_label(pct))


def compare_answers(
    staff_answers: Mapping[str, int] | None,
    supervisor_answers: Mapping[str, int] | None,
) -> list[QuestionComparison]:
    """
    Per-question staff vs supervisor scores, in catalog order.
    difference = supervisor_score - staff_score
    """
    staff_answers = staff_answers or {}
    supervisor_answers = supervisor_answers or {}

    rows: list[QuestionComparison] = []
    for q in QUESTIONS:
        s_level = staff_answers.get(q.id)
        v_level = supervisor_answers.get(q.id)
        s_score = score_of(s_level) if s_level is not None else 0
        v_score = score_of(v_level) if v_level is not None else 0
        rows.append(
            QuestionComparison(
                question_id=q.id,
                short_label=q.short_label,
                staff_level=s_level,
                supervisor_level=v_level,
                staff_score=s_score,
                supervisor_score=v_score,
                difference=v_score - s_score,
            )
        )
    return rows
