import pytest

from evalcycle.core.errors import InvalidLevel
from evalcycle.core.questions import QUESTIONS, QUESTION_IDS, questions_by_category
from evalcycle.core.scoring import (
    compare_answers,
    percent_of,
    percentage,
    rating_label,
    score_of,
    score_summary,
    total_score,
)

from tests.helpers import full_answers


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5])
def test_score_of_is_twice_the_level(level):
    assert score_of(level) == 2 * level


@pytest.mark.parametrize("level", [0, 6, -1, 2.5, "3", None, True])
def test_score_of_rejects_invalid_levels(level):
    with pytest.raises(InvalidLevel):
        score_of(level)


def test_catalog_shape():
    assert len(QUESTIONS) == 10
    assert len(set(QUESTION_IDS)) == 10
    grouped = questions_by_category()
    assert [len(qs) for qs in grouped.values()] == [3, 2, 4, 1]
    assert [qs[0].category_code for qs in grouped.values()] == ["A", "B", "C", "D"]


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5])
def test_full_answer_set_total_equals_percentage(level):
    answers = full_answers(level)
    assert total_score(answers) == percentage(answers) == 20 * level
    assert 0 <= total_score(answers) <= 100


def test_mixed_answers():
    answers = full_answers(5)
    answers["q1"] = 1
    answers["q10"] = 3
    # 8 * 10 + 2 + 6
    assert total_score(answers) == 88
    assert percentage(answers) == 88


def test_unanswered_questions_contribute_zero():
    assert total_score({}) == 0
    assert total_score({"q1": 5, "q2": 4}) == 18
    assert percentage({"q1": 5, "q2": 4}) == 18


def test_total_score_reports_question_of_invalid_level():
    with pytest.raises(InvalidLevel) as exc:
        total_score({"q1": 3, "q2": 9})
    assert exc.value.question_id == "q2"


@pytest.mark.parametrize(
    "pct,label",
    [
        (100, "Excellent"),
        (80, "Excellent"),
        (79, "Good"),
        (60, "Good"),
        (59, "Moderate"),
        (40, "Moderate"),
        (39, "Weak"),
        (20, "Weak"),
        (19, "Very Weak"),
        (0, "Very Weak"),
    ],
)
def test_rating_bands(pct, label):
    assert rating_label(pct) == label


def test_rating_label_is_total_over_range():
    labels = [rating_label(p) for p in range(0, 101)]
    assert labels.count("Very Weak") == 20
    assert labels.count("Weak") == 20
    assert labels.count("Moderate") == 20
    assert labels.count("Good") == 20
    assert labels.count("Excellent") == 21


def test_score_summary():
    s = score_summary(full_answers(3))
    assert (s.total, s.percentage, s.rating) == (60, 60, "Good")

    empty = score_summary(None)
    assert (empty.total, empty.percentage, empty.rating) == (0, 0, "Very Weak")


def test_compare_answers_in_catalog_order():
    staff = full_answers(3)
    supervisor = full_answers(5)
    supervisor["q4"] = 2

    rows = compare_answers(staff, supervisor)
    assert [r.question_id for r in rows] == list(QUESTION_IDS)

    q1 = rows[0]
    assert (q1.staff_score, q1.supervisor_score, q1.difference) == (6, 10, 4)
    q4 = rows[3]
    assert (q4.staff_level, q4.supervisor_level, q4.difference) == (3, 2, -2)


def test_compare_answers_before_supervisor_review():
    rows = compare_answers(full_answers(4), None)
    assert all(r.supervisor_level is None and r.supervisor_score == 0 for r in rows)
    assert all(r.difference == -8 for r in rows)


@pytest.mark.parametrize(
    "part,whole,expected",
    [(1, 8, 13), (3, 8, 38), (1, 3, 33), (2, 3, 67), (1, 2, 50), (0, 5, 0), (5, 5, 100), (0, 0, 0)],
)
def test_percent_of_rounds_halves_up(part, whole, expected):
    assert percent_of(part, whole) == expected


def test_every_question_describes_each_level():
    for q in QUESTIONS:
        assert len(q.levels) == 5
        assert all(desc for desc in q.levels)
        assert len(set(q.levels)) == 5
    first = QUESTIONS[0]
    assert first.level_description(1) == first.levels[0]
    assert first.level_description(5) == first.levels[4]
