"""
Competency question catalog for the annual evaluation.

Static reference data: ten questions in four categories, each rated on the
same five ordinal levels and points, with its own wording for each level.
Not stored per cycle.
"""

from __future__ import annotations

from dataclasses import dataclass

# Level -> points. Ten questions at 10 points each puts a full answer set out of 100.
LEVEL_POINTS: dict[int, int] = {
    1: 2,
    2: 4,
    3: 6,
    4: 8,
    5: 10,
}

LEVEL_LABELS: dict[int, str] = {
    1: "Very Weak",
    2: "Weak",
    3: "Moderate",
    4: "Good",
    5: "Excellent",
}

MAX_TOTAL_SCORE = 100


@dataclass(frozen=True)
class Question:
    id: str
    category: str
    category_code: str
    short_label: str
    prompt: str
    # Descriptions for levels 1-5, in order
    levels: tuple[str, str, str, str, str]

    def level_description(self, level: int) -> str:
        return self.levels[level - 1]


QUESTIONS: tuple[Question, ...] = (
    # A: Leadership & Management
    Question(
        id="q1",
        category="Leadership & Management",
        category_code="A",
        short_label="Resource Management",
        prompt="Ability to identify, allocate and manage resources effectively to achieve objectives.",
        levels=(
            "Manages resources poorly and always needs supervision or help",
            "Ordinary, routine resource management skills",
            "Manages allocations and resources well",
            "Manages available allocations and resources efficiently and very well",
            "Manages allocations and resources efficiently and effectively within the given time",
        ),
    ),
    Question(
        id="q2",
        category="Leadership & Management",
        category_code="A",
        short_label="Organisation & Planning",
        prompt="Ability to act with confidence under the demands of limited time and resources.",
        levels=(
            "Work is always disorganised and disrupts the work process",
            "Work is organised to the minimum standard when required; output is acceptable",
            "Work is always organised and meets department standards",
            "Work is consistently planned and arranged; output runs smoothly and meets standards",
            "Work is always orderly and meticulous; output is highly efficient and exceeds standards on own initiative",
        ),
    ),
    Question(
        id="q3",
        category="Leadership & Management",
        category_code="A",
        short_label="Problem Solving",
        prompt=(
            "Ability to identify problems and their impact, produce practical solutions and "
            "make sound decisions based on logic, facts and evidence."
        ),
        levels=(
            "Unable to identify problems systematically or solve them",
            "Weak at identifying and solving problems",
            "Able to identify problems and make general decisions",
            "Identifies problems well and makes appropriate decisions",
            "Expert at identifying problems systematically and skilled at making effective decisions",
        ),
    ),
    # B: Conceptual & Analytical Skills
    Question(
        id="q4",
        category="Conceptual & Analytical Skills",
        category_code="B",
        short_label="Knowledge & Information Management",
        prompt="Ability to gather, review, validate, summarise, store and communicate information.",
        levels=(
            "Competence not shown, or only basic awareness; always needs supervision or help",
            "Benefits from what is learned but cannot relate it to real situations",
            "Contributes ideas from what is learned but applies it to real situations with difficulty",
            "Contributes ideas from what is learned and applies it to real situations",
            "Proactively contributes creative ideas and applies knowledge wisely in real situations",
        ),
    ),
    Question(
        id="q5",
        category="Conceptual & Analytical Skills",
        category_code="B",
        short_label="Creative & Innovative Ideas",
        prompt="Tendency to learn new knowledge and apply it to the work produced.",
        levels=(
            "No initiative to contribute ideas to the work",
            "Offers ideas, but they do not suit the work",
            "Contributes creative ideas that can be applied to the work",
            "Contributes creative and innovative ideas that improve the work",
            "Proactively contributes creative and innovative ideas that transform the work",
        ),
    ),
    # C: Work & Time Management
    Question(
        id="q6",
        category="Work & Time Management",
        category_code="C",
        short_label="Professionalism",
        prompt="Ability to present a professional image built on trust, mutual respect and conduct.",
        levels=(
            "Unpleasant or unfriendly behaviour towards colleagues and supervisors",
            "Moderate and somewhat unfriendly behaviour towards colleagues and supervisors",
            "Good, respectful behaviour towards supervisors only",
            "Responsible, good conduct at work and respectful to colleagues and supervisors at all times",
            "Always responsible, excellent conduct and respectful to colleagues and supervisors in any situation",
        ),
    ),
    Question(
        id="q7",
        category="Work & Time Management",
        category_code="C",
        short_label="Work Management",
        prompt="Ability to prioritise and monitor tasks, activities and performance with limited guidance.",
        levels=(
            "Tasks are poorly managed and disrupt the workflow",
            "Tasks are managed to the minimum standard; the workflow is moderate",
            "Tasks are kept in order and the workflow is good",
            "Tasks are managed consistently and the workflow is smooth",
            "Tasks are managed very well and the workflow is effective and very smooth",
        ),
    ),
    Question(
        id="q8",
        category="Work & Time Management",
        category_code="C",
        short_label="Time Management",
        prompt="Ability to deliver work on schedule under time and resource constraints.",
        levels=(
            "Often misses deadlines even after reminders",
            "Finishes on or after the deadline, with reminders",
            "Finishes by the deadline without reminders",
            "Sometimes finishes ahead of the deadline",
            "Often finishes ahead of the deadline",
        ),
    ),
    Question(
        id="q9",
        category="Work & Time Management",
        category_code="C",
        short_label="Collaboration",
        prompt="Ability to cooperate with and support others in achieving objectives.",
        levels=(
            "Shows no teamwork towards work goals and little care for colleagues",
            "Occasionally shows team spirit, only when needed",
            "Works in a group and supports group members and the employer only",
            "Consistently supports and helps others with strong team spirit, valuing team members, clients and the employer",
            "Always supports and helps others with excellent team spirit, always valuing team members, clients and the employer",
        ),
    ),
    # D: Oral & Written Communication
    Question(
        id="q10",
        category="Oral & Written Communication",
        category_code="D",
        short_label="Writing",
        prompt="Ability to communicate information effectively in writing.",
        levels=(
            "Has never written or prepared an internal document",
            "Writes meeting minutes, discussion notes and correspondence",
            "Writes progress reports and project summaries, presentation slides, procurement documents and press articles",
            "Writes board papers and articles for proceedings or annual reports",
            "Writes research reports, books and policy papers",
        ),
    ),
)

QUESTION_IDS: tuple[str, ...] = tuple(q.id for q in QUESTIONS)


def questions_by_category() -> dict[str, list[Question]]:
    """Questions grouped by category, categories in catalog order."""
    out: dict[str, list[Question]] = {}
    for q in QUESTIONS:
        out.setdefault(q.category, []).append(q)
    return out
