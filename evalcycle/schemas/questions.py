from pydantic import BaseModel


class LevelOut(BaseModel):
    level: int
    label: str
    points: int


class QuestionLevelOut(LevelOut):
    """A level as worded for one question"""
    description: str


class QuestionOut(BaseModel):
    id: str
    category: str
    category_code: str
    short_label: str
    prompt: str
    levels: list[QuestionLevelOut]


class QuestionCategoryOut(BaseModel):
    category: str
    category_code: str
    questions: list[QuestionOut]


class QuestionCatalogOut(BaseModel):
    levels: list[LevelOut]
    max_total_score: int
    categories: list[QuestionCategoryOut]
