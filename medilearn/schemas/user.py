from datetime import datetime
from typing import List, Union

from pydantic import BaseModel, Field, model_validator


# -------------------
# Stats
# -------------------
class ArticleRef(BaseModel):
    id: Union[int, str]
    title: str
    date: str


class StatsOut(BaseModel):
    quizzesTaken: int
    flashcardsReviewed: int
    articles: List[ArticleRef]


# -------------------
# Activity
# -------------------
class QuizAttemptIn(BaseModel):
    quizId: str = Field(min_length=1, max_length=64)
    score: int = Field(ge=0)
    total: int = Field(ge=1)

    @model_validator(mode="after")
    def _score_within_total(self):
        if self.score > self.total:
            raise ValueError("score cannot exceed total")
        return self


class QuizAttemptOut(BaseModel):
    id: int
    quizId: str
    score: int
    total: int
    createdAt: datetime


class FlashcardSessionIn(BaseModel):
    category: str = Field(default="all", max_length=64)
    cardsReviewed: int = Field(ge=0)


class FlashcardSessionOut(BaseModel):
    id: int
    category: str
    cardsReviewed: int
    createdAt: datetime


class ArticleReadIn(BaseModel):
    articleId: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1, max_length=500)


class ArticleReadOut(BaseModel):
    id: int
    articleId: str
    title: str
    readDate: datetime


# -------------------
# Preferences
# -------------------
class PreferencesIn(BaseModel):
    categories: List[str] = Field(default_factory=list)
    preferredSources: List[str] = Field(default_factory=list)


class PreferencesOut(BaseModel):
    categories: List[str]
    preferredSources: List[str]
