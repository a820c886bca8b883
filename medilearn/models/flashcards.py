from typing import List, Optional
from pydantic import BaseModel, Field


class Flashcard(BaseModel):
    id: str
    front: str = Field(..., description="Question / term")
    back: str = Field(..., description="Answer / definition")
    category: str


class FlashcardListResponse(BaseModel):
    items: List[Flashcard]


class CategoryListResponse(BaseModel):
    items: List[str]


class StudyStartRequest(BaseModel):
    category: str = Field(default="all", description="'all' = whole deck")


class SwipeRequest(BaseModel):
    cardId: str
    understood: bool = Field(..., description="right swipe = understood, left = review again")


class StudyState(BaseModel):
    sessionId: str
    status: str  # "ready" | "done"
    reviewMode: bool
    index: int
    total: int
    card: Optional[Flashcard] = None
    understood: int
    needReview: int
    cardsReviewed: int
