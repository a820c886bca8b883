from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from medilearn.db.database import get_db
from medilearn.db.models import User
from medilearn.routers.auth import get_current_user, get_session_user_id
from medilearn.schemas.user import (
    ArticleReadIn,
    ArticleReadOut,
    FlashcardSessionIn,
    FlashcardSessionOut,
    PreferencesIn,
    PreferencesOut,
    QuizAttemptIn,
    QuizAttemptOut,
    StatsOut,
)
from medilearn.services import stats as stats_service
from medilearn.services.catalog import CONTENT_CATEGORIES

router = APIRouter(prefix="/api/user", tags=["user"])


def user_preferences(user: User) -> PreferencesOut:
    prefs = user.preferences or {}
    return PreferencesOut(
        categories=list(prefs.get("categories") or []),
        preferredSources=list(prefs.get("preferredSources") or []),
    )


@router.get("/stats", response_model=StatsOut)
def get_stats(
    user_id: int = Depends(get_session_user_id),
    db: Session = Depends(get_db),
):
    # unknown user -> sample values, not an error
    return stats_service.get_user_stats(db, user_id)


# =========================================================
# Activity
# =========================================================
@router.post("/quiz-attempts", response_model=QuizAttemptOut, status_code=status.HTTP_201_CREATED)
def add_quiz_attempt(
    payload: QuizAttemptIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    a = stats_service.record_quiz_attempt(db, user.id, payload.quizId, payload.score, payload.total)
    return QuizAttemptOut(id=a.id, quizId=a.quiz_id, score=a.score, total=a.total, createdAt=a.created_at)


@router.post("/flashcard-sessions", response_model=FlashcardSessionOut, status_code=status.HTTP_201_CREATED)
def add_flashcard_session(
    payload: FlashcardSessionIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    s = stats_service.record_flashcard_session(db, user.id, payload.category, payload.cardsReviewed)
    return FlashcardSessionOut(
        id=s.id, category=s.category, cardsReviewed=s.cards_reviewed, createdAt=s.created_at
    )


@router.post("/article-reads", response_model=ArticleReadOut, status_code=status.HTTP_201_CREATED)
def add_article_read(
    payload: ArticleReadIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    r = stats_service.record_article_read(db, user.id, payload.articleId, payload.title)
    return ArticleReadOut(id=r.id, articleId=r.article_id, title=r.title, readDate=r.read_date)


# =========================================================
# Preferences
# =========================================================
@router.get("/preferences", response_model=PreferencesOut)
def get_preferences(user: User = Depends(get_current_user)):
    return user_preferences(user)


@router.put("/preferences", response_model=PreferencesOut)
def update_preferences(
    payload: PreferencesIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    unknown = [c for c in payload.categories if c not in CONTENT_CATEGORIES]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown categories: {', '.join(unknown)}")

    # new dict: JSON columns only track reassignment
    user.preferences = {
        "categories": list(dict.fromkeys(payload.categories)),
        "preferredSources": list(dict.fromkeys(payload.preferredSources)),
    }
    db.commit()
    db.refresh(user)
    return user_preferences(user)
