import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from medilearn.db.database import get_db
from medilearn.models.flashcards import (
    CategoryListResponse,
    FlashcardListResponse,
    StudyStartRequest,
    StudyState,
    SwipeRequest,
)
from medilearn.routers.auth import read_session_user_id
from medilearn.services import stats as stats_service
from medilearn.services.flashcard_study import FlashcardStudy, list_categories, list_flashcards

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flashcards", tags=["flashcards"])

# Module-scope singleton
_study = FlashcardStudy()


@router.get("", response_model=FlashcardListResponse)
def get_flashcards(category: Optional[str] = Query(default=None, description="'all' or a category")):
    return FlashcardListResponse(items=list_flashcards(category))


@router.get("/categories", response_model=CategoryListResponse)
def get_categories():
    return CategoryListResponse(items=list_categories())


@router.post("/study/start", response_model=StudyState)
def study_start(body: Optional[StudyStartRequest] = None):
    body = body or StudyStartRequest()
    return _study.start(body.category)


@router.get("/study/{session_id}", response_model=StudyState)
def study_state(session_id: str):
    return _study.state(session_id)


@router.post("/study/{session_id}/swipe", response_model=StudyState)
def study_swipe(
    session_id: str,
    body: SwipeRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    state = _study.swipe(session_id, body.cardId, body.understood)

    # completed by this swipe: store the session for signed-in users
    if state.status == "done":
        user_id = read_session_user_id(request)
        if user_id is not None and stats_service.user_exists(db, user_id):
            category = _study.get(session_id).category
            stats_service.record_flashcard_session(db, user_id, category, state.cardsReviewed)
            logger.info("Recorded flashcard session for user %s", user_id)

    return state
