import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from medilearn.db.database import get_db
from medilearn.models.quiz import (
    AnswerRequest,
    AnswerResponse,
    QuizListResponse,
    ResultResponse,
    StartQuizResponse,
)
from medilearn.routers.auth import read_session_user_id
from medilearn.services import stats as stats_service
from medilearn.services.quiz_engine import QuizEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])

# Module-scope singleton
_engine = QuizEngine()


@router.get("", response_model=QuizListResponse)
def list_quizzes():
    return QuizListResponse(items=_engine.list_quizzes())


@router.post("/{quiz_id}/start", response_model=StartQuizResponse)
def start_quiz(quiz_id: str):
    return _engine.start(quiz_id)


@router.post("/sessions/{session_id}/answer", response_model=AnswerResponse)
def answer_quiz(
    session_id: str,
    body: AnswerRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    resp = _engine.answer(session_id, body)

    # last question answered: store the attempt for signed-in users
    if resp.nextQuestion is None:
        user_id = read_session_user_id(request)
        if user_id is not None and stats_service.user_exists(db, user_id):
            res = _engine.result(session_id)
            stats_service.record_quiz_attempt(db, user_id, res.quizId, res.score, res.total)
            logger.info("Recorded quiz attempt for user %s", user_id)

    return resp


@router.get("/sessions/{session_id}/result", response_model=ResultResponse)
def quiz_result(session_id: str):
    return _engine.result(session_id)
