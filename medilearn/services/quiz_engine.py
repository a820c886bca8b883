import threading
import time
import uuid
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fastapi import HTTPException
from starlette.status import HTTP_404_NOT_FOUND, HTTP_400_BAD_REQUEST

from medilearn.models.quiz import (
    AnswerRequest,
    AnswerResponse,
    Question,
    QuizSummary,
    ResultItem,
    ResultResponse,
    StartQuizResponse,
)

logger = logging.getLogger(__name__)


@dataclass
class _QuestionInternal:
    id: str
    question: str
    options: List[str]
    correct_answer: str
    explanation: str


@dataclass
class _Quiz:
    id: str
    title: str
    description: str
    category: str
    questions: List[_QuestionInternal]


@dataclass
class _Session:
    id: str
    quiz: _Quiz
    index: int
    score: int
    created_at: float
    answers: Dict[str, str] = field(default_factory=dict)  # questionId -> chosen option

    @property
    def total(self) -> int:
        return len(self.quiz.questions)

    @property
    def finished(self) -> bool:
        return self.index >= self.total


def _q(id_: str, question: str, options: List[str], correct: str, explanation: str) -> _QuestionInternal:
    return _QuestionInternal(id=id_, question=question, options=options, correct_answer=correct, explanation=explanation)


QUIZZES: List[_Quiz] = [
    _Quiz(
        id="anatomy-basics",
        title="Introduction to Human Anatomy",
        description="Test your knowledge of human anatomy basics",
        category="anatomy",
        questions=[
            _q("a1", "Which organ pumps blood through the body?",
               ["Lungs", "Heart", "Liver", "Kidneys"], "Heart",
               "The heart pumps blood through the systemic and pulmonary circulation."),
            _q("a2", "What is the largest organ of the human body?",
               ["Skin", "Liver", "Brain", "Small intestine"], "Skin",
               "The skin is the largest organ by surface area and weight."),
            _q("a3", "How many bones are in the adult human skeleton?",
               ["186", "206", "226", "256"], "206",
               "Most adults have 206 bones; infants have more that later fuse."),
            _q("a4", "Which part of the brain coordinates balance and movement?",
               ["Cerebrum", "Cerebellum", "Medulla", "Hypothalamus"], "Cerebellum",
               "The cerebellum fine-tunes motor activity and balance."),
            _q("a5", "Where does gas exchange take place in the lungs?",
               ["Bronchi", "Trachea", "Alveoli", "Pleura"], "Alveoli",
               "Oxygen and carbon dioxide diffuse across the thin alveolar walls."),
        ],
    ),
    _Quiz(
        id="nutrition-basics",
        title="Nutrition Basics",
        description="Macronutrients, vitamins and healthy eating",
        category="nutrition",
        questions=[
            _q("n1", "Which macronutrient provides the most energy per gram?",
               ["Protein", "Carbohydrate", "Fat", "Fibre"], "Fat",
               "Fat provides about 9 kcal per gram, versus about 4 for protein and carbohydrate."),
            _q("n2", "Which vitamin is produced in the skin with sunlight?",
               ["Vitamin A", "Vitamin C", "Vitamin D", "Vitamin K"], "Vitamin D",
               "UVB exposure lets the skin synthesise vitamin D."),
            _q("n3", "Iron deficiency most commonly causes which condition?",
               ["Anaemia", "Scurvy", "Rickets", "Goitre"], "Anaemia",
               "Iron is needed for haemoglobin; low iron leads to iron-deficiency anaemia."),
        ],
    ),
    _Quiz(
        id="heart-health",
        title="Cardiovascular Health",
        description="Blood pressure, heart rate and heart disease prevention",
        category="cardiology",
        questions=[
            _q("h1", "What is a normal resting heart rate for adults?",
               ["30-50 bpm", "60-100 bpm", "110-130 bpm", "140-160 bpm"], "60-100 bpm",
               "A resting rate between 60 and 100 beats per minute is considered normal."),
            _q("h2", "Which reading is considered high blood pressure?",
               ["110/70 mmHg", "118/76 mmHg", "145/95 mmHg", "100/65 mmHg"], "145/95 mmHg",
               "Readings of 140/90 mmHg or more are generally classed as hypertension."),
            _q("h3", "Which lifestyle change lowers cardiovascular risk?",
               ["Smoking cessation", "More salt", "Less sleep", "Sedentary work"], "Smoking cessation",
               "Stopping smoking is one of the most effective ways to reduce heart disease risk."),
        ],
    ),
]


class QuizEngine:
    """
    Quiz sessions held in memory with a TTL.
    Only the current question can be answered; the result is available at any time.
    """

    def __init__(self, quizzes: Optional[List[_Quiz]] = None, ttl_seconds: int = 60 * 60) -> None:
        self._quizzes: Dict[str, _Quiz] = {q.id: q for q in (quizzes or QUIZZES)}
        self._sessions: Dict[str, _Session] = {}
        self._ttl_seconds = ttl_seconds
        self._lock = threading.Lock()

    # ---------- public API ----------

    def list_quizzes(self) -> List[QuizSummary]:
        return [
            QuizSummary(
                id=q.id,
                title=q.title,
                description=q.description,
                category=q.category,
                questionCount=len(q.questions),
            )
            for q in self._quizzes.values()
        ]

    def start(self, quiz_id: str) -> StartQuizResponse:
        quiz = self._quizzes.get(quiz_id)
        if not quiz:
            raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Quiz not found")

        sess = _Session(
            id=f"quiz_{uuid.uuid4().hex[:12]}",
            quiz=quiz,
            index=0,
            score=0,
            created_at=time.time(),
        )
        with self._lock:
            self._purge_expired()
            self._sessions[sess.id] = sess

        return StartQuizResponse(
            sessionId=sess.id,
            quizId=quiz.id,
            total=sess.total,
            index=sess.index,
            question=self._to_public_question(quiz.questions[0]),
        )

    def answer(self, session_id: str, body: AnswerRequest) -> AnswerResponse:
        # one answer at a time: a session finishes exactly once
        with self._lock:
            sess = self._get_session(session_id)
            if sess.finished:
                raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Quiz already finished")

            current = sess.quiz.questions[sess.index]
            if body.questionId != current.id:
                raise HTTPException(
                    status_code=HTTP_400_BAD_REQUEST,
                    detail="questionId does not match the current question",
                )
            if body.answer not in current.options:
                raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Answer is not one of the options")

            is_correct = body.answer == current.correct_answer
            if is_correct:
                sess.score += 1
            sess.answers[current.id] = body.answer
            sess.index += 1

            next_q = None
            if not sess.finished:
                next_q = self._to_public_question(sess.quiz.questions[sess.index])

            return AnswerResponse(
                isCorrect=is_correct,
                correctAnswer=current.correct_answer,
                explanation=current.explanation,
                nextIndex=sess.index,
                nextQuestion=next_q,
            )

    def result(self, session_id: str) -> ResultResponse:
        with self._lock:
            sess = self._get_session(session_id)
        details = [
            ResultItem(
                questionId=q.id,
                correctAnswer=q.correct_answer,
                chosenAnswer=sess.answers.get(q.id),
            )
            for q in sess.quiz.questions
        ]
        return ResultResponse(
            quizId=sess.quiz.id,
            score=sess.score,
            total=sess.total,
            finished=sess.finished,
            details=details,
        )

    # ---------- internals ----------

    def _get_session(self, session_id: str) -> _Session:
        sess = self._sessions.get(session_id)
        if not sess:
            raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Quiz session not found")
        if time.time() - sess.created_at > self._ttl_seconds:
            self._sessions.pop(session_id, None)
            raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Quiz session expired")
        return sess

    def _purge_expired(self) -> None:
        now = time.time()
        expired = [sid for sid, s in self._sessions.items() if now - s.created_at > self._ttl_seconds]
        for sid in expired:
            self._sessions.pop(sid, None)
        if expired:
            logger.debug("Purged %d expired quiz sessions", len(expired))

    def _to_public_question(self, q: _QuestionInternal) -> Question:
        return Question(id=q.id, question=q.question, options=list(q.options))
