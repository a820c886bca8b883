import threading
import time
import uuid
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fastapi import HTTPException
from starlette.status import HTTP_404_NOT_FOUND, HTTP_400_BAD_REQUEST

from medilearn.models.flashcards import Flashcard, StudyState

logger = logging.getLogger(__name__)

MAX_CARDS = 10

FLASHCARDS: List[Flashcard] = [
    Flashcard(id="fc1", front="Tachycardia", back="Resting heart rate above 100 beats per minute.", category="terminology"),
    Flashcard(id="fc2", front="Bradycardia", back="Resting heart rate below 60 beats per minute.", category="terminology"),
    Flashcard(id="fc3", front="Hypertension", back="Persistently raised arterial blood pressure (140/90 mmHg or more).", category="terminology"),
    Flashcard(id="fc4", front="Dyspnea", back="Difficult or laboured breathing.", category="terminology"),
    Flashcard(id="fc5", front="-itis (suffix)", back="Inflammation, e.g. appendicitis.", category="terminology"),
    Flashcard(id="fc6", front="Myocardium", back="The muscular middle layer of the heart wall.", category="anatomy"),
    Flashcard(id="fc7", front="Femur", back="The thigh bone, longest bone in the body.", category="anatomy"),
    Flashcard(id="fc8", front="Alveoli", back="Tiny air sacs in the lungs where gas exchange happens.", category="anatomy"),
    Flashcard(id="fc9", front="Nephron", back="Functional filtering unit of the kidney.", category="anatomy"),
    Flashcard(id="fc10", front="Beta blockers", back="Reduce heart rate and blood pressure by blocking adrenaline at beta receptors.", category="pharmacology"),
    Flashcard(id="fc11", front="NSAIDs", back="Non-steroidal anti-inflammatory drugs, e.g. ibuprofen.", category="pharmacology"),
    Flashcard(id="fc12", front="Antibiotic resistance", back="Bacteria no longer respond to drugs that used to kill them.", category="pharmacology"),
    Flashcard(id="fc13", front="Insulin", back="Pancreatic hormone that lowers blood glucose.", category="physiology"),
    Flashcard(id="fc14", front="Homeostasis", back="Keeping the internal environment stable despite external change.", category="physiology"),
]


def list_flashcards(category: Optional[str] = None) -> List[Flashcard]:
    if not category or category == "all":
        return list(FLASHCARDS)
    wanted = category.strip().lower()
    return [fc for fc in FLASHCARDS if fc.category.lower() == wanted]


def list_categories() -> List[str]:
    return list(dict.fromkeys(fc.category for fc in FLASHCARDS))


@dataclass
class _StudySession:
    id: str
    category: str
    active: List[Flashcard]
    created_at: float
    index: int = 0
    review_mode: bool = False
    completed: bool = False
    understood: List[Flashcard] = field(default_factory=list)
    need_review: List[Flashcard] = field(default_factory=list)
    swipes: int = 0


class FlashcardStudy:
    """
    Swipe study flow, kept in memory:
    - first pass over at most MAX_CARDS cards (right = understood, left = review)
    - the "review" cards are replayed once in a review pass
    - the session ends after the review pass, or after the first pass when
      nothing needs review
    """

    def __init__(self, ttl_seconds: int = 60 * 60) -> None:
        self._sessions: Dict[str, _StudySession] = {}
        self._ttl_seconds = ttl_seconds
        self._lock = threading.Lock()

    def start(self, category: str = "all") -> StudyState:
        cards = list_flashcards(category)[:MAX_CARDS]
        if not cards:
            raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No flashcards for this category")

        sess = _StudySession(
            id=f"study_{uuid.uuid4().hex[:12]}",
            category=category or "all",
            active=cards,
            created_at=time.time(),
        )
        with self._lock:
            self._purge_expired()
            self._sessions[sess.id] = sess
        return self._state(sess)

    def swipe(self, session_id: str, card_id: str, understood: bool) -> StudyState:
        # one swipe at a time: a session completes exactly once
        with self._lock:
            sess = self._get(session_id)
            if sess.completed:
                raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Study session already completed")

            current = sess.active[sess.index]
            if card_id != current.id:
                raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="cardId does not match the current card")

            if understood:
                sess.understood.append(current)
            else:
                sess.need_review.append(current)
            sess.index += 1
            sess.swipes += 1

            if sess.index >= len(sess.active):
                if not sess.review_mode and sess.need_review:
                    sess.active = list(sess.need_review)
                    sess.need_review = []
                    sess.index = 0
                    sess.review_mode = True
                else:
                    sess.completed = True
                    logger.debug("Study session %s completed (%d swipes)", sess.id, sess.swipes)

            return self._state(sess)

    def state(self, session_id: str) -> StudyState:
        with self._lock:
            return self._state(self._get(session_id))

    def get(self, session_id: str) -> _StudySession:
        with self._lock:
            return self._get(session_id)

    def _get(self, session_id: str) -> _StudySession:
        sess = self._sessions.get(session_id)
        if not sess:
            raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Study session not found")
        if time.time() - sess.created_at > self._ttl_seconds:
            self._sessions.pop(session_id, None)
            raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Study session expired")
        return sess

    def _purge_expired(self) -> None:
        now = time.time()
        expired = [sid for sid, s in self._sessions.items() if now - s.created_at > self._ttl_seconds]
        for sid in expired:
            self._sessions.pop(sid, None)
        if expired:
            logger.debug("Purged %d expired study sessions", len(expired))

    def _state(self, sess: _StudySession) -> StudyState:
        card = None if sess.completed else sess.active[sess.index]
        return StudyState(
            sessionId=sess.id,
            status="done" if sess.completed else "ready",
            reviewMode=sess.review_mode,
            index=sess.index,
            total=len(sess.active),
            card=card,
            understood=len(sess.understood),
            needReview=len(sess.need_review),
            cardsReviewed=sess.swipes,
        )
