from typing import List, Optional
from pydantic import BaseModel, Field


class QuizSummary(BaseModel):
    id: str
    title: str
    description: str
    category: str
    questionCount: int


class QuizListResponse(BaseModel):
    items: List[QuizSummary]


class Question(BaseModel):
    id: str
    question: str = Field(..., description="Question text")
    options: List[str] = Field(..., min_length=2, description="Answer options")
    # correctAnswer stays server-side until the question is answered


class StartQuizResponse(BaseModel):
    sessionId: str
    quizId: str
    total: int
    index: int
    question: Question


class AnswerRequest(BaseModel):
    questionId: str
    answer: str = Field(..., min_length=1, description="One of the question's options")


class AnswerResponse(BaseModel):
    isCorrect: bool
    correctAnswer: str
    explanation: str
    nextIndex: int
    nextQuestion: Optional[Question] = None


class ResultItem(BaseModel):
    questionId: str
    correctAnswer: str
    chosenAnswer: Optional[str] = None


class ResultResponse(BaseModel):
    quizId: str
    score: int
    total: int
    finished: bool
    details: List[ResultItem]
