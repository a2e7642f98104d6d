"""
Pydantic schemas for attempt submission and results
"""
from pydantic import Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.schemas.common import CamelModel


class AnswerSubmit(CamelModel):
    """The option picked for one question"""
    question_id: UUID
    option_id: UUID


class AttemptSubmit(CamelModel):
    """Schema for quiz submission"""
    quiz_id: UUID
    answers: List[AnswerSubmit] = Field(..., min_length=1)


class AnswerResponse(CamelModel):
    id: UUID
    question_id: UUID
    option_id: UUID


class AttemptUser(CamelModel):
    id: UUID
    username: str
    email: str


class AttemptQuiz(CamelModel):
    id: UUID
    title: str
    description: Optional[str] = None


class AttemptResponse(CamelModel):
    """Persisted attempt with its answers, user and quiz summary"""
    id: UUID
    user_id: UUID
    quiz_id: UUID
    score: int
    total_questions: int
    percentage: float
    submitted_at: datetime
    answers: List[AnswerResponse]
    user: Optional[AttemptUser] = None
    quiz: Optional[AttemptQuiz] = None
