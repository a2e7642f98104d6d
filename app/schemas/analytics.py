"""
Pydantic schemas for analytics endpoints
"""
from typing import List
from uuid import UUID
from datetime import datetime

from app.schemas.common import CamelModel


class QuestionStatistics(CamelModel):
    """How students fared on one question"""
    question_id: UUID
    text: str
    order: int
    attempts: int
    correct_count: int
    correct_rate: float


class QuizStatistics(CamelModel):
    """Aggregate results for a quiz"""
    quiz_id: UUID
    title: str
    total_attempts: int
    unique_students: int
    average_score: float
    average_percentage: float
    highest_score: int
    lowest_score: int
    questions: List[QuestionStatistics]


class QuizPerformance(CamelModel):
    """A student's results on one quiz"""
    quiz_id: UUID
    quiz_title: str
    attempts: int
    best_score: int
    best_percentage: float
    last_submitted_at: datetime


class UserPerformance(CamelModel):
    """Complete student performance summary"""
    user_id: UUID
    username: str
    total_attempts: int
    quizzes_taken: int
    total_score: int
    average_percentage: float
    best_percentage: float
    quiz_breakdown: List[QuizPerformance]
    recommendations: List[str]
