"""
Pydantic schemas for the leaderboard
"""
from uuid import UUID

from app.schemas.common import CamelModel


class LeaderboardEntry(CamelModel):
    """One ranked user"""
    user_id: UUID
    username: str
    total_score: int
    quizzes_attempted: int
    average_percentage: float
