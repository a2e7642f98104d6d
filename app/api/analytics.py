"""
Performance analytics API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from app.api.deps import get_current_user, require_admin
from app.database import get_db
from app.schemas.analytics import QuizStatistics, UserPerformance
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, ERROR_RESPONSES
from app.services.analytics_service import analytics_service

router = APIRouter(prefix="/api/analytics", tags=["analytics"], responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)


@router.get("/quizzes/{quiz_id}", response_model=ApiResponse[QuizStatistics])
async def get_quiz_statistics(
    quiz_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Get aggregate results for a quiz

    Returns:
    - Total attempts and unique students
    - Average, highest and lowest score
    - Correct rate per question
    """
    logger.info(f"Fetching statistics for quiz {quiz_id}")
    stats = analytics_service.get_quiz_statistics(db, quiz_id)
    return ApiResponse[QuizStatistics](data=stats)


@router.get("/me", response_model=ApiResponse[UserPerformance])
async def get_my_performance(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Performance summary for the caller"""
    performance = analytics_service.get_user_performance(db, current_user.id)
    return ApiResponse[UserPerformance](data=performance)


@router.get("/users/{user_id}", response_model=ApiResponse[UserPerformance])
async def get_user_performance(
    user_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Get performance analytics for any user

    Returns:
    - Attempt totals and average/best percentage
    - Best result per quiz
    - Personalized recommendations
    """
    logger.info(f"Fetching performance analytics for user {user_id}")
    performance = analytics_service.get_user_performance(db, user_id)
    return ApiResponse[UserPerformance](data=performance)
