"""
Leaderboard endpoint
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from app.api.deps import get_current_user
from app.config import settings
from app.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, ERROR_RESPONSES
from app.schemas.leaderboard import LeaderboardEntry
from app.services.leaderboard_service import leaderboard_service

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"], responses=ERROR_RESPONSES)


@router.get("", response_model=ApiResponse[List[LeaderboardEntry]])
async def get_leaderboard(
    limit: int = Query(settings.DEFAULT_LEADERBOARD_LIMIT, ge=1, le=settings.MAX_LEADERBOARD_LIMIT),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Users ranked by total score across all attempts"""
    entries = leaderboard_service.get_global_leaderboard(db, limit)
    return ApiResponse[List[LeaderboardEntry]](data=entries)
