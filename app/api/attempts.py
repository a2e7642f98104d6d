"""
Attempt submission and history endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from app.api.deps import get_current_user, require_admin, require_student
from app.database import get_db
from app.exceptions import ForbiddenError
from app.models import Role
from app.schemas.attempt import AttemptSubmit, AttemptResponse
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, ERROR_RESPONSES
from app.services.attempt_service import attempt_service

router = APIRouter(prefix="/api/attempts", tags=["attempts"], responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)


def _many(attempts) -> ApiResponse[List[AttemptResponse]]:
    return ApiResponse[List[AttemptResponse]](
        data=[AttemptResponse.model_validate(a) for a in attempts]
    )


@router.post("", response_model=ApiResponse[AttemptResponse], status_code=201)
async def submit_attempt(
    submission: AttemptSubmit,
    current_user: CurrentUser = Depends(require_student),
    db: Session = Depends(get_db)
):
    """
    Submit answers for a quiz

    - Every question must be answered exactly once
    - Score is the number of correct options picked
    """
    attempt = attempt_service.submit(db, current_user.id, submission)
    return ApiResponse[AttemptResponse](
        data=AttemptResponse.model_validate(attempt),
        message="Quiz submitted successfully"
    )


@router.get("/me", response_model=ApiResponse[List[AttemptResponse]])
async def get_my_attempts(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The caller's attempts, newest first"""
    return _many(attempt_service.get_by_user_id(db, current_user.id))


@router.get("", response_model=ApiResponse[List[AttemptResponse]])
async def get_all_attempts(
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _many(attempt_service.get_all(db))


@router.get("/quiz/{quiz_id}", response_model=ApiResponse[List[AttemptResponse]])
async def get_attempts_by_quiz(
    quiz_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _many(attempt_service.get_by_quiz_id(db, quiz_id))


@router.get("/user/{user_id}", response_model=ApiResponse[List[AttemptResponse]])
async def get_attempts_by_user(
    user_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return _many(attempt_service.get_by_user_id(db, user_id))


@router.get("/{attempt_id}", response_model=ApiResponse[AttemptResponse])
async def get_attempt(
    attempt_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get one attempt; students may only read their own"""
    attempt = attempt_service.get_by_id(db, attempt_id)

    if current_user.role != Role.ADMIN and attempt.user_id != current_user.id:
        logger.warning(f"User {current_user.id} denied access to attempt {attempt_id}")
        raise ForbiddenError("You can only view your own attempts")

    return ApiResponse[AttemptResponse](data=AttemptResponse.model_validate(attempt))
