"""
Quiz authoring and reading endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Union
from uuid import UUID
import logging

from app.api.deps import get_current_user, require_admin
from app.database import get_db
from app.models import Quiz, Role
from app.schemas.auth import CurrentUser
from app.schemas.common import ApiResponse, ERROR_RESPONSES
from app.schemas.quiz import QuizCreate, QuizUpdate, QuizResponse, StudentQuizResponse
from app.services.quiz_service import quiz_service

QuizView = Union[QuizResponse, StudentQuizResponse]

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"], responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)


def _present(quiz: Quiz, user: CurrentUser):
    """Administrators see correct answers, students do not"""
    if user.role == Role.ADMIN:
        return QuizResponse.model_validate(quiz)
    return StudentQuizResponse.model_validate(quiz)


@router.get("", response_model=ApiResponse[Union[List[QuizResponse], List[StudentQuizResponse]]])
async def list_quizzes(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List every quiz, newest first"""
    quizzes = quiz_service.list_all(db)
    return ApiResponse(data=[_present(quiz, current_user) for quiz in quizzes])


@router.get("/mine", response_model=ApiResponse[List[QuizResponse]])
async def list_my_quizzes(
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """List the quizzes created by the calling admin, newest first"""
    quizzes = quiz_service.list_by_creator(db, current_user.id)
    return ApiResponse[List[QuizResponse]](
        data=[QuizResponse.model_validate(quiz) for quiz in quizzes]
    )


@router.get("/{quiz_id}", response_model=ApiResponse[QuizView])
async def get_quiz(
    quiz_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get one quiz with its ordered questions and options"""
    quiz = quiz_service.get_quiz(db, quiz_id)
    return ApiResponse(data=_present(quiz, current_user))


@router.post("", response_model=ApiResponse[QuizResponse], status_code=201)
async def create_quiz(
    request: QuizCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Create a quiz

    - Each question needs at least 2 options and exactly one correct option
    - Question and option order is stored as given
    """
    logger.info(f"Admin {current_user.id} creating quiz '{request.title}'")
    quiz = quiz_service.create_quiz(db, current_user.id, request)
    return ApiResponse[QuizResponse](
        data=QuizResponse.model_validate(quiz),
        message="Quiz created successfully"
    )


@router.put("/{quiz_id}", response_model=ApiResponse[QuizResponse])
async def update_quiz(
    quiz_id: UUID,
    request: QuizUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Update a quiz you own

    Sending `questions` replaces all existing questions and options.
    """
    logger.info(f"Admin {current_user.id} updating quiz {quiz_id}")
    quiz = quiz_service.update_quiz(db, quiz_id, current_user.id, request)
    return ApiResponse[QuizResponse](
        data=QuizResponse.model_validate(quiz),
        message="Quiz updated successfully"
    )


@router.delete("/{quiz_id}", response_model=ApiResponse[None])
async def delete_quiz(
    quiz_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a quiz you own, along with all of its attempts"""
    logger.info(f"Admin {current_user.id} deleting quiz {quiz_id}")
    quiz_service.delete_quiz(db, quiz_id, current_user.id)
    return ApiResponse[None](message="Quiz deleted successfully")
