"""
Attempt scoring service
Validates a submission against the quiz, counts correct answers, stores the attempt
"""
import logging
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ValidationError
from app.models import Attempt, Quiz
from app.repositories.attempt_repository import AttemptRepository, attempt_repository
from app.repositories.quiz_repository import QuizRepository, quiz_repository
from app.schemas.attempt import AnswerSubmit, AttemptSubmit
from app.utils.cache import CacheService, cache_service

logger = logging.getLogger(__name__)


class AttemptService:
    """
    Service for scoring quiz submissions

    A submission must answer every question of the quiz exactly once.
    An option id that does not belong to the answered question is not an
    error; it simply scores as incorrect.
    """

    def __init__(
        self,
        attempts: Optional[AttemptRepository] = None,
        quizzes: Optional[QuizRepository] = None,
        cache: Optional[CacheService] = None
    ):
        self.attempts = attempts or attempt_repository
        self.quizzes = quizzes or quiz_repository
        self.cache = cache or cache_service

    def validate_answers(self, quiz: Quiz, answers: List[AnswerSubmit]) -> None:
        """
        Check that the answers cover each question of the quiz exactly once

        Raises:
            ValidationError: missing/extra answers, foreign or repeated question ids
        """
        question_ids = {question.id for question in quiz.questions}
        answered_ids = [answer.question_id for answer in answers]

        if len(answered_ids) != len(question_ids):
            raise ValidationError("All questions must be answered")

        if any(question_id not in question_ids for question_id in answered_ids):
            raise ValidationError("Invalid question IDs")

        if len(set(answered_ids)) != len(answered_ids):
            raise ValidationError("Each question must be answered exactly once")

    def score_answers(self, quiz: Quiz, answers: List[AnswerSubmit]) -> int:
        """Count answers whose option is a correct option of that question"""
        options_by_question: Dict[UUID, Dict[UUID, bool]] = {
            question.id: {option.id: option.is_correct for option in question.options}
            for question in quiz.questions
        }

        return sum(
            1 for answer in answers
            if options_by_question.get(answer.question_id, {}).get(answer.option_id, False)
        )

    def submit(self, db: Session, student_id: UUID, data: AttemptSubmit) -> Attempt:
        """
        Grade and persist a submission

        Returns:
            The stored attempt with answers, user and quiz summary
        """
        quiz = self.quizzes.find_by_id(db, data.quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found")

        self.validate_answers(quiz, data.answers)

        score = self.score_answers(quiz, data.answers)
        total_questions = len(quiz.questions)

        attempt = self.attempts.create(
            db,
            user_id=student_id,
            quiz_id=quiz.id,
            answers=data.answers,
            score=score,
            total_questions=total_questions
        )

        self.cache.clear_leaderboard_cache()

        logger.info(
            f"Attempt saved: {attempt.id}, user {student_id}, quiz {quiz.id}, "
            f"score: {score}/{total_questions}"
        )
        return attempt

    def get_by_id(self, db: Session, attempt_id: UUID) -> Attempt:
        attempt = self.attempts.find_by_id(db, attempt_id)
        if not attempt:
            raise NotFoundError("Attempt not found")
        return attempt

    def get_by_quiz_id(self, db: Session, quiz_id: UUID) -> List[Attempt]:
        return self.attempts.find_by_quiz_id(db, quiz_id)

    def get_by_user_id(self, db: Session, user_id: UUID) -> List[Attempt]:
        return self.attempts.find_by_user_id(db, user_id)

    def get_all(self, db: Session) -> List[Attempt]:
        return self.attempts.find_all(db)


# Global instance
attempt_service = AttemptService()
