"""
Quiz authoring service: structural validation and ownership rules
"""
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.models import Quiz
from app.repositories.quiz_repository import QuizRepository, quiz_repository
from app.schemas.quiz import QuizCreate, QuizUpdate, QuestionCreate
from app.utils.cache import CacheService, cache_service

logger = logging.getLogger(__name__)


class QuizService:
    """
    Service for creating and managing quizzes

    Rules:
    - title must be non-empty
    - at least one question; each question needs text and at least 2 options
    - exactly one option per question is marked correct
    - question orders are unique within the quiz, option orders within the question
    - only the creating admin may update or delete
    """

    MIN_OPTIONS = 2

    def __init__(
        self,
        quizzes: Optional[QuizRepository] = None,
        cache: Optional[CacheService] = None
    ):
        self.quizzes = quizzes or quiz_repository
        self.cache = cache or cache_service

    def validate_title(self, title: Optional[str]) -> None:
        if title is None or not title.strip():
            raise ValidationError("Title is required")

    def validate_questions(self, questions: List[QuestionCreate]) -> None:
        """
        Check the nested question/option structure

        Raises:
            ValidationError: on the first rule that fails
        """
        if not questions:
            raise ValidationError("At least 1 question is required")

        question_orders = [q.order for q in questions]
        if len(set(question_orders)) != len(question_orders):
            raise ValidationError("Question order values must be unique")

        for position, question in enumerate(questions, start=1):
            if not question.text.strip():
                raise ValidationError(f"Question {position}: text is required")

            if len(question.options) < self.MIN_OPTIONS:
                raise ValidationError(
                    f"Question {position}: at least {self.MIN_OPTIONS} options are required"
                )

            if any(not option.text.strip() for option in question.options):
                raise ValidationError(f"Question {position}: option text is required")

            option_orders = [o.order for o in question.options]
            if len(set(option_orders)) != len(option_orders):
                raise ValidationError(f"Question {position}: option order values must be unique")

            correct = sum(1 for option in question.options if option.is_correct)
            if correct != 1:
                raise ValidationError("Each question must have exactly one correct answer")

    def create_quiz(self, db: Session, owner_id: UUID, data: QuizCreate) -> Quiz:
        self.validate_title(data.title)
        self.validate_questions(data.questions)

        quiz = self.quizzes.create(db, owner_id, data)
        logger.info(f"Quiz created: {quiz.id} by {owner_id} ({len(quiz.questions)} questions)")
        return quiz

    def get_quiz(self, db: Session, quiz_id: UUID) -> Quiz:
        quiz = self.quizzes.find_by_id(db, quiz_id)
        if not quiz:
            raise NotFoundError("Quiz not found")
        return quiz

    def list_all(self, db: Session) -> List[Quiz]:
        return self.quizzes.find_all(db)

    def list_by_creator(self, db: Session, owner_id: UUID) -> List[Quiz]:
        return self.quizzes.find_by_creator(db, owner_id)

    def _get_owned(self, db: Session, quiz_id: UUID, owner_id: UUID, action: str) -> Quiz:
        quiz = self.get_quiz(db, quiz_id)
        if quiz.created_by != owner_id:
            logger.warning(f"User {owner_id} tried to {action} quiz {quiz_id} owned by {quiz.created_by}")
            raise ForbiddenError(f"You can only {action} your own quizzes")
        return quiz

    def update_quiz(self, db: Session, quiz_id: UUID, owner_id: UUID, data: QuizUpdate) -> Quiz:
        """
        Partially update a quiz

        Supplying `questions` discards every existing question and option
        (their ids included) and recreates them from the request. Answers of
        earlier attempts keep the ids they were submitted with.
        """
        quiz = self._get_owned(db, quiz_id, owner_id, "update")

        if "title" in data.model_fields_set:
            self.validate_title(data.title)
        if data.questions is not None:
            self.validate_questions(data.questions)

        quiz = self.quizzes.update(db, quiz, data)
        logger.info(
            f"Quiz updated: {quiz_id}"
            + (" (questions replaced)" if data.questions is not None else "")
        )
        return quiz

    def delete_quiz(self, db: Session, quiz_id: UUID, owner_id: UUID) -> None:
        quiz = self._get_owned(db, quiz_id, owner_id, "delete")

        self.quizzes.delete(db, quiz)
        # Its attempts are gone too
        self.cache.clear_leaderboard_cache()

        logger.info(f"Quiz deleted: {quiz_id}")


# Global instance
quiz_service = QuizService()
