"""
Quiz repository - quizzes with nested questions and options
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, selectinload

from app.models import Quiz, Question, Option
from app.schemas.quiz import QuizCreate, QuizUpdate, QuestionCreate

logger = logging.getLogger(__name__)


def _with_relations(query):
    """Eager-load questions and their options"""
    return query.options(selectinload(Quiz.questions).selectinload(Question.options))


class QuizRepository:
    """
    Persistence for quizzes

    Questions and options keep the `order` declared by the author; the
    relationships sort by it on load.
    """

    def _build_questions(self, questions: List[QuestionCreate]) -> List[Question]:
        return [
            Question(
                text=q.text,
                order=q.order,
                options=[
                    Option(text=o.text, is_correct=o.is_correct, order=o.order)
                    for o in q.options
                ]
            )
            for q in questions
        ]

    def create(self, db: Session, owner_id: UUID, data: QuizCreate) -> Quiz:
        quiz = Quiz(
            title=data.title,
            description=data.description,
            created_by=owner_id,
            questions=self._build_questions(data.questions)
        )

        db.add(quiz)
        try:
            db.commit()
        except Exception as e:
            logger.error(f"Failed to save quiz: {str(e)}")
            db.rollback()
            raise

        return self.find_by_id(db, quiz.id)

    def find_all(self, db: Session) -> List[Quiz]:
        return _with_relations(db.query(Quiz)).order_by(Quiz.created_at.desc()).all()

    def find_by_id(self, db: Session, quiz_id: UUID) -> Optional[Quiz]:
        return _with_relations(db.query(Quiz)).filter(Quiz.id == quiz_id).first()

    def find_by_creator(self, db: Session, owner_id: UUID) -> List[Quiz]:
        return (
            _with_relations(db.query(Quiz))
            .filter(Quiz.created_by == owner_id)
            .order_by(Quiz.created_at.desc())
            .all()
        )

    def update(self, db: Session, quiz: Quiz, data: QuizUpdate) -> Quiz:
        """
        Apply a partial update

        When `questions` is supplied the old questions (and their options)
        are deleted and the new ones inserted in the same transaction.
        """
        fields = data.model_fields_set

        if data.title is not None:
            quiz.title = data.title
        if "description" in fields:
            quiz.description = data.description
        # Set explicitly: replacing only the questions never touches the quiz row
        quiz.updated_at = datetime.now(timezone.utc)

        try:
            if data.questions is not None:
                quiz.questions.clear()
                # Deletes must reach the DB before inserts reuse the same order slots
                db.flush()
                quiz.questions.extend(self._build_questions(data.questions))
            db.commit()
        except Exception as e:
            logger.error(f"Failed to update quiz {quiz.id}: {str(e)}")
            db.rollback()
            raise

        return self.find_by_id(db, quiz.id)

    def delete(self, db: Session, quiz: Quiz) -> None:
        db.delete(quiz)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise


# Global instance
quiz_repository = QuizRepository()
