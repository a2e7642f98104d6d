"""
Attempt repository - scored submissions and their answers
"""
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, selectinload

from app.models import Attempt, Answer
from app.schemas.attempt import AnswerSubmit

logger = logging.getLogger(__name__)


def _with_relations(query):
    """Eager-load answers, user and quiz summary"""
    return query.options(
        selectinload(Attempt.answers),
        selectinload(Attempt.user),
        selectinload(Attempt.quiz)
    )


class AttemptRepository:
    """Persistence for attempts; attempts are insert-only"""

    def create(
        self,
        db: Session,
        user_id: UUID,
        quiz_id: UUID,
        answers: List[AnswerSubmit],
        score: int,
        total_questions: int
    ) -> Attempt:
        attempt = Attempt(
            user_id=user_id,
            quiz_id=quiz_id,
            score=score,
            total_questions=total_questions,
            answers=[
                Answer(question_id=a.question_id, option_id=a.option_id, position=i)
                for i, a in enumerate(answers)
            ]
        )

        db.add(attempt)
        try:
            db.commit()
        except Exception as e:
            logger.error(f"Failed to save attempt: {str(e)}")
            db.rollback()
            raise

        return self.find_by_id(db, attempt.id)

    def find_by_id(self, db: Session, attempt_id: UUID) -> Optional[Attempt]:
        return _with_relations(db.query(Attempt)).filter(Attempt.id == attempt_id).first()

    def find_by_quiz_id(self, db: Session, quiz_id: UUID) -> List[Attempt]:
        return (
            _with_relations(db.query(Attempt))
            .filter(Attempt.quiz_id == quiz_id)
            .order_by(Attempt.submitted_at.desc())
            .all()
        )

    def find_by_user_id(self, db: Session, user_id: UUID) -> List[Attempt]:
        return (
            _with_relations(db.query(Attempt))
            .filter(Attempt.user_id == user_id)
            .order_by(Attempt.submitted_at.desc())
            .all()
        )

    def find_all(self, db: Session) -> List[Attempt]:
        return _with_relations(db.query(Attempt)).order_by(Attempt.submitted_at.desc()).all()

    def find_all_with_users(self, db: Session) -> List[Attempt]:
        """Every attempt with only its user loaded, for ranking"""
        return db.query(Attempt).options(selectinload(Attempt.user)).all()


# Global instance
attempt_repository = AttemptRepository()
