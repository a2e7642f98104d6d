"""
Attempt model - one scored submission of a quiz
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.database import Base
import uuid


class Attempt(Base):
    """
    Quiz attempts table - written once at submission, never updated
    """
    __tablename__ = "quiz_attempts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)  # quiz size at submission time
    submitted_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    user = relationship("User", back_populates="attempts")
    quiz = relationship("Quiz", back_populates="attempts")
    answers = relationship(
        "Answer",
        back_populates="attempt",
        order_by="Answer.position",
        cascade="all, delete-orphan"
    )

    @property
    def percentage(self) -> float:
        if not self.total_questions:
            return 0.0
        return self.score / self.total_questions * 100

    def __repr__(self):
        return f"<Attempt(user_id={self.user_id}, quiz_id={self.quiz_id}, score={self.score}/{self.total_questions})>"
