"""
Question model - one ordered question of a quiz
"""
from sqlalchemy import Column, Text, Integer, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.database import Base
import uuid


class Question(Base):
    """
    Questions table - belongs exclusively to one quiz
    """
    __tablename__ = "questions"
    __table_args__ = (UniqueConstraint("quiz_id", "order", name="uq_questions_quiz_order"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    quiz_id = Column(Uuid, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    order = Column(Integer, nullable=False)  # zero-based position in quiz

    quiz = relationship("Quiz", back_populates="questions")
    options = relationship(
        "Option",
        back_populates="question",
        order_by="Option.order",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Question(id={self.id}, quiz_id={self.quiz_id}, order={self.order})>"
