"""
Answer model - the option a student picked for one question
"""
from sqlalchemy import Column, Integer, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.database import Base
import uuid


class Answer(Base):
    """
    Answers table - question/option ids are snapshots, not foreign keys,
    so replacing a quiz's questions leaves past attempts readable
    """
    __tablename__ = "answers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    attempt_id = Column(Uuid, ForeignKey("quiz_attempts.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Uuid, nullable=False, index=True)
    option_id = Column(Uuid, nullable=False)
    position = Column(Integer, nullable=False, default=0)  # submission order

    attempt = relationship("Attempt", back_populates="answers")

    def __repr__(self):
        return f"<Answer(attempt_id={self.attempt_id}, question_id={self.question_id}, option_id={self.option_id})>"
