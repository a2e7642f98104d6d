"""
Option model - selectable answer choice of a question
"""
from sqlalchemy import Column, Text, Integer, Boolean, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.database import Base
import uuid


class Option(Base):
    """
    Options table - exactly one correct option per question (checked at authoring time)
    """
    __tablename__ = "options"
    __table_args__ = (UniqueConstraint("question_id", "order", name="uq_options_question_order"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    question_id = Column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False)

    question = relationship("Question", back_populates="options")

    def __repr__(self):
        return f"<Option(id={self.id}, question_id={self.question_id}, is_correct={self.is_correct})>"
