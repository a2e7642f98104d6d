"""
User model - registered administrators and students
"""
from sqlalchemy import Column, String, DateTime, Enum, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.database import Base
import enum
import uuid


class Role(str, enum.Enum):
    """Closed set of roles, compared by value"""
    ADMIN = "ADMIN"
    STUDENT = "STUDENT"


class User(Base):
    """
    Users table - credentials and role, immutable after registration
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.STUDENT)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    quizzes = relationship("Quiz", back_populates="creator")
    attempts = relationship("Attempt", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
