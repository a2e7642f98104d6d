"""
Database models package
"""
from app.models.user import User, Role
from app.models.quiz import Quiz
from app.models.question import Question
from app.models.option import Option
from app.models.quiz_attempt import Attempt
from app.models.answer import Answer

__all__ = ["User", "Role", "Quiz", "Question", "Option", "Attempt", "Answer"]
