"""
Pydantic schemas for quiz authoring and reading
"""
from pydantic import Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.schemas.common import CamelModel


class OptionCreate(CamelModel):
    """One answer choice in an authoring request"""
    text: str = Field(..., max_length=1000)
    is_correct: bool = False
    order: int = Field(..., ge=0)


class QuestionCreate(CamelModel):
    """One question in an authoring request"""
    text: str = Field(..., max_length=2000)
    order: int = Field(..., ge=0)
    options: List[OptionCreate]


class QuizCreate(CamelModel):
    """Request schema for quiz creation"""
    title: str = Field(..., max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    questions: List[QuestionCreate]


class QuizUpdate(CamelModel):
    """Partial update; `questions` replaces the whole question set when present"""
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    questions: Optional[List[QuestionCreate]] = None


class OptionResponse(CamelModel):
    id: UUID
    text: str
    is_correct: bool
    order: int


class QuestionResponse(CamelModel):
    id: UUID
    text: str
    order: int
    options: List[OptionResponse]


class QuizResponse(CamelModel):
    """Quiz with questions and options, as seen by administrators"""
    id: UUID
    title: str
    description: Optional[str] = None
    created_by: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    questions: List[QuestionResponse]


class StudentOptionResponse(CamelModel):
    id: UUID
    text: str
    order: int


class StudentQuestionResponse(CamelModel):
    id: UUID
    text: str
    order: int
    options: List[StudentOptionResponse]


class StudentQuizResponse(CamelModel):
    """Quiz as seen by students: correct answers are withheld"""
    id: UUID
    title: str
    description: Optional[str] = None
    created_by: UUID
    created_at: Optional[datetime] = None
    questions: List[StudentQuestionResponse]
