"""
Pydantic schemas for registration, login and identity
"""
from pydantic import Field, EmailStr
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.models.user import Role
from app.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Request schema for registration"""
    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: EmailStr
    password: str = Field(..., min_length=6, description="Plain-text password, hashed on receipt")
    role: Role = Role.STUDENT


class LoginRequest(CamelModel):
    """Request schema for login"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """User as returned to clients (never includes the password hash)"""
    id: UUID
    username: str
    email: str
    role: Role
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    """Token plus the authenticated user"""
    token: str
    user: UserResponse


class CurrentUser(CamelModel):
    """Identity claims decoded from a verified token"""
    id: UUID
    username: str
    email: str
    role: Role
