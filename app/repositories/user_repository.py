"""
User directory - lookups and inserts for user records
"""
import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError
from app.models import User, Role

logger = logging.getLogger(__name__)


class UserRepository:
    """Persistence for users"""

    def create(
        self,
        db: Session,
        username: str,
        email: str,
        password_hash: str,
        role: Role = Role.STUDENT
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role
        )

        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            db.rollback()
            raise ConflictError("Username or email already registered")
        db.refresh(user)

        logger.info(f"User created: {user.id} ({user.role.value})")
        return user

    def find_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def find_by_username(self, db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def find_by_id(self, db: Session, user_id: UUID) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()


# Global instance
user_repository = UserRepository()
