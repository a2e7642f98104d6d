"""
Credential service: password hashing, registration, login and token handling
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from uuid import UUID

import bcrypt
import jwt
from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ConflictError, UnauthorizedError
from app.models import User, Role
from app.repositories.user_repository import UserRepository, user_repository
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

# bcrypt only ever looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class AuthService:
    """
    Service for credentials and signed session tokens

    Tokens are stateless HS256 JWTs carrying {id, username, email, role};
    nothing about a session is stored server-side.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 60 * 24 * 7,
        bcrypt_rounds: int = 10,
        users: Optional[UserRepository] = None
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes
        self.bcrypt_rounds = bcrypt_rounds
        self.users = users or user_repository

    def hash_password(self, password: str) -> str:
        """One-way salted hash"""
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(
            password.encode("utf-8")[:BCRYPT_MAX_BYTES],
            password_hash.encode("utf-8")
        )

    def create_token(self, user: User) -> str:
        """Sign a token for the user that expires after `expires_minutes`"""
        now = datetime.now(timezone.utc)
        payload = {
            "id": str(user.id),
            "username": user.username,
            "email": user.email,
            "role": user.role.value,
            "iat": now,
            "exp": now + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> CurrentUser:
        """
        Decode and validate a token

        Raises:
            UnauthorizedError: bad signature, expired, or malformed claims
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            return CurrentUser(**payload)
        except (jwt.PyJWTError, SchemaError, TypeError) as e:
            logger.debug(f"Token rejected: {str(e)}")
            raise UnauthorizedError("Invalid or expired token")

    def register(
        self,
        db: Session,
        username: str,
        email: str,
        password: str,
        role: Role = Role.STUDENT
    ) -> Tuple[str, User]:
        """
        Register a new user

        Returns:
            Tuple of (token, user)

        Raises:
            ConflictError: email or username already in use
        """
        if self.users.find_by_email(db, email):
            logger.warning(f"Registration rejected, email in use: {email}")
            raise ConflictError("Email already registered")

        if self.users.find_by_username(db, username):
            logger.warning(f"Registration rejected, username in use: {username}")
            raise ConflictError("Username already taken")

        user = self.users.create(
            db,
            username=username,
            email=email,
            password_hash=self.hash_password(password),
            role=role
        )

        return self.create_token(user), user

    def login(self, db: Session, username: str, password: str) -> Tuple[str, User]:
        """
        Authenticate by username and password

        Returns:
            Tuple of (token, user)

        Raises:
            UnauthorizedError: unknown username or wrong password
        """
        user = self.users.find_by_username(db, username)
        if not user or not self.verify_password(password, user.password_hash):
            logger.warning(f"Failed login for username: {username}")
            raise UnauthorizedError("Invalid credentials")

        logger.info(f"User logged in: {user.id}")
        return self.create_token(user), user

    def get_profile(self, db: Session, user_id: UUID) -> User:
        """Load the user behind a verified token"""
        user = self.users.find_by_id(db, user_id)
        if not user:
            raise UnauthorizedError("User no longer exists")
        return user


# Global instance
auth_service = AuthService(
    secret=settings.JWT_SECRET,
    algorithm=settings.JWT_ALGORITHM,
    expires_minutes=settings.JWT_EXPIRES_MINUTES,
    bcrypt_rounds=settings.BCRYPT_ROUNDS
)
