"""
Authentication and role dependencies for API routes

Every request is authenticated from scratch: the bearer token is verified and
its claims become the current user. Nothing is kept between requests.
"""
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.exceptions import ForbiddenError, UnauthorizedError
from app.models import Role
from app.schemas.auth import CurrentUser
from app.services.auth_service import auth_service

security = HTTPBearer(auto_error=False)


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """
    Resolve the caller from the `Authorization: Bearer <token>` header

    Raises:
        UnauthorizedError: header missing or token invalid/expired
    """
    if not creds or not creds.credentials:
        raise UnauthorizedError("No token provided")
    return auth_service.verify_token(creds.credentials)


def require_roles(*roles: Role) -> Callable[[CurrentUser], CurrentUser]:
    """Create a dependency that admits only users holding one of `roles`"""
    names = " or ".join(role.value.capitalize() for role in roles)

    def wrapper(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise ForbiddenError(f"{names} access required")
        return user

    return wrapper


require_admin = require_roles(Role.ADMIN)
require_student = require_roles(Role.STUDENT)
