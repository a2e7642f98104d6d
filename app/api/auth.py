"""
Registration, login and identity endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_user
from app.database import get_db
from app.schemas.auth import RegisterRequest, LoginRequest, AuthResponse, UserResponse, CurrentUser
from app.schemas.common import ApiResponse, ERROR_RESPONSES
from app.services.auth_service import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"], responses=ERROR_RESPONSES)
logger = logging.getLogger(__name__)


# bcrypt work must stay off the event loop, so the credential routes are sync
@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=201)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user

    - Username and email must be unique (409 otherwise)
    - Role defaults to STUDENT
    - Returns a signed token and the user without its password hash
    """
    logger.info(f"Registering user {request.username}")
    token, user = auth_service.register(
        db,
        username=request.username,
        email=request.email,
        password=request.password,
        role=request.role
    )

    return ApiResponse[AuthResponse](
        data=AuthResponse(token=token, user=UserResponse.model_validate(user)),
        message="User registered successfully"
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Exchange username and password for a token"""
    token, user = auth_service.login(db, request.username, request.password)

    return ApiResponse[AuthResponse](
        data=AuthResponse(token=token, user=UserResponse.model_validate(user)),
        message="Login successful"
    )


@router.post("/logout", response_model=ApiResponse[None])
async def logout():
    """
    Tokens are stateless, so logging out is the client discarding its token.
    Kept for clients that expect the endpoint.
    """
    logger.info("Logout requested")
    return ApiResponse[None](message="Logged out successfully")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the user behind the bearer token"""
    user = auth_service.get_profile(db, current_user.id)
    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))
