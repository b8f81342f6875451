"""
Authentication Routes

POST /auth/register - Register new user
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
POST /auth/forgot-password - Request a password reset
POST /auth/logout - Log the logout (token is dropped client-side)
"""

from fastapi import APIRouter, HTTPException, Depends
from pymongo.errors import DuplicateKeyError

from career_portal.core.auth import hash_password, verify_password, create_access_token, get_current_user
from career_portal.models.documents import User
from career_portal.services.mongo_service import get_user_service
from career_portal.schemas.schemas import (
    RegisterRequest, LoginRequest, ForgotPasswordRequest, TokenResponse, UserSummary, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

RESET_MESSAGE = "If an account exists, a password reset email has been sent"


def _summary(user: User, with_flags: bool = False) -> UserSummary:
    summary = UserSummary(
        id=user.id, email=user.email,
        first_name=user.profile.first_name, last_name=user.profile.last_name,
        full_name=user.full_name
    )
    if with_flags:
        summary.profile_complete = user.profile_complete
        summary.has_resume = user.has_resume
    return summary


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    Returns an access token straight away; no separate login needed.
    """
    users = get_user_service()

    if users.email_exists(request.email):
        raise HTTPException(status_code=400, detail="User already exists with this email")

    try:
        user = users.create(
            email=request.email,
            password_hash=hash_password(request.password),
            first_name=request.first_name,
            last_name=request.last_name
        )
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="User already exists with this email")

    users.log_activity(user.id, "user_registered", "User account created successfully")

    token = create_access_token(data={"sub": user.id})
    return TokenResponse(message="User registered successfully", access_token=token, user=_summary(user))


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    users = get_user_service()
    user = users.get_by_email(request.email)

    if not user:
        raise HTTPException(status_code=400, detail="Invalid credentials")

    if not user.is_active:
        raise HTTPException(status_code=400, detail="Account is deactivated")

    if not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    users.record_login(user.id)
    users.log_activity(user.id, "user_login", "User logged in successfully")

    token = create_access_token(data={"sub": user.id})
    return TokenResponse(message="Login successful", access_token=token, user=_summary(user, with_flags=True))


@router.get("/me")
async def get_me(user: User = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return {
        "user": {
            "id": user.id,
            "email": user.email,
            "profile": user.profile.model_dump(),
            "preferences": user.preferences.model_dump(),
            "skills": [s.model_dump() for s in user.skills],
            "career_goals": user.career_goals.model_dump(),
            "full_name": user.full_name,
            "skill_names": user.skill_names,
            "has_resume": user.has_resume,
            "profile_complete": user.profile_complete,
            "last_login": user.last_login,
            "created_at": user.created_at,
        }
    }


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(request: ForgotPasswordRequest):
    """Same answer whether or not the account exists."""
    users = get_user_service()
    user = users.get_by_email(request.email)

    if user:
        users.log_activity(user.id, "password_reset_requested", "Password reset was requested")

    return MessageResponse(message=RESET_MESSAGE)


@router.post("/logout", response_model=MessageResponse)
async def logout(user: User = Depends(get_current_user)):
    get_user_service().log_activity(user.id, "user_logout", "User logged out successfully")
    return MessageResponse(message="Logged out successfully")
