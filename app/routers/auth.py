"""Authentication router: registration, login, password reset and profile."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.deps import get_current_session, get_db
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ChangePasswordResponse,
    ForgotPasswordRequest,
    LoginRequest,
    ProfileResponse,
    ProfileUpdate,
    RegisterRequest,
    ResetPasswordRequest,
    UserRead,
    UserResponse,
    UserSession,
)
from app.schemas.common import MessageResponse
from app.services import auth_service
from app.services.notification_service import PasswordResetNotifier, get_reset_notifier

# Rate limiting
from app.core.rate_limit import AUTH_LIMIT, limiter

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)


# =============================================================================
# Credentials
# =============================================================================

@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit(AUTH_LIMIT)
def register(
    request: Request,
    data: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Create an account and return a session token."""
    user, token = auth_service.register(db, data)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(AUTH_LIMIT)
def login(
    request: Request,
    data: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Exchange email + password for a session token.

    Unknown email and wrong password produce the same 401 response.
    """
    user, token = auth_service.login(db, data)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserRead.model_validate(user),
    )


# =============================================================================
# Password reset
# =============================================================================

@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit(AUTH_LIMIT)
def forgot_password(
    request: Request,
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    notifier: PasswordResetNotifier = Depends(get_reset_notifier),
):
    """Same response whether or not the account exists."""
    auth_service.forgot_password(db, data.email, notifier)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password/{token}", response_model=MessageResponse)
@limiter.limit(AUTH_LIMIT)
def reset_password(
    request: Request,
    token: str,
    data: ResetPasswordRequest,
    db: Session = Depends(get_db),
):
    auth_service.reset_password(db, token, data)
    return MessageResponse(message="Password reset successful")


# =============================================================================
# Current user
# =============================================================================

@router.get("/me", response_model=UserResponse)
def get_me(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Get current authenticated user info."""
    user = auth_service.get_user(db, session.user_id)
    return UserResponse(user=UserRead.model_validate(user))


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Update names and/or email of the current user."""
    user = auth_service.update_profile(db, session, data)
    return ProfileResponse(
        message="Profile updated successfully",
        user=UserRead.model_validate(user),
    )


@router.put("/change-password", response_model=ChangePasswordResponse)
def change_password(
    data: ChangePasswordRequest,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Change the current user's password.

    Every previously issued token is revoked; the returned token replaces it.
    """
    token = auth_service.change_password(db, session, data)
    return ChangePasswordResponse(message="Password changed successfully", token=token)
