"""Authentication service - registration, login, password reset, profile."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidOrExpiredToken,
    NotFound,
    PasswordMismatch,
)
from app.core.security import (
    create_session_token,
    dummy_password_hash,
    generate_reset_token,
    hash_password,
    reset_token_expiry,
    verify_password,
)
from app.db.models import User
from app.db.types import utcnow
from app.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    ResetPasswordRequest,
    UserSession,
)
from app.services.notification_service import PasswordResetMessage, PasswordResetNotifier


logger = logging.getLogger(__name__)

CURRENT_PASSWORD_INCORRECT = "Current password is incorrect"


def get_user_by_email(db: Session, email: str) -> User | None:
    """Look up a user by (already normalized) email, active or not."""
    return db.query(User).filter(User.email == email).first()


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def issue_token(user: User) -> str:
    return create_session_token(user.id, user.role, user.token_version)


def register(db: Session, data: RegisterRequest) -> tuple[User, str]:
    """
    Create a user account and sign them in.

    Raises:
        DuplicateEmail: the normalized email is already registered
    """
    if get_user_by_email(db, data.email):
        raise DuplicateEmail()

    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)

    logger.info("User registered", extra={"user_id": user.id, "role": user.role})
    return user, issue_token(user)


def login(db: Session, data: LoginRequest) -> tuple[User, str]:
    """
    Verify credentials and stamp last_login.

    Unknown email, inactive account and wrong password all raise the same
    InvalidCredentials; the unknown-email path still pays for a bcrypt check.
    """
    user = (
        db.query(User)
        .filter(User.email == data.email, User.is_active.is_(True))
        .first()
    )
    if not user:
        verify_password(data.password, dummy_password_hash())
        raise InvalidCredentials()
    if not verify_password(data.password, user.password_hash):
        raise InvalidCredentials()

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)
    return user, issue_token(user)


def build_reset_url(token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/reset-password/{token}"


def forgot_password(db: Session, email: str, notifier: PasswordResetNotifier) -> None:
    """
    Issue a reset token if the account exists; silently do nothing otherwise.

    A new token replaces any previous one, so at most one is live per user.
    """
    user = get_user_by_email(db, email)
    if not user:
        return

    token = generate_reset_token()
    user.reset_password_token = token
    user.reset_password_expires = reset_token_expiry()
    db.commit()

    notifier.send_password_reset(
        PasswordResetMessage(email=user.email, reset_url=build_reset_url(token))
    )
    logger.info("Password reset requested", extra={"user_id": user.id})


def reset_password(db: Session, token: str, data: ResetPasswordRequest) -> None:
    """
    Consume a reset token and set a new password.

    The token check and the write are one conditional UPDATE, so a token
    can be redeemed at most once even under concurrent requests.
    """
    if data.password != data.confirm_password:
        raise PasswordMismatch()

    updated = (
        db.query(User)
        .filter(
            User.reset_password_token == token,
            User.reset_password_expires > utcnow(),
        )
        .update(
            {
                User.password_hash: hash_password(data.password),
                User.reset_password_token: None,
                User.reset_password_expires: None,
                User.token_version: User.token_version + 1,
                User.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise InvalidOrExpiredToken()
    db.commit()
    logger.info("Password reset completed")


def change_password(db: Session, session: UserSession, data: ChangePasswordRequest) -> str:
    """
    Replace the caller's password and return a fresh session token.

    Older tokens stop verifying because token_version is bumped.
    """
    user = get_user(db, session.user_id)
    old_hash = user.password_hash
    if not verify_password(data.current_password, old_hash):
        raise InvalidCredentials(CURRENT_PASSWORD_INCORRECT, status_code=400)

    updated = (
        db.query(User)
        .filter(User.id == user.id, User.password_hash == old_hash)
        .update(
            {
                User.password_hash: hash_password(data.new_password),
                User.token_version: User.token_version + 1,
                User.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        # Password changed by another request between read and write
        db.rollback()
        raise InvalidCredentials(CURRENT_PASSWORD_INCORRECT, status_code=400)
    db.commit()
    db.refresh(user)

    logger.info("Password changed", extra={"user_id": user.id})
    return issue_token(user)


def update_profile(db: Session, session: UserSession, data: ProfileUpdate) -> User:
    """Apply a partial profile update for the caller."""
    user = get_user(db, session.user_id)
    update_data = data.model_dump(exclude_unset=True)

    new_email = update_data.get("email")
    if new_email and new_email != user.email:
        taken = (
            db.query(User.id)
            .filter(User.email == new_email, User.id != user.id)
            .first()
        )
        if taken:
            raise DuplicateEmail("Email already in use")

    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEmail("Email already in use")
    db.refresh(user)
    return user
