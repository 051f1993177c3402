"""FastAPI dependencies for authentication, authorization, and database access."""

from typing import Generator

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.errors import Forbidden, Unauthenticated
from app.core.security import decode_session_token
from app.db.enums import Role
from app.db.models import User
from app.db.session import SessionLocal
from app.schemas.auth import UserSession


# auto_error=False so a missing header surfaces as our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Get authenticated user from the bearer token.

    Validates:
    - Authorization header carries a bearer token
    - JWT is valid and not expired
    - User exists and is active
    - Token version matches (for revocation support)

    Raises:
        Unauthenticated: Authentication failed
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    try:
        payload = decode_session_token(credentials.credentials)
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        raise Unauthenticated("Invalid or expired token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise Unauthenticated("Invalid or expired token")

    # Token version check (revocation support)
    if user.token_version != payload.get("token_version"):
        raise Unauthenticated("Session revoked")

    return user


def get_current_session(user: User = Depends(get_current_user)) -> UserSession:
    """
    Get the identity context for the request.

    This is the PRIMARY auth dependency for most endpoints. The role comes
    from the database row, never from the token alone.

    Raises:
        Forbidden: stored role is not a known enum value
    """
    if not Role.has_value(user.role):
        raise Forbidden(f"Unknown role '{user.role}'. Contact administrator.")

    return UserSession(
        user_id=user.id,
        role=Role(user.role),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


def require_roles(allowed_roles):
    """
    Dependency factory for role-based authorization.

    Uses enum values (not strings) to prevent drift.

    Usage:
        @router.delete("/{id}")
        def delete(session: UserSession = Depends(require_roles(ROLES_CAN_DELETE))):
    """
    def dependency(session: UserSession = Depends(get_current_session)) -> UserSession:
        if session.role not in allowed_roles:
            raise Forbidden(f"Role '{session.role.value}' not authorized for this action")
        return session
    return dependency
