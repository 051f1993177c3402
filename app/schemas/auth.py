"""Authentication-related Pydantic schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, field_validator

from app.db.enums import DEFAULT_ROLE, Role
from app.utils.normalization import normalize_email


PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128


def _strip(v):
    return v.strip() if isinstance(v, str) else v


# Well-formed email folded to its canonical (trimmed, lowercase) form
NormalizedEmail = Annotated[EmailStr, BeforeValidator(_strip), AfterValidator(normalize_email)]


class UserSession(BaseModel):
    """
    Identity context for authenticated requests.

    Returned by the get_current_session dependency and passed explicitly
    to every service call that needs to know who is acting.
    """
    user_id: int
    role: Role  # Validated enum
    email: str
    first_name: str
    last_name: str


# =============================================================================
# Requests
# =============================================================================

class RegisterRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: NormalizedEmail
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    role: Role = DEFAULT_ROLE


class LoginRequest(BaseModel):
    email: NormalizedEmail
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)


class ForgotPasswordRequest(BaseModel):
    email: NormalizedEmail


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    confirm_password: str = Field(..., max_length=PASSWORD_MAX_LENGTH)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left alone."""
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str | None = Field(None, min_length=2, max_length=50)
    last_name: str | None = Field(None, min_length=2, max_length=50)
    email: NormalizedEmail | None = None

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


# =============================================================================
# Responses
# =============================================================================

class UserRead(BaseModel):
    """Public user projection. Never includes the password hash or reset token."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    role: Role
    is_active: bool
    last_login: datetime | None
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserRead


class UserResponse(BaseModel):
    user: UserRead


class ProfileResponse(BaseModel):
    message: str
    user: UserRead


class ChangePasswordResponse(BaseModel):
    message: str
    token: str
