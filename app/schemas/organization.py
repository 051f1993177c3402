"""Pydantic schemas for organizations."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, field_validator

from app.db.enums import (
    DEFAULT_ORGANIZATION_SIZE, DEFAULT_ORGANIZATION_STATUS,
    OrganizationSize, OrganizationStatus,
)
from app.db.types import MAX_DB_INT
from app.schemas.common import Address, ContactDetailRef, Pagination, SocialProfiles, UserRef
from app.utils.normalization import blank_to_none, normalize_email, normalize_website


OptionalEmail = Annotated[
    EmailStr | None, BeforeValidator(blank_to_none), AfterValidator(normalize_email)
]


# =============================================================================
# Create / Update
# =============================================================================

class OrganizationCreate(BaseModel):
    """Request to create an organization."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    industry: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    email: OptionalEmail = None
    description: str | None = Field(None, max_length=5000)
    address: Address | None = None
    size: OrganizationSize = DEFAULT_ORGANIZATION_SIZE
    status: OrganizationStatus = DEFAULT_ORGANIZATION_STATUS
    revenue: Decimal | None = Field(None, ge=0, max_digits=15, decimal_places=2)
    employees: int | None = Field(None, ge=0, le=MAX_DB_INT)
    tags: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list)
    social_profiles: SocialProfiles | None = None

    @field_validator("website", mode="before")
    @classmethod
    def validate_website(cls, v: str | None) -> str | None:
        return normalize_website(v)  # Raises ValueError on invalid


class OrganizationUpdate(BaseModel):
    """Request to update an organization (partial)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=100)
    industry: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    email: OptionalEmail = None
    description: str | None = Field(None, max_length=5000)
    address: Address | None = None
    size: OrganizationSize | None = None
    status: OrganizationStatus | None = None
    revenue: Decimal | None = Field(None, ge=0, max_digits=15, decimal_places=2)
    employees: int | None = Field(None, ge=0, le=MAX_DB_INT)
    tags: list[Annotated[str, Field(max_length=50)]] | None = None
    social_profiles: SocialProfiles | None = None

    @field_validator("website", mode="before")
    @classmethod
    def validate_website(cls, v: str | None) -> str | None:
        return normalize_website(v)

    @field_validator("name", "size", "status")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


# =============================================================================
# Read / Response
# =============================================================================

class OrganizationRead(BaseModel):
    """Organization with shallow references."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    industry: str | None
    website: str | None
    phone: str | None
    email: str | None
    description: str | None
    address: Address
    size: OrganizationSize
    status: OrganizationStatus
    revenue: Decimal | None
    employees: int | None
    tags: list[str]
    social_profiles: SocialProfiles
    assigned_user_id: int
    assigned_user: UserRef | None = None
    created_at: datetime
    updated_at: datetime


class OrganizationDetail(OrganizationRead):
    """Detail view also lists the organization's contacts."""
    contacts: list[ContactDetailRef] = Field(default_factory=list)


class OrganizationListResponse(BaseModel):
    organizations: list[OrganizationRead]
    pagination: Pagination


class OrganizationResponse(BaseModel):
    organization: OrganizationDetail


class OrganizationMutationResponse(BaseModel):
    message: str
    organization: OrganizationRead
