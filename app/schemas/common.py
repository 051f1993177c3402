"""Shared pydantic schemas: nested records, shallow references, pagination."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.normalization import normalize_website


# =============================================================================
# Nested records (stored as JSON)
# =============================================================================

class Address(BaseModel):
    """Structured postal address; every part is optional."""
    street: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)


class SocialProfiles(BaseModel):
    linkedin: str | None = Field(None, max_length=255)
    twitter: str | None = Field(None, max_length=255)
    facebook: str | None = Field(None, max_length=255)

    @field_validator("linkedin", "twitter", "facebook", mode="before")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        return normalize_website(v)


# Scalar values allowed in Deal.custom_fields
CustomFieldValue = str | int | float | bool | None


# =============================================================================
# Shallow references (enrichment)
# =============================================================================

class UserRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str


class OrganizationRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ContactRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str


class ContactDetailRef(ContactRef):
    """Contact reference with email, used on detail views."""
    email: str | None = None


class DealRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str


# =============================================================================
# Responses
# =============================================================================

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageResponse(BaseModel):
    message: str
