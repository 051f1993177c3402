"""Pydantic schemas for contacts."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.enums import (
    DEFAULT_CONTACT_STATUS, DEFAULT_PRIORITY, DEFAULT_SOURCE,
    ContactStatus, LeadSource, Priority,
)
from app.db.types import MAX_DB_INT
from app.schemas.common import Address, OrganizationRef, Pagination, SocialProfiles, UserRef
from app.schemas.organization import OptionalEmail


class ContactCreate(BaseModel):
    """Request to create a contact."""
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: OptionalEmail = None
    phone: str | None = Field(None, max_length=20)
    position: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)
    status: ContactStatus = DEFAULT_CONTACT_STATUS
    source: LeadSource = DEFAULT_SOURCE
    priority: Priority = DEFAULT_PRIORITY
    tags: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list)
    notes: str | None = Field(None, max_length=5000)
    address: Address | None = None
    social_media: SocialProfiles | None = None
    last_contact_date: datetime | None = None
    next_follow_up_date: datetime | None = None
    organization_id: int | None = Field(None, ge=1, le=MAX_DB_INT)


class ContactUpdate(BaseModel):
    """Request to update a contact (partial)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str | None = Field(None, min_length=1, max_length=50)
    last_name: str | None = Field(None, min_length=1, max_length=50)
    email: OptionalEmail = None
    phone: str | None = Field(None, max_length=20)
    position: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=100)
    status: ContactStatus | None = None
    source: LeadSource | None = None
    priority: Priority | None = None
    tags: list[Annotated[str, Field(max_length=50)]] | None = None
    notes: str | None = Field(None, max_length=5000)
    address: Address | None = None
    social_media: SocialProfiles | None = None
    last_contact_date: datetime | None = None
    next_follow_up_date: datetime | None = None
    organization_id: int | None = Field(None, ge=1, le=MAX_DB_INT)

    @field_validator("first_name", "last_name", "status", "source", "priority")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class ContactRead(BaseModel):
    """Contact with shallow references to its owner and organization."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str | None
    phone: str | None
    position: str | None
    department: str | None
    status: ContactStatus
    source: LeadSource
    priority: Priority
    tags: list[str]
    notes: str | None
    address: Address
    social_media: SocialProfiles
    last_contact_date: datetime | None
    next_follow_up_date: datetime | None
    assigned_user_id: int
    organization_id: int | None
    assigned_user: UserRef | None = None
    organization: OrganizationRef | None = None
    created_at: datetime
    updated_at: datetime


class ContactListResponse(BaseModel):
    contacts: list[ContactRead]
    pagination: Pagination


class ContactResponse(BaseModel):
    contact: ContactRead


class ContactMutationResponse(BaseModel):
    message: str
    contact: ContactRead
