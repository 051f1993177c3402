"""Pydantic schemas for deals and the pipeline summary."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.enums import (
    DEFAULT_CURRENCY, DEFAULT_DEAL_PROBABILITY, DEFAULT_DEAL_STAGE,
    DEFAULT_PRIORITY, DEFAULT_SOURCE, DealStage, LeadSource, Priority,
)
from app.db.types import MAX_DB_INT
from app.schemas.common import (
    ContactDetailRef, ContactRef, CustomFieldValue, OrganizationRef, Pagination, UserRef,
)
from app.utils.normalization import normalize_currency


Money = Annotated[Decimal, Field(ge=0, max_digits=15, decimal_places=2)]


class DealCreate(BaseModel):
    """Request to create a deal."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    value: Money
    currency: str = DEFAULT_CURRENCY
    stage: DealStage = DEFAULT_DEAL_STAGE
    probability: int = Field(DEFAULT_DEAL_PROBABILITY, ge=0, le=100)
    expected_close_date: datetime | None = None
    actual_close_date: datetime | None = None
    source: LeadSource = DEFAULT_SOURCE
    priority: Priority = DEFAULT_PRIORITY
    tags: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list)
    notes: str | None = Field(None, max_length=2000)
    custom_fields: dict[str, CustomFieldValue] = Field(default_factory=dict)
    contact_id: int | None = Field(None, ge=1, le=MAX_DB_INT)
    organization_id: int | None = Field(None, ge=1, le=MAX_DB_INT)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return normalize_currency(v)


class DealUpdate(BaseModel):
    """Request to update a deal (partial)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    value: Money | None = None
    currency: str | None = None
    stage: DealStage | None = None
    probability: int | None = Field(None, ge=0, le=100)
    expected_close_date: datetime | None = None
    actual_close_date: datetime | None = None
    source: LeadSource | None = None
    priority: Priority | None = None
    tags: list[Annotated[str, Field(max_length=50)]] | None = None
    notes: str | None = Field(None, max_length=2000)
    custom_fields: dict[str, CustomFieldValue] | None = None
    contact_id: int | None = Field(None, ge=1, le=MAX_DB_INT)
    organization_id: int | None = Field(None, ge=1, le=MAX_DB_INT)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("cannot be null")
        return normalize_currency(v)

    @field_validator("title", "value", "stage", "probability", "source", "priority")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class DealRead(BaseModel):
    """Deal with shallow references."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    value: Decimal
    currency: str
    stage: DealStage
    probability: int
    expected_close_date: datetime | None
    actual_close_date: datetime | None
    source: LeadSource
    priority: Priority
    tags: list[str]
    notes: str | None
    custom_fields: dict[str, CustomFieldValue]
    assigned_user_id: int
    contact_id: int | None
    organization_id: int | None
    assigned_user: UserRef | None = None
    contact: ContactRef | None = None
    organization: OrganizationRef | None = None
    created_at: datetime
    updated_at: datetime


class DealDetail(DealRead):
    """Detail view carries the contact's email too."""
    contact: ContactDetailRef | None = None


class DealListResponse(BaseModel):
    deals: list[DealRead]
    pagination: Pagination


class DealResponse(BaseModel):
    deal: DealDetail


class DealMutationResponse(BaseModel):
    message: str
    deal: DealRead


class PipelineStage(BaseModel):
    stage: DealStage
    count: int
    total_value: Decimal


class PipelineResponse(BaseModel):
    pipeline: list[PipelineStage]
