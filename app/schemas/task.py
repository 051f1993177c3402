"""Pydantic schemas for tasks and the task dashboard."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.enums import DEFAULT_PRIORITY, DEFAULT_TASK_STATUS, Priority, TaskStatus
from app.db.types import MAX_DB_INT
from app.schemas.common import (
    ContactDetailRef, ContactRef, DealRef, OrganizationRef, Pagination, UserRef,
)


Hours = Annotated[Decimal, Field(ge=0, max_digits=5, decimal_places=2)]


class TaskCreate(BaseModel):
    """Request to create a task."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    status: TaskStatus = DEFAULT_TASK_STATUS
    priority: Priority = DEFAULT_PRIORITY
    due_date: datetime | None = None
    completed_date: datetime | None = None
    estimated_hours: Hours | None = None
    actual_hours: Hours | None = None
    tags: list[Annotated[str, Field(max_length=50)]] = Field(default_factory=list)
    notes: str | None = Field(None, max_length=2000)
    contact_id: int | None = Field(None, ge=1, le=MAX_DB_INT)
    deal_id: int | None = Field(None, ge=1, le=MAX_DB_INT)
    organization_id: int | None = Field(None, ge=1, le=MAX_DB_INT)


class TaskUpdate(BaseModel):
    """Request to update a task (partial)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    status: TaskStatus | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    completed_date: datetime | None = None
    estimated_hours: Hours | None = None
    actual_hours: Hours | None = None
    tags: list[Annotated[str, Field(max_length=50)]] | None = None
    notes: str | None = Field(None, max_length=2000)
    contact_id: int | None = Field(None, ge=1, le=MAX_DB_INT)
    deal_id: int | None = Field(None, ge=1, le=MAX_DB_INT)
    organization_id: int | None = Field(None, ge=1, le=MAX_DB_INT)

    @field_validator("title", "status", "priority")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("cannot be null")
        return v


class TaskRead(BaseModel):
    """Full task response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: Priority
    due_date: datetime | None
    completed_date: datetime | None
    estimated_hours: Decimal | None
    actual_hours: Decimal | None
    tags: list[str]
    notes: str | None
    assigned_user_id: int
    created_by_user_id: int | None
    contact_id: int | None
    deal_id: int | None
    organization_id: int | None
    assigned_user: UserRef | None = None
    created_by_user: UserRef | None = None
    contact: ContactRef | None = None
    deal: DealRef | None = None
    organization: OrganizationRef | None = None
    created_at: datetime
    updated_at: datetime


class TaskDetail(TaskRead):
    contact: ContactDetailRef | None = None


class TaskListResponse(BaseModel):
    """Paginated task list."""
    tasks: list[TaskRead]
    pagination: Pagination


class TaskResponse(BaseModel):
    task: TaskDetail


class TaskMutationResponse(BaseModel):
    message: str
    task: TaskRead


class TaskStatusCount(BaseModel):
    status: TaskStatus
    count: int


class TaskDashboardResponse(BaseModel):
    summary: list[TaskStatusCount]
    overdue_tasks: int
    today_tasks: int
