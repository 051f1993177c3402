"""Pydantic schemas for API request/response models."""

from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserRead,
    UserSession,
)
from app.schemas.common import Pagination
from app.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationDetail,
    OrganizationRead,
    OrganizationUpdate,
)
from app.schemas.deal import DealCreate, DealDetail, DealRead, DealUpdate, PipelineStage
from app.schemas.task import (
    TaskCreate,
    TaskDashboardResponse,
    TaskDetail,
    TaskRead,
    TaskUpdate,
)

__all__ = [
    # Auth
    "UserSession",
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "UserRead",
    # Shared
    "Pagination",
    # Contacts
    "ContactCreate",
    "ContactUpdate",
    "ContactRead",
    # Organizations
    "OrganizationCreate",
    "OrganizationUpdate",
    "OrganizationRead",
    "OrganizationDetail",
    # Deals
    "DealCreate",
    "DealUpdate",
    "DealRead",
    "DealDetail",
    "PipelineStage",
    # Tasks
    "TaskCreate",
    "TaskUpdate",
    "TaskRead",
    "TaskDetail",
    "TaskDashboardResponse",
]
