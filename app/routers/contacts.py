"""Contacts router - API endpoints for contact management."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_current_session, get_db, require_roles
from app.db.enums import ROLES_CAN_DELETE, ContactStatus, LeadSource, Priority
from app.db.types import MAX_DB_INT
from app.schemas.auth import UserSession
from app.schemas.common import MessageResponse
from app.schemas.contact import (
    ContactCreate,
    ContactListResponse,
    ContactMutationResponse,
    ContactRead,
    ContactResponse,
    ContactUpdate,
)
from app.services import contact_service
from app.utils.pagination import (
    MAX_SEARCH_LENGTH,
    PaginationParams,
    PathId,
    build_pagination,
    get_pagination,
)

router = APIRouter()


@router.get("", response_model=ContactListResponse)
def list_contacts(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
    search: str | None = Query(None, max_length=MAX_SEARCH_LENGTH, description="Search name or email"),
    status: ContactStatus | None = None,
    priority: Priority | None = None,
    source: LeadSource | None = None,
    assigned_user_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
    organization_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
):
    """List contacts, newest first."""
    contacts, total = contact_service.list_contacts(
        db,
        pagination,
        search=search,
        status=status,
        priority=priority,
        source=source,
        assigned_user_id=assigned_user_id,
        organization_id=organization_id,
    )
    return ContactListResponse(
        contacts=[ContactRead.model_validate(c) for c in contacts],
        pagination=build_pagination(total, pagination),
    )


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    contact = contact_service.get_contact(db, contact_id)
    return ContactResponse(contact=ContactRead.model_validate(contact))


@router.post("", response_model=ContactMutationResponse, status_code=201)
def create_contact(
    data: ContactCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create a contact assigned to the caller."""
    contact = contact_service.create_contact(db, session, data)
    return ContactMutationResponse(
        message="Contact created successfully",
        contact=ContactRead.model_validate(contact),
    )


@router.put("/{contact_id}", response_model=ContactMutationResponse)
def update_contact(
    contact_id: PathId,
    data: ContactUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    contact = contact_service.update_contact(db, contact_id, data)
    return ContactMutationResponse(
        message="Contact updated successfully",
        contact=ContactRead.model_validate(contact),
    )


@router.delete("/{contact_id}", response_model=MessageResponse)
def delete_contact(
    contact_id: PathId,
    session: UserSession = Depends(require_roles(ROLES_CAN_DELETE)),
    db: Session = Depends(get_db),
):
    """Delete a contact (admin/manager only)."""
    contact_service.delete_contact(db, contact_id)
    return MessageResponse(message="Contact deleted successfully")
