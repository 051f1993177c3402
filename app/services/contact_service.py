"""Contact service - business logic for contact management."""

import logging

from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFound
from app.db.enums import ContactStatus, LeadSource, Priority
from app.db.models import Contact
from app.schemas.auth import UserSession
from app.schemas.contact import ContactCreate, ContactUpdate
from app.services import reference_service
from app.utils.pagination import PaginationParams, paginate_query
from app.utils.records import column_values, search_filter


logger = logging.getLogger(__name__)


def _base_query(db: Session):
    return db.query(Contact).options(
        joinedload(Contact.assigned_user),
        joinedload(Contact.organization),
    )


def list_contacts(
    db: Session,
    pagination: PaginationParams,
    search: str | None = None,
    status: ContactStatus | None = None,
    priority: Priority | None = None,
    source: LeadSource | None = None,
    assigned_user_id: int | None = None,
    organization_id: int | None = None,
) -> tuple[list[Contact], int]:
    """
    List contacts with filters and pagination, newest first.

    search matches first name, last name or email (case-insensitive).

    Returns:
        (contacts, total_count)
    """
    query = _base_query(db)

    condition = search_filter(
        [Contact.first_name, Contact.last_name, Contact.email], search
    )
    if condition is not None:
        query = query.filter(condition)
    if status:
        query = query.filter(Contact.status == status.value)
    if priority:
        query = query.filter(Contact.priority == priority.value)
    if source:
        query = query.filter(Contact.source == source.value)
    if assigned_user_id:
        query = query.filter(Contact.assigned_user_id == assigned_user_id)
    if organization_id:
        query = query.filter(Contact.organization_id == organization_id)

    query = query.order_by(Contact.created_at.desc(), Contact.id.desc())
    return paginate_query(query, pagination)


def get_contact(db: Session, contact_id: int) -> Contact:
    contact = _base_query(db).filter(Contact.id == contact_id).first()
    if not contact:
        raise NotFound("Contact not found")
    return contact


def create_contact(db: Session, session: UserSession, data: ContactCreate) -> Contact:
    """Create a contact owned by the caller."""
    values = column_values(data.model_dump())
    reference_service.check_references(db, values)

    contact = Contact(assigned_user_id=session.user_id, **values)
    db.add(contact)
    db.commit()

    logger.info("Contact created", extra={"contact_id": contact.id, "user_id": session.user_id})
    return get_contact(db, contact.id)


def update_contact(db: Session, contact_id: int, data: ContactUpdate) -> Contact:
    """
    Update contact fields.

    Uses exclude_unset=True so only explicitly provided fields are updated.
    None values ARE applied to clear optional fields.
    """
    contact = get_contact(db, contact_id)
    values = column_values(data.model_dump(exclude_unset=True))
    reference_service.check_references(db, values)

    for field, value in values.items():
        setattr(contact, field, value)
    db.commit()

    return get_contact(db, contact.id)


def delete_contact(db: Session, contact_id: int) -> None:
    """Delete a contact that no deal or task still points at."""
    contact = get_contact(db, contact_id)
    reference_service.ensure_contact_deletable(db, contact.id)
    db.delete(contact)
    db.commit()
    logger.info("Contact deleted", extra={"contact_id": contact_id})
