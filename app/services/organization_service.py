"""Organization service - business logic for organization management."""

import logging

from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.errors import NotFound
from app.db.enums import OrganizationSize, OrganizationStatus
from app.db.models import Organization
from app.schemas.auth import UserSession
from app.schemas.organization import OrganizationCreate, OrganizationUpdate
from app.services import reference_service
from app.utils.pagination import PaginationParams, paginate_query
from app.utils.records import column_values, search_filter


logger = logging.getLogger(__name__)


def list_organizations(
    db: Session,
    pagination: PaginationParams,
    search: str | None = None,
    status: OrganizationStatus | None = None,
    industry: str | None = None,
    size: OrganizationSize | None = None,
    assigned_user_id: int | None = None,
) -> tuple[list[Organization], int]:
    """
    List organizations with filters and pagination, newest first.

    search matches name, email or industry (case-insensitive); the
    industry filter is an exact match.
    """
    query = db.query(Organization).options(joinedload(Organization.assigned_user))

    condition = search_filter(
        [Organization.name, Organization.email, Organization.industry], search
    )
    if condition is not None:
        query = query.filter(condition)
    if status:
        query = query.filter(Organization.status == status.value)
    if industry:
        query = query.filter(Organization.industry == industry)
    if size:
        query = query.filter(Organization.size == size.value)
    if assigned_user_id:
        query = query.filter(Organization.assigned_user_id == assigned_user_id)

    query = query.order_by(Organization.created_at.desc(), Organization.id.desc())
    return paginate_query(query, pagination)


def get_organization(db: Session, organization_id: int) -> Organization:
    """Get an organization with its owner and contacts loaded."""
    organization = (
        db.query(Organization)
        .options(
            joinedload(Organization.assigned_user),
            selectinload(Organization.contacts),
        )
        .filter(Organization.id == organization_id)
        .first()
    )
    if not organization:
        raise NotFound("Organization not found")
    return organization


def create_organization(
    db: Session,
    session: UserSession,
    data: OrganizationCreate,
) -> Organization:
    organization = Organization(
        assigned_user_id=session.user_id,
        **column_values(data.model_dump()),
    )
    db.add(organization)
    db.commit()

    logger.info(
        "Organization created",
        extra={"organization_id": organization.id, "user_id": session.user_id},
    )
    return get_organization(db, organization.id)


def update_organization(
    db: Session,
    organization_id: int,
    data: OrganizationUpdate,
) -> Organization:
    """Apply a partial update; explicit nulls clear optional fields."""
    organization = get_organization(db, organization_id)
    for field, value in column_values(data.model_dump(exclude_unset=True)).items():
        setattr(organization, field, value)
    db.commit()
    return get_organization(db, organization.id)


def delete_organization(db: Session, organization_id: int) -> None:
    """Delete an organization with no linked contacts, deals or tasks."""
    organization = get_organization(db, organization_id)
    reference_service.ensure_organization_deletable(db, organization.id)
    db.delete(organization)
    db.commit()
    logger.info("Organization deleted", extra={"organization_id": organization_id})
