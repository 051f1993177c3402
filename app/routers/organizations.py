"""Organizations router - API endpoints for organization management."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_current_session, get_db, require_roles
from app.db.enums import ROLES_CAN_DELETE, OrganizationSize, OrganizationStatus
from app.db.types import MAX_DB_INT
from app.schemas.auth import UserSession
from app.schemas.common import MessageResponse
from app.schemas.organization import (
    OrganizationCreate,
    OrganizationDetail,
    OrganizationListResponse,
    OrganizationMutationResponse,
    OrganizationRead,
    OrganizationResponse,
    OrganizationUpdate,
)
from app.services import organization_service
from app.utils.pagination import (
    MAX_SEARCH_LENGTH,
    PaginationParams,
    PathId,
    build_pagination,
    get_pagination,
)

router = APIRouter()


@router.get("", response_model=OrganizationListResponse)
def list_organizations(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
    search: str | None = Query(None, max_length=MAX_SEARCH_LENGTH, description="Search name, email or industry"),
    status: OrganizationStatus | None = None,
    industry: str | None = Query(None, max_length=100),
    size: OrganizationSize | None = None,
    assigned_user_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
):
    organizations, total = organization_service.list_organizations(
        db,
        pagination,
        search=search,
        status=status,
        industry=industry,
        size=size,
        assigned_user_id=assigned_user_id,
    )
    return OrganizationListResponse(
        organizations=[OrganizationRead.model_validate(o) for o in organizations],
        pagination=build_pagination(total, pagination),
    )


@router.get("/{organization_id}", response_model=OrganizationResponse)
def get_organization(
    organization_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Organization detail, including its contacts."""
    organization = organization_service.get_organization(db, organization_id)
    return OrganizationResponse(organization=OrganizationDetail.model_validate(organization))


@router.post("", response_model=OrganizationMutationResponse, status_code=201)
def create_organization(
    data: OrganizationCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    organization = organization_service.create_organization(db, session, data)
    return OrganizationMutationResponse(
        message="Organization created successfully",
        organization=OrganizationRead.model_validate(organization),
    )


@router.put("/{organization_id}", response_model=OrganizationMutationResponse)
def update_organization(
    organization_id: PathId,
    data: OrganizationUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    organization = organization_service.update_organization(db, organization_id, data)
    return OrganizationMutationResponse(
        message="Organization updated successfully",
        organization=OrganizationRead.model_validate(organization),
    )


@router.delete("/{organization_id}", response_model=MessageResponse)
def delete_organization(
    organization_id: PathId,
    session: UserSession = Depends(require_roles(ROLES_CAN_DELETE)),
    db: Session = Depends(get_db),
):
    """Delete an organization (admin/manager only, no linked records)."""
    organization_service.delete_organization(db, organization_id)
    return MessageResponse(message="Organization deleted successfully")
