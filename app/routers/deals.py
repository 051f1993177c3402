"""Deals router - pipeline records and the pipeline summary."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_current_session, get_db, require_roles
from app.db.enums import ROLES_CAN_DELETE, DealStage, LeadSource, Priority
from app.db.types import MAX_DB_INT
from app.schemas.auth import UserSession
from app.schemas.common import MessageResponse
from app.schemas.deal import (
    DealCreate,
    DealDetail,
    DealListResponse,
    DealMutationResponse,
    DealRead,
    DealResponse,
    DealUpdate,
    PipelineResponse,
    PipelineStage,
)
from app.services import deal_service
from app.utils.pagination import (
    MAX_SEARCH_LENGTH,
    PaginationParams,
    PathId,
    build_pagination,
    get_pagination,
)

router = APIRouter()


@router.get("", response_model=DealListResponse)
def list_deals(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
    search: str | None = Query(None, max_length=MAX_SEARCH_LENGTH, description="Search title or description"),
    stage: DealStage | None = None,
    priority: Priority | None = None,
    source: LeadSource | None = None,
    assigned_user_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
    contact_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
    organization_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
):
    """List deals, soonest expected close first."""
    deals, total = deal_service.list_deals(
        db,
        pagination,
        search=search,
        stage=stage,
        priority=priority,
        source=source,
        assigned_user_id=assigned_user_id,
        contact_id=contact_id,
        organization_id=organization_id,
    )
    return DealListResponse(
        deals=[DealRead.model_validate(d) for d in deals],
        pagination=build_pagination(total, pagination),
    )


# Declared before /{deal_id} so "pipeline" is not parsed as an id
@router.get("/pipeline", response_model=PipelineResponse)
def get_pipeline(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Deal count and total value per stage, in funnel order."""
    rows = deal_service.get_pipeline_summary(db)
    return PipelineResponse(pipeline=[PipelineStage(**row) for row in rows])


@router.get("/{deal_id}", response_model=DealResponse)
def get_deal(
    deal_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    deal = deal_service.get_deal(db, deal_id)
    return DealResponse(deal=DealDetail.model_validate(deal))


@router.post("", response_model=DealMutationResponse, status_code=201)
def create_deal(
    data: DealCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create a deal assigned to the caller."""
    deal = deal_service.create_deal(db, session, data)
    return DealMutationResponse(
        message="Deal created successfully",
        deal=DealRead.model_validate(deal),
    )


@router.put("/{deal_id}", response_model=DealMutationResponse)
def update_deal(
    deal_id: PathId,
    data: DealUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    deal = deal_service.update_deal(db, deal_id, data)
    return DealMutationResponse(
        message="Deal updated successfully",
        deal=DealRead.model_validate(deal),
    )


@router.delete("/{deal_id}", response_model=MessageResponse)
def delete_deal(
    deal_id: PathId,
    session: UserSession = Depends(require_roles(ROLES_CAN_DELETE)),
    db: Session = Depends(get_db),
):
    deal_service.delete_deal(db, deal_id)
    return MessageResponse(message="Deal deleted successfully")
