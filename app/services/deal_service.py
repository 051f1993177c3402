"""Deal service - pipeline records, stage transitions and the pipeline summary."""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFound
from app.db.enums import DealStage, LeadSource, Priority
from app.db.models import Deal
from app.db.types import utcnow
from app.schemas.auth import UserSession
from app.schemas.deal import DealCreate, DealUpdate
from app.services import reference_service
from app.utils.pagination import PaginationParams, paginate_query
from app.utils.records import column_values, search_filter


logger = logging.getLogger(__name__)

CLOSED_STAGES = {stage.value for stage in DealStage.closed()}


def apply_stage_transition(
    deal: Deal,
    previous_stage: str | None,
    close_date_supplied: bool,
    now: datetime | None = None,
) -> None:
    """
    Stamp actual_close_date when a deal moves into a closed stage.

    Runs only on a real transition (creation counts as one, from no stage)
    and never overrides a close date the caller supplied.
    """
    if deal.stage == previous_stage or deal.stage not in CLOSED_STAGES:
        return
    if close_date_supplied and deal.actual_close_date is not None:
        return
    deal.actual_close_date = now or utcnow()


def _base_query(db: Session):
    return db.query(Deal).options(
        joinedload(Deal.assigned_user),
        joinedload(Deal.contact),
        joinedload(Deal.organization),
    )


def list_deals(
    db: Session,
    pagination: PaginationParams,
    search: str | None = None,
    stage: DealStage | None = None,
    priority: Priority | None = None,
    source: LeadSource | None = None,
    assigned_user_id: int | None = None,
    contact_id: int | None = None,
    organization_id: int | None = None,
) -> tuple[list[Deal], int]:
    """
    List deals with filters and pagination.

    Ordered by expected close date (soonest first, undated last).
    """
    query = _base_query(db)

    condition = search_filter([Deal.title, Deal.description], search)
    if condition is not None:
        query = query.filter(condition)
    if stage:
        query = query.filter(Deal.stage == stage.value)
    if priority:
        query = query.filter(Deal.priority == priority.value)
    if source:
        query = query.filter(Deal.source == source.value)
    if assigned_user_id:
        query = query.filter(Deal.assigned_user_id == assigned_user_id)
    if contact_id:
        query = query.filter(Deal.contact_id == contact_id)
    if organization_id:
        query = query.filter(Deal.organization_id == organization_id)

    query = query.order_by(Deal.expected_close_date.asc().nullslast(), Deal.id.asc())
    return paginate_query(query, pagination)


def get_deal(db: Session, deal_id: int) -> Deal:
    deal = _base_query(db).filter(Deal.id == deal_id).first()
    if not deal:
        raise NotFound("Deal not found")
    return deal


def create_deal(db: Session, session: UserSession, data: DealCreate) -> Deal:
    """Create a deal owned by the caller."""
    values = column_values(data.model_dump())
    reference_service.check_references(db, values)

    deal = Deal(assigned_user_id=session.user_id, **values)
    apply_stage_transition(
        deal,
        previous_stage=None,
        close_date_supplied="actual_close_date" in data.model_fields_set,
    )
    db.add(deal)
    db.commit()

    logger.info("Deal created", extra={"deal_id": deal.id, "stage": deal.stage})
    return get_deal(db, deal.id)


def update_deal(db: Session, deal_id: int, data: DealUpdate) -> Deal:
    """
    Update deal fields.

    Only explicitly provided fields change; a stage change into
    closed_won/closed_lost stamps actual_close_date unless one was supplied.
    """
    deal = get_deal(db, deal_id)
    values = column_values(data.model_dump(exclude_unset=True))
    reference_service.check_references(db, values)

    previous_stage = deal.stage
    for field, value in values.items():
        setattr(deal, field, value)
    apply_stage_transition(
        deal,
        previous_stage=previous_stage,
        close_date_supplied="actual_close_date" in values,
    )
    db.commit()

    if deal.stage != previous_stage:
        logger.info(
            "Deal stage changed",
            extra={"deal_id": deal.id, "from_stage": previous_stage, "to_stage": deal.stage},
        )
    return get_deal(db, deal.id)


def delete_deal(db: Session, deal_id: int) -> None:
    """Delete a deal that no task still points at."""
    deal = get_deal(db, deal_id)
    reference_service.ensure_deal_deletable(db, deal.id)
    db.delete(deal)
    db.commit()
    logger.info("Deal deleted", extra={"deal_id": deal_id})


def get_pipeline_summary(db: Session) -> list[dict]:
    """
    Deal count and total value per stage.

    Only stages holding at least one deal are returned, in funnel order.
    """
    rows = (
        db.query(
            Deal.stage,
            func.count(Deal.id),
            func.coalesce(func.sum(Deal.value), 0),
        )
        .group_by(Deal.stage)
        .all()
    )
    summary = [
        {"stage": stage, "count": count, "total_value": Decimal(str(total))}
        for stage, count, total in rows
    ]
    summary.sort(key=lambda row: DealStage.funnel_position(row["stage"]))
    return summary
