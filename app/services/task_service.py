"""Task service - business logic for task management."""

import logging
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.core.errors import NotFound
from app.db.enums import Priority, TaskStatus
from app.db.models import Task
from app.db.types import utcnow
from app.schemas.auth import UserSession
from app.schemas.task import TaskCreate, TaskUpdate
from app.services import reference_service
from app.utils.pagination import PaginationParams, paginate_query
from app.utils.records import column_values, search_filter


logger = logging.getLogger(__name__)


def apply_status_transition(
    task: Task,
    previous_status: str | None,
    completed_date_supplied: bool,
    now: datetime | None = None,
) -> None:
    """Stamp completed_date when a task becomes completed (creation included)."""
    if task.status == previous_status or task.status != TaskStatus.COMPLETED.value:
        return
    if completed_date_supplied and task.completed_date is not None:
        return
    task.completed_date = now or utcnow()


def _base_query(db: Session):
    return db.query(Task).options(
        joinedload(Task.assigned_user),
        joinedload(Task.created_by_user),
        joinedload(Task.contact),
        joinedload(Task.deal),
        joinedload(Task.organization),
    )


def list_tasks(
    db: Session,
    pagination: PaginationParams,
    search: str | None = None,
    status: TaskStatus | None = None,
    priority: Priority | None = None,
    assigned_user_id: int | None = None,
    contact_id: int | None = None,
    deal_id: int | None = None,
    organization_id: int | None = None,
) -> tuple[list[Task], int]:
    """
    List tasks with filters and pagination.

    Args:
        search: matches title or description (case-insensitive)

    Returns:
        (tasks, total_count), soonest due first, undated last
    """
    query = _base_query(db)

    condition = search_filter([Task.title, Task.description], search)
    if condition is not None:
        query = query.filter(condition)
    if status:
        query = query.filter(Task.status == status.value)
    if priority:
        query = query.filter(Task.priority == priority.value)
    if assigned_user_id:
        query = query.filter(Task.assigned_user_id == assigned_user_id)
    if contact_id:
        query = query.filter(Task.contact_id == contact_id)
    if deal_id:
        query = query.filter(Task.deal_id == deal_id)
    if organization_id:
        query = query.filter(Task.organization_id == organization_id)

    query = query.order_by(Task.due_date.asc().nullslast(), Task.id.asc())
    return paginate_query(query, pagination)


def get_task(db: Session, task_id: int) -> Task:
    task = _base_query(db).filter(Task.id == task_id).first()
    if not task:
        raise NotFound("Task not found")
    return task


def create_task(db: Session, session: UserSession, data: TaskCreate) -> Task:
    """Create a task assigned to and filed by the caller."""
    values = column_values(data.model_dump())
    reference_service.check_references(db, values)

    task = Task(
        assigned_user_id=session.user_id,
        created_by_user_id=session.user_id,
        **values,
    )
    apply_status_transition(
        task,
        previous_status=None,
        completed_date_supplied="completed_date" in data.model_fields_set,
    )
    db.add(task)
    db.commit()

    logger.info("Task created", extra={"task_id": task.id, "user_id": session.user_id})
    return get_task(db, task.id)


def update_task(db: Session, task_id: int, data: TaskUpdate) -> Task:
    """
    Update task fields.

    Uses exclude_unset=True so only explicitly provided fields are updated.
    None values ARE applied to clear optional fields.
    """
    task = get_task(db, task_id)
    values = column_values(data.model_dump(exclude_unset=True))
    reference_service.check_references(db, values)

    previous_status = task.status
    for field, value in values.items():
        setattr(task, field, value)
    apply_status_transition(
        task,
        previous_status=previous_status,
        completed_date_supplied="completed_date" in values,
    )
    db.commit()
    return get_task(db, task.id)


def delete_task(db: Session, task_id: int) -> None:
    """Delete a task."""
    task = get_task(db, task_id)
    db.delete(task)
    db.commit()
    logger.info("Task deleted", extra={"task_id": task_id})


def today_bounds(now: datetime | None = None, tz_name: str | None = None) -> tuple[datetime, datetime]:
    """Start and end (exclusive) of the current calendar day, as UTC datetimes."""
    tz = ZoneInfo(tz_name or settings.TIMEZONE)
    local_now = (now or utcnow()).astimezone(tz)
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    # Day length varies across DST changes; rebuild midnight from the date
    next_day = (start + timedelta(days=1)).date()
    end = datetime(next_day.year, next_day.month, next_day.day, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def get_dashboard(db: Session, now: datetime | None = None) -> dict:
    """
    Status counts plus overdue and due-today counts.

    Completed and cancelled tasks never count as overdue or due today.
    """
    now = now or utcnow()
    open_filter = Task.status.notin_(TaskStatus.finished())

    rows = db.query(Task.status, func.count(Task.id)).group_by(Task.status).all()
    order = list(TaskStatus._value2member_map_)
    summary = sorted(
        ({"status": status, "count": count} for status, count in rows),
        key=lambda row: order.index(row["status"]),
    )

    overdue = (
        db.query(func.count(Task.id))
        .filter(Task.due_date < now, open_filter)
        .scalar()
    )

    start, end = today_bounds(now)
    due_today = (
        db.query(func.count(Task.id))
        .filter(Task.due_date >= start, Task.due_date < end, open_filter)
        .scalar()
    )

    return {
        "summary": summary,
        "overdue_tasks": overdue or 0,
        "today_tasks": due_today or 0,
    }
