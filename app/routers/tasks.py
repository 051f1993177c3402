"""Tasks router - API endpoints for task management."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_current_session, get_db, require_roles
from app.db.enums import ROLES_CAN_DELETE, Priority, TaskStatus
from app.db.types import MAX_DB_INT
from app.schemas.auth import UserSession
from app.schemas.common import MessageResponse
from app.schemas.task import (
    TaskCreate,
    TaskDashboardResponse,
    TaskDetail,
    TaskListResponse,
    TaskMutationResponse,
    TaskRead,
    TaskResponse,
    TaskUpdate,
)
from app.services import task_service
from app.utils.pagination import (
    MAX_SEARCH_LENGTH,
    PaginationParams,
    PathId,
    build_pagination,
    get_pagination,
)

router = APIRouter()


@router.get("", response_model=TaskListResponse)
def list_tasks(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(get_pagination),
    search: str | None = Query(None, max_length=MAX_SEARCH_LENGTH, description="Search in title and description"),
    status: TaskStatus | None = None,
    priority: Priority | None = None,
    assigned_user_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
    contact_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
    deal_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
    organization_id: int | None = Query(None, ge=1, le=MAX_DB_INT),
):
    """List tasks, soonest due first (undated last)."""
    tasks, total = task_service.list_tasks(
        db,
        pagination,
        search=search,
        status=status,
        priority=priority,
        assigned_user_id=assigned_user_id,
        contact_id=contact_id,
        deal_id=deal_id,
        organization_id=organization_id,
    )
    return TaskListResponse(
        tasks=[TaskRead.model_validate(t) for t in tasks],
        pagination=build_pagination(total, pagination),
    )


@router.get("/dashboard", response_model=TaskDashboardResponse)
def get_dashboard(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Status counts plus overdue and due-today counts."""
    return TaskDashboardResponse(**task_service.get_dashboard(db))


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: PathId,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    task = task_service.get_task(db, task_id)
    return TaskResponse(task=TaskDetail.model_validate(task))


@router.post("", response_model=TaskMutationResponse, status_code=201)
def create_task(
    data: TaskCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create a new task assigned to the caller."""
    task = task_service.create_task(db, session, data)
    return TaskMutationResponse(
        message="Task created successfully",
        task=TaskRead.model_validate(task),
    )


@router.put("/{task_id}", response_model=TaskMutationResponse)
def update_task(
    task_id: PathId,
    data: TaskUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    task = task_service.update_task(db, task_id, data)
    return TaskMutationResponse(
        message="Task updated successfully",
        task=TaskRead.model_validate(task),
    )


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: PathId,
    session: UserSession = Depends(require_roles(ROLES_CAN_DELETE)),
    db: Session = Depends(get_db),
):
    """Delete a task (admin/manager only)."""
    task_service.delete_task(db, task_id)
    return MessageResponse(message="Task deleted successfully")
