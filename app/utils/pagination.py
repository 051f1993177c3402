"""Pagination utilities for list endpoints."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Path, Query
from sqlalchemy.orm import Query as SQLAlchemyQuery

from app.db.types import MAX_DB_INT
from app.schemas.common import Pagination


# Pagination limits
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
MAX_SEARCH_LENGTH = 100

# Record id in a URL path; larger values cannot name a stored row
PathId = Annotated[int, Path(ge=1, le=MAX_DB_INT)]


@dataclass
class PaginationParams:
    """Pagination parameters from query string."""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def get_pagination(
    page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_DB_INT, description="Page number (1-indexed)"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description=f"Items per page (max {MAX_LIMIT})"),
) -> PaginationParams:
    """
    Pagination dependency.

    Usage:
        @router.get("")
        def list_items(pagination: PaginationParams = Depends(get_pagination)):
            ...
    """
    return PaginationParams(page=page, limit=limit)


def page_count(total: int, limit: int) -> int:
    """ceil(total / limit); zero rows means zero pages."""
    return (total + limit - 1) // limit if limit > 0 else 0


def build_pagination(total: int, pagination: PaginationParams) -> Pagination:
    return Pagination(
        page=pagination.page,
        limit=pagination.limit,
        total=total,
        pages=page_count(total, pagination.limit),
    )


def paginate_query(query: SQLAlchemyQuery, pagination: PaginationParams) -> tuple[list, int]:
    """
    Apply pagination to a SQLAlchemy query.

    The total reflects every filter but not the page window.

    Returns:
        (items, total_count)
    """
    total = query.order_by(None).count()
    items = query.offset(pagination.offset).limit(pagination.limit).all()
    return items, total
