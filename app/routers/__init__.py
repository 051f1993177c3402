"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.contacts import router as contacts_router
from app.routers.deals import router as deals_router
from app.routers.organizations import router as organizations_router
from app.routers.tasks import router as tasks_router

__all__ = [
    "auth_router",
    "contacts_router",
    "deals_router",
    "organizations_router",
    "tasks_router",
]
