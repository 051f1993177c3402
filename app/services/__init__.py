"""Service layer modules."""

# Import service modules (not individual functions) for cleaner access
from app.services import auth_service
from app.services import notification_service
from app.services import reference_service
from app.services import contact_service
from app.services import organization_service
from app.services import deal_service
from app.services import task_service

__all__ = [
    "auth_service",
    "notification_service",
    "reference_service",
    "contact_service",
    "organization_service",
    "deal_service",
    "task_service",
]
