"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """
    User roles.

    - ADMIN / MANAGER: full access, including deletes
    - SALES: default for self-registration
    - SUPPORT: same record access as sales
    """
    ADMIN = "admin"
    MANAGER = "manager"
    SALES = "sales"
    SUPPORT = "support"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class LeadSource(str, Enum):
    """How a contact or deal reached us."""
    WEBSITE = "website"
    REFERRAL = "referral"
    SOCIAL_MEDIA = "social_media"
    COLD_CALL = "cold_call"
    EVENT = "event"
    OTHER = "other"


class ContactStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PROSPECT = "prospect"
    CUSTOMER = "customer"


class OrganizationSize(str, Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class OrganizationStatus(str, Enum):
    PROSPECT = "prospect"
    CUSTOMER = "customer"
    PARTNER = "partner"
    INACTIVE = "inactive"


class DealStage(str, Enum):
    """
    Sales funnel position, in funnel order.

        lead → qualified → proposal → negotiation → closed_won/closed_lost
    """
    LEAD = "lead"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed_won"
    CLOSED_LOST = "closed_lost"

    @classmethod
    def closed(cls) -> set["DealStage"]:
        return {cls.CLOSED_WON, cls.CLOSED_LOST}

    @classmethod
    def funnel_position(cls, value: str) -> int:
        return list(cls._value2member_map_).index(value)


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def finished(cls) -> list[str]:
        """Statuses excluded from overdue / due-today counts."""
        return [cls.COMPLETED.value, cls.CANCELLED.value]


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_ROLE = Role.SALES
DEFAULT_PRIORITY = Priority.MEDIUM
DEFAULT_SOURCE = LeadSource.OTHER
DEFAULT_CONTACT_STATUS = ContactStatus.PROSPECT
DEFAULT_ORGANIZATION_SIZE = OrganizationSize.SMALL
DEFAULT_ORGANIZATION_STATUS = OrganizationStatus.PROSPECT
DEFAULT_DEAL_STAGE = DealStage.LEAD
DEFAULT_DEAL_PROBABILITY = 10
DEFAULT_CURRENCY = "USD"
DEFAULT_TASK_STATUS = TaskStatus.PENDING


# =============================================================================
# Role-based permissions
# =============================================================================

# Roles that can delete contacts, organizations, deals and tasks
ROLES_CAN_DELETE = {Role.ADMIN, Role.MANAGER}
