"""SQLAlchemy ORM models for users and CRM records."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    JSON, Boolean, CheckConstraint, ForeignKey, Index, Integer, Numeric,
    String, Text, func, text, true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.enums import (
    DEFAULT_CONTACT_STATUS, DEFAULT_CURRENCY, DEFAULT_DEAL_PROBABILITY,
    DEFAULT_DEAL_STAGE, DEFAULT_ORGANIZATION_SIZE, DEFAULT_ORGANIZATION_STATUS,
    DEFAULT_PRIORITY, DEFAULT_ROLE, DEFAULT_SOURCE, DEFAULT_TASK_STATUS,
)
from app.db.types import UTCDateTime, utcnow


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )


# =============================================================================
# Users
# =============================================================================

class User(TimestampMixin, Base):
    """
    Application user.

    Password is stored as a bcrypt hash only. Users are disabled via
    is_active rather than deleted. token_version is bumped on every
    password change so older session tokens stop verifying.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_ROLE.value,
        server_default=text(f"'{DEFAULT_ROLE.value}'"),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=true(),
        nullable=False,
    )
    token_version: Mapped[int] = mapped_column(
        Integer,
        default=1,
        server_default=text("1"),
        nullable=False,
    )
    last_login: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    # Password reset (single live token per user)
    reset_password_token: Mapped[str | None] = mapped_column(
        String(128), unique=True, nullable=True
    )
    reset_password_expires: Mapped[datetime | None] = mapped_column(
        UTCDateTime, nullable=True
    )


# =============================================================================
# Organizations
# =============================================================================

class Organization(TimestampMixin, Base):
    """A company we sell to or partner with."""
    __tablename__ = "organizations"
    __table_args__ = (
        Index("idx_organizations_name", "name"),
        Index("idx_organizations_industry", "industry"),
        Index("idx_organizations_status", "status"),
        Index("idx_organizations_assigned_user", "assigned_user_id"),
        CheckConstraint("revenue IS NULL OR revenue >= 0", name="ck_organizations_revenue"),
        CheckConstraint("employees IS NULL OR employees >= 0", name="ck_organizations_employees"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    size: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_ORGANIZATION_SIZE.value, nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_ORGANIZATION_STATUS.value, nullable=False
    )
    revenue: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    employees: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    social_profiles: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    assigned_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )

    assigned_user: Mapped["User"] = relationship(foreign_keys=[assigned_user_id])
    contacts: Mapped[list["Contact"]] = relationship(
        back_populates="organization",
        order_by="Contact.id",
    )


# =============================================================================
# Contacts
# =============================================================================

class Contact(TimestampMixin, Base):
    """A person at (optionally) an organization."""
    __tablename__ = "contacts"
    __table_args__ = (
        Index("idx_contacts_email", "email"),
        Index("idx_contacts_status", "status"),
        Index("idx_contacts_assigned_user", "assigned_user_id"),
        Index("idx_contacts_organization", "organization_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_CONTACT_STATUS.value, nullable=False
    )
    source: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_SOURCE.value, nullable=False
    )
    priority: Mapped[str] = mapped_column(
        String(10), default=DEFAULT_PRIORITY.value, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    address: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    social_media: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    last_contact_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    next_follow_up_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    assigned_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    organization_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=True,
    )

    assigned_user: Mapped["User"] = relationship(foreign_keys=[assigned_user_id])
    organization: Mapped["Organization | None"] = relationship(back_populates="contacts")


# =============================================================================
# Deals
# =============================================================================

class Deal(TimestampMixin, Base):
    """
    A sales opportunity moving through the pipeline.

    actual_close_date is stamped when the stage moves into a closed stage
    (see deal_service.apply_stage_transition).
    """
    __tablename__ = "deals"
    __table_args__ = (
        Index("idx_deals_stage", "stage"),
        Index("idx_deals_assigned_user", "assigned_user_id"),
        Index("idx_deals_expected_close", "expected_close_date"),
        Index("idx_deals_value", "value"),
        CheckConstraint("value >= 0", name="ck_deals_value"),
        CheckConstraint("probability BETWEEN 0 AND 100", name="ck_deals_probability"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), default=Decimal("0"), nullable=False
    )
    currency: Mapped[str] = mapped_column(
        String(3), default=DEFAULT_CURRENCY, nullable=False
    )
    stage: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_DEAL_STAGE.value, nullable=False
    )
    probability: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_DEAL_PROBABILITY, nullable=False
    )
    expected_close_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    actual_close_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    source: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_SOURCE.value, nullable=False
    )
    priority: Mapped[str] = mapped_column(
        String(10), default=DEFAULT_PRIORITY.value, nullable=False
    )
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_fields: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    assigned_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    contact_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("contacts.id", ondelete="RESTRICT"),
        nullable=True,
    )
    organization_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=True,
    )

    assigned_user: Mapped["User"] = relationship(foreign_keys=[assigned_user_id])
    contact: Mapped["Contact | None"] = relationship()
    organization: Mapped["Organization | None"] = relationship()


# =============================================================================
# Tasks
# =============================================================================

class Task(TimestampMixin, Base):
    """
    To-do item optionally linked to a contact, deal and/or organization.

    assigned_user_id is who owns it; created_by_user_id is who filed it.
    """
    __tablename__ = "tasks"
    __table_args__ = (
        Index("idx_tasks_status", "status"),
        Index("idx_tasks_priority", "priority"),
        Index("idx_tasks_assigned_user", "assigned_user_id"),
        Index("idx_tasks_due_date", "due_date"),
        CheckConstraint("estimated_hours IS NULL OR estimated_hours >= 0", name="ck_tasks_estimated_hours"),
        CheckConstraint("actual_hours IS NULL OR actual_hours >= 0", name="ck_tasks_actual_hours"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_TASK_STATUS.value, nullable=False
    )
    priority: Mapped[str] = mapped_column(
        String(10), default=DEFAULT_PRIORITY.value, nullable=False
    )
    due_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    completed_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    estimated_hours: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    actual_hours: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    assigned_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    created_by_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    contact_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("contacts.id", ondelete="RESTRICT"),
        nullable=True,
    )
    deal_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("deals.id", ondelete="RESTRICT"),
        nullable=True,
    )
    organization_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=True,
    )

    assigned_user: Mapped["User"] = relationship(foreign_keys=[assigned_user_id])
    created_by_user: Mapped["User | None"] = relationship(foreign_keys=[created_by_user_id])
    contact: Mapped["Contact | None"] = relationship()
    deal: Mapped["Deal | None"] = relationship()
    organization: Mapped["Organization | None"] = relationship()
