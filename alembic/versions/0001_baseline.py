"""Baseline migration - users, organizations, contacts, deals, tasks

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-18

Creates the five CRM tables. Timestamps are timezone-aware; enum-like
columns are plain strings validated by the API layer.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Create CRM tables."""

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), server_default='sales', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('token_version', sa.Integer(), server_default='1', nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reset_password_token', sa.String(128), nullable=True, unique=True),
        sa.Column('reset_password_expires', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # ==========================================================================
    # Organizations
    # ==========================================================================
    op.create_table(
        'organizations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('industry', sa.String(100), nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('size', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('revenue', sa.Numeric(15, 2), nullable=True),
        sa.Column('employees', sa.Integer(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('social_profiles', sa.JSON(), nullable=False),
        sa.Column('assigned_user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('revenue IS NULL OR revenue >= 0', name='ck_organizations_revenue'),
        sa.CheckConstraint('employees IS NULL OR employees >= 0', name='ck_organizations_employees'),
    )
    op.create_index('idx_organizations_name', 'organizations', ['name'])
    op.create_index('idx_organizations_industry', 'organizations', ['industry'])
    op.create_index('idx_organizations_status', 'organizations', ['status'])
    op.create_index('idx_organizations_assigned_user', 'organizations', ['assigned_user_id'])

    # ==========================================================================
    # Contacts
    # ==========================================================================
    op.create_table(
        'contacts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('position', sa.String(100), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('source', sa.String(20), nullable=False),
        sa.Column('priority', sa.String(10), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('social_media', sa.JSON(), nullable=False),
        sa.Column('last_contact_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('next_follow_up_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('assigned_user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='RESTRICT'), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_contacts_email', 'contacts', ['email'])
    op.create_index('idx_contacts_status', 'contacts', ['status'])
    op.create_index('idx_contacts_assigned_user', 'contacts', ['assigned_user_id'])
    op.create_index('idx_contacts_organization', 'contacts', ['organization_id'])

    # ==========================================================================
    # Deals
    # ==========================================================================
    op.create_table(
        'deals',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('value', sa.Numeric(15, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('stage', sa.String(20), nullable=False),
        sa.Column('probability', sa.Integer(), nullable=False),
        sa.Column('expected_close_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('actual_close_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('source', sa.String(20), nullable=False),
        sa.Column('priority', sa.String(10), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('custom_fields', sa.JSON(), nullable=False),
        sa.Column('assigned_user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('contact_id', sa.Integer(), sa.ForeignKey('contacts.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='RESTRICT'), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('value >= 0', name='ck_deals_value'),
        sa.CheckConstraint('probability BETWEEN 0 AND 100', name='ck_deals_probability'),
    )
    op.create_index('idx_deals_stage', 'deals', ['stage'])
    op.create_index('idx_deals_assigned_user', 'deals', ['assigned_user_id'])
    op.create_index('idx_deals_expected_close', 'deals', ['expected_close_date'])
    op.create_index('idx_deals_value', 'deals', ['value'])

    # ==========================================================================
    # Tasks
    # ==========================================================================
    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('priority', sa.String(10), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('estimated_hours', sa.Numeric(5, 2), nullable=True),
        sa.Column('actual_hours', sa.Numeric(5, 2), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('assigned_user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('created_by_user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('contact_id', sa.Integer(), sa.ForeignKey('contacts.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('deal_id', sa.Integer(), sa.ForeignKey('deals.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='RESTRICT'), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('estimated_hours IS NULL OR estimated_hours >= 0', name='ck_tasks_estimated_hours'),
        sa.CheckConstraint('actual_hours IS NULL OR actual_hours >= 0', name='ck_tasks_actual_hours'),
    )
    op.create_index('idx_tasks_status', 'tasks', ['status'])
    op.create_index('idx_tasks_priority', 'tasks', ['priority'])
    op.create_index('idx_tasks_assigned_user', 'tasks', ['assigned_user_id'])
    op.create_index('idx_tasks_due_date', 'tasks', ['due_date'])


def downgrade() -> None:
    """Drop CRM tables (dependents first)."""
    op.drop_table('tasks')
    op.drop_table('deals')
    op.drop_table('contacts')
    op.drop_table('organizations')
    op.drop_table('users')
