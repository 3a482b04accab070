"""Baseline migration - operators, ward directory, calendar, survey and LCR tasks

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-18

Creates all seven tables. members <-> fhe_groups reference each other, so the
group leader foreign key is added after both tables exist.
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
    # ==========================================================================
    # Operators
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('token_version', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # ==========================================================================
    # Ward directory
    # ==========================================================================
    op.create_table(
        'fhe_groups',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('leader_id', sa.Uuid(), nullable=True),
        sa.Column('location', sa.String(500), nullable=True),
        sa.Column('meeting_time', sa.String(100), nullable=True),
        sa.Column('activity_image', sa.String(1000), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'members',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column(
            'fhe_group_id',
            sa.Uuid(),
            sa.ForeignKey('fhe_groups.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_members_name', 'members', ['name'])
    op.create_index('idx_members_fhe_group', 'members', ['fhe_group_id'])
    with op.batch_alter_table('fhe_groups') as batch:
        batch.create_foreign_key(
            'fk_fhe_groups_leader_id', 'members', ['leader_id'], ['id'], ondelete='SET NULL'
        )

    op.create_table(
        'callings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('organization', sa.String(255), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column(
            'member_id',
            sa.Uuid(),
            sa.ForeignKey('members.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('sustained_date', sa.Date(), nullable=True),
        sa.Column('is_set_apart', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_callings_org_title', 'callings', ['organization', 'title'])
    op.create_index('idx_callings_member', 'callings', ['member_id'])
    op.create_index('idx_callings_status', 'callings', ['status'])

    # ==========================================================================
    # Calendar
    # ==========================================================================
    op.create_table(
        'events',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('location', sa.String(500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('attendees', sa.JSON(), nullable=True),
        sa.Column('type', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_events_date_time', 'events', ['date', 'time'])

    # ==========================================================================
    # New member survey
    # ==========================================================================
    op.create_table(
        'survey_responses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('record_number', sa.String(50), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('family_members', sa.Text(), nullable=True),
        sa.Column('marital_status', sa.String(50), nullable=True),
        sa.Column('previous_ward', sa.String(255), nullable=True),
        sa.Column('previous_stake', sa.String(255), nullable=True),
        sa.Column('move_in_date', sa.Date(), nullable=True),
        sa.Column('is_homeowner', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('is_renting', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('skills', sa.Text(), nullable=True),
        sa.Column('interests', sa.Text(), nullable=True),
        sa.Column('calling_preferences', sa.Text(), nullable=True),
        sa.Column('additional_info', sa.Text(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('processed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_survey_responses_submitted', 'survey_responses', ['submitted_at'])

    # ==========================================================================
    # LCR follow-up tasks
    # ==========================================================================
    op.create_table(
        'lcr_update_tasks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('created_by', sa.String(255), nullable=False),
        sa.Column('completed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_by', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_lcr_tasks_completed_created', 'lcr_update_tasks', ['completed', 'created_at'])


def downgrade() -> None:
    op.drop_table('lcr_update_tasks')
    op.drop_table('survey_responses')
    op.drop_table('events')
    op.drop_table('callings')
    with op.batch_alter_table('fhe_groups') as batch:
        batch.drop_constraint('fk_fhe_groups_leader_id', type_='foreignkey')
    op.drop_table('members')
    op.drop_table('fhe_groups')
    op.drop_table('users')
