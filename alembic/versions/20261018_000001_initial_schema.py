"""Initial schema with all tables

Revision ID: 20261018_000001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '20261018_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    # === USERS ===
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='admin'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('idx_users_role', 'users', ['role'])

    # === SETTINGS ===
    op.create_table(
        'settings',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='{}'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_settings_key'), 'settings', ['key'], unique=True)

    # === CRON JOB LOGS ===
    op.create_table(
        'cron_job_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('job_name', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration_ms', sa.Integer(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('error_details', sa.Text(), nullable=True),
        sa.Column('execution_data', postgresql.JSONB(astext_type=sa.Text()), nullable=True, server_default='{}'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("status IN ('success', 'error', 'warning')", name='ck_cron_job_logs_status'),
    )
    op.create_index('idx_cron_job_logs_started_at', 'cron_job_logs', ['started_at'])
    op.create_index('idx_cron_job_logs_job_name', 'cron_job_logs', ['job_name'])

    # === TOOLS ===
    op.create_table(
        'tools',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('short_name', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='available'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    # === TOOL ICONS ===
    op.create_table(
        'tool_icons',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('tool_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('icon_type', sa.String(length=20), nullable=False),
        sa.Column('icon_url', sa.String(length=500), nullable=True),
        sa.Column('icon_data', sa.LargeBinary(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('tool_id', 'icon_type', name='uq_tool_icons_tool_type'),
    )
    op.create_index('idx_tool_icons_icon_url', 'tool_icons', ['icon_url'])

    # === USERS TOOLS ===
    op.create_table(
        'users_tools',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('tool_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
    )
    op.create_index('idx_users_tools_user', 'users_tools', ['user_id'])
    op.create_index('idx_users_tools_status', 'users_tools', ['status'])

    # === DASHBOARD ITEMS ===
    op.create_table(
        'dashboard_items',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('tool_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('scheduled_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('priority', sa.String(length=10), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=True, server_default='{}'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
        sa.CheckConstraint("type IN ('calendar_event', 'action_item', 'both')", name='ck_dashboard_items_type'),
        sa.CheckConstraint("priority IS NULL OR priority IN ('low', 'medium', 'high')", name='ck_dashboard_items_priority'),
        sa.CheckConstraint("status IN ('pending', 'completed', 'cancelled')", name='ck_dashboard_items_status'),
    )
    op.create_index('idx_dashboard_items_user', 'dashboard_items', ['user_id'])
    op.create_index('idx_dashboard_items_user_status', 'dashboard_items', ['user_id', 'status'])

    # === USER DASHBOARD KPIS ===
    op.create_table(
        'user_dashboard_kpis',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('tool_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('kpi_key', sa.String(length=100), nullable=False),
        sa.Column('is_enabled', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'tool_id', 'kpi_key', name='uq_user_dashboard_kpis_key'),
    )

    # === IMPORTANT DOCUMENTS ===
    op.create_table(
        'tools_id_documents',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('tool_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('document_name', sa.String(length=255), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=True),
        sa.Column('file_url', sa.String(length=1000), nullable=True),
        sa.Column('requires_password_for_download', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('download_password_hash', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='SET NULL'),
    )
    op.create_index('idx_tools_id_documents_user', 'tools_id_documents', ['user_id'])

    # === NOTES ===
    op.create_table(
        'tools_note_notes',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('requires_password_for_view', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('view_password_hash', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('idx_tools_note_notes_user', 'tools_note_notes', ['user_id'])


def downgrade() -> None:
    op.drop_index('idx_tools_note_notes_user', table_name='tools_note_notes')
    op.drop_table('tools_note_notes')
    op.drop_index('idx_tools_id_documents_user', table_name='tools_id_documents')
    op.drop_table('tools_id_documents')
    op.drop_table('user_dashboard_kpis')
    op.drop_index('idx_dashboard_items_user_status', table_name='dashboard_items')
    op.drop_index('idx_dashboard_items_user', table_name='dashboard_items')
    op.drop_table('dashboard_items')
    op.drop_index('idx_users_tools_status', table_name='users_tools')
    op.drop_index('idx_users_tools_user', table_name='users_tools')
    op.drop_table('users_tools')
    op.drop_index('idx_tool_icons_icon_url', table_name='tool_icons')
    op.drop_table('tool_icons')
    op.drop_table('tools')
    op.drop_index('idx_cron_job_logs_job_name', table_name='cron_job_logs')
    op.drop_index('idx_cron_job_logs_started_at', table_name='cron_job_logs')
    op.drop_table('cron_job_logs')
    op.drop_index(op.f('ix_settings_key'), table_name='settings')
    op.drop_table('settings')
    op.drop_index('idx_users_role', table_name='users')
    op.drop_table('users')
