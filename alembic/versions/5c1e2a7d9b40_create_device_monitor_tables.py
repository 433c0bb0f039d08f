"""create_device_monitor_tables

Revision ID: 5c1e2a7d9b40
Revises:
Create Date: 2025-02-10 09:12:41

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1e2a7d9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the six tables of the device monitor and their lookup indexes.

    No foreign keys: stations, devices and actions are created lazily by
    ingestion, and grants may point at stations that never reported.
    """
    print("[MIGRATION] Creating device monitor tables...")

    op.create_table(
        'admins',
        sa.Column('login', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=70), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('login'),
    )

    op.create_table(
        'smp',
        sa.Column('region_code', sa.String(length=50), nullable=False),
        sa.Column('smp_code', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('region_code', 'smp_code'),
    )

    op.create_table(
        'admins_smp',
        sa.Column('login', sa.String(length=50), nullable=False),
        sa.Column('region_code', sa.String(length=50), nullable=False),
        sa.Column('smp_code', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('login', 'region_code', 'smp_code'),
    )
    op.create_index('idx_admins_smp_login', 'admins_smp', ['login', 'region_code', 'smp_code'])
    op.create_index('idx_admins_smp_login_only', 'admins_smp', ['login'])

    op.create_table(
        'devices',
        sa.Column('device_code', sa.String(length=50), nullable=False),
        sa.Column('region_code', sa.String(length=50), nullable=False),
        sa.Column('smp_code', sa.String(length=50), nullable=False),
        sa.Column('team_number', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('device_code'),
    )
    op.create_index('idx_devices_region_smp', 'devices', ['region_code', 'smp_code'])
    op.create_index('idx_devices_team', 'devices', ['team_number'])

    op.create_table(
        'actions',
        sa.Column('action_code', sa.String(length=20), nullable=False),
        sa.Column('app_version', sa.String(length=20), nullable=False),
        sa.Column('action_text', sa.String(length=500), nullable=False),
        sa.PrimaryKeyConstraint('action_code', 'app_version'),
    )

    op.create_table(
        'logs',
        sa.Column('action_code', sa.String(length=20), nullable=False),
        sa.Column('app_version', sa.String(length=20), nullable=False),
        sa.Column('device_code', sa.String(length=50), nullable=False),
        sa.Column('datetime', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('team_number', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('action_code', 'app_version', 'device_code', 'datetime'),
    )
    op.create_index('idx_logs_device_datetime', 'logs', ['device_code', 'datetime'])
    op.create_index('idx_logs_app_version', 'logs', ['app_version'])
    op.create_index('idx_logs_action_code', 'logs', ['action_code'])

    print("[MIGRATION] ✅ Device monitor tables created")


def downgrade() -> None:
    op.drop_index('idx_logs_action_code', table_name='logs')
    op.drop_index('idx_logs_app_version', table_name='logs')
    op.drop_index('idx_logs_device_datetime', table_name='logs')
    op.drop_table('logs')
    op.drop_table('actions')
    op.drop_index('idx_devices_team', table_name='devices')
    op.drop_index('idx_devices_region_smp', table_name='devices')
    op.drop_table('devices')
    op.drop_index('idx_admins_smp_login_only', table_name='admins_smp')
    op.drop_index('idx_admins_smp_login', table_name='admins_smp')
    op.drop_table('admins_smp')
    op.drop_table('smp')
    op.drop_table('admins')
