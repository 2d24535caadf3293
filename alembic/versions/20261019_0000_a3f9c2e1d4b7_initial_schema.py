"""initial_schema

Revision ID: a3f9c2e1d4b7
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a3f9c2e1d4b7'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('EMPLOYEE', 'HR', 'MANAGER', name='userrole')
work_type = sa.Enum('TASK', 'PROJECT', 'MEETING', 'SKILL_UP', 'PARTIAL_LEAVE', name='worktype')
work_entry_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='workentrystatus')
work_hour_request_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='workhourrequeststatus')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('employee_id', sa.String(50), nullable=False, unique=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('designation', sa.String(100), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_department', 'users', ['department'])

    # Entries and requests keep no foreign key to users
    op.create_table(
        'work_entries',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('work_type', work_type, nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('time_spent', sa.Numeric(5, 2), nullable=False),
        sa.Column('status', work_entry_status, nullable=False),
        sa.Column('reviewed_by', sa.String(36), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', 'date', name='uq_work_entry_user_date'),
    )
    op.create_index('ix_work_entries_user_id', 'work_entries', ['user_id'])
    op.create_index('ix_work_entries_date', 'work_entries', ['date'])

    op.create_table(
        'work_hour_requests',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('employee_id', sa.String(36), nullable=False),
        sa.Column('requested_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('status', work_hour_request_status, nullable=False),
        sa.Column('manager_id', sa.String(36), nullable=True),
        sa.Column('manager_comments', sa.Text(), nullable=True),
        sa.Column('requested_at', sa.DateTime(), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_work_hour_requests_employee_id', 'work_hour_requests', ['employee_id'])
    op.create_index('ix_work_hour_requests_requested_date', 'work_hour_requests', ['requested_date'])
    op.create_index(
        'uq_pending_work_hour_request',
        'work_hour_requests',
        ['employee_id', 'requested_date'],
        unique=True,
        postgresql_where=sa.text("status = 'PENDING'"),
        sqlite_where=sa.text("status = 'PENDING'"),
    )

    op.create_table(
        'manager_preferences',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('manager_id', sa.String(36), nullable=False),
        sa.Column('selected_employee_ids', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_manager_preferences_manager_id', 'manager_preferences', ['manager_id'], unique=True)


def downgrade() -> None:
    op.drop_table('manager_preferences')
    op.drop_index('uq_pending_work_hour_request', table_name='work_hour_requests')
    op.drop_table('work_hour_requests')
    op.drop_table('work_entries')
    op.drop_table('users')
    work_hour_request_status.drop(op.get_bind(), checkfirst=True)
    work_entry_status.drop(op.get_bind(), checkfirst=True)
    work_type.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
