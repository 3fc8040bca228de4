"""Create user and task tables

Revision ID: 0001_create_user_and_task
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_user_and_task'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the user and task tables.

    Task status and priority are plain integers (0-2); deleted_at marks
    soft-deleted rows.
    """
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_user'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'task',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('priority', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('tags', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('owner_user_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['owner_user_id'], ['user.id'], name='fk_task_owner_user_id_user'),
        sa.PrimaryKeyConstraint('id', name='pk_task'),
    )
    op.create_index('ix_task_status', 'task', ['status'])
    op.create_index('ix_task_due_date', 'task', ['due_date'])
    op.create_index('ix_task_deleted_at', 'task', ['deleted_at'])
    op.create_index('ix_task_owner_user_id', 'task', ['owner_user_id'])


def downgrade() -> None:
    op.drop_index('ix_task_owner_user_id', table_name='task')
    op.drop_index('ix_task_deleted_at', table_name='task')
    op.drop_index('ix_task_due_date', table_name='task')
    op.drop_index('ix_task_status', table_name='task')
    op.drop_table('task')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
