"""create customers, weekly_schedules, targets, tasks

Revision ID: 5e1c0b7a9d42
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e1c0b7a9d42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'customers' not in tables:
        op.create_table(
            'customers',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('billing_rate', sa.Numeric(10, 2), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index('ix_customers_id', 'customers', ['id'])

    if 'weekly_schedules' not in tables:
        op.create_table(
            'weekly_schedules',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('year', sa.Integer(), nullable=False),
            sa.Column('week', sa.Integer(), nullable=False),
            sa.Column('overall_goal', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint('year', 'week', name='uq_weekly_schedules_year_week'),
        )
        op.create_index('ix_weekly_schedules_id', 'weekly_schedules', ['id'])

    if 'targets' not in tables:
        op.create_table(
            'targets',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('weekly_schedule_id', sa.Integer(), sa.ForeignKey('weekly_schedules.id', ondelete='CASCADE'), nullable=False),
            sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customers.id'), nullable=False),
            sa.Column('target_hours', sa.Numeric(5, 2), nullable=False),
            sa.Column('goal', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index('ix_targets_id', 'targets', ['id'])
        op.create_index('ix_targets_weekly_schedule_id', 'targets', ['weekly_schedule_id'])
        op.create_index('ix_targets_customer_id', 'targets', ['customer_id'])

    if 'tasks' not in tables:
        op.create_table(
            'tasks',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('weekly_schedule_id', sa.Integer(), sa.ForeignKey('weekly_schedules.id', ondelete='CASCADE'), nullable=False),
            sa.Column('customer_id', sa.Integer(), sa.ForeignKey('customers.id'), nullable=False),
            sa.Column('target_id', sa.Integer(), sa.ForeignKey('targets.id', ondelete='SET NULL'), nullable=True),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('estimated_hours', sa.Numeric(5, 2), nullable=False),
            sa.Column('actual_hours', sa.Numeric(5, 2), nullable=False, server_default='0'),
            sa.Column('notes', sa.String(), nullable=False),
            sa.Column('billable', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index('ix_tasks_id', 'tasks', ['id'])
        op.create_index('ix_tasks_weekly_schedule_id', 'tasks', ['weekly_schedule_id'])
        op.create_index('ix_tasks_customer_id', 'tasks', ['customer_id'])
        op.create_index('ix_tasks_target_id', 'tasks', ['target_id'])


def downgrade() -> None:
    # Safe drops, children first
    op.execute('DROP TABLE IF EXISTS tasks')
    op.execute('DROP TABLE IF EXISTS targets')
    op.execute('DROP TABLE IF EXISTS weekly_schedules')
    op.execute('DROP TABLE IF EXISTS customers')
