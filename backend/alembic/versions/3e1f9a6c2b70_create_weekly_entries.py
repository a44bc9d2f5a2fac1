"""create weekly_entries and day_entries tables

Revision ID: 3e1f9a6c2b70
Revises:
Create Date: 2024-02-10 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3e1f9a6c2b70'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'weekly_entries' not in tables:
        op.create_table(
            'weekly_entries',
            sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=False),
            sa.Column('charity_acts', sa.Text(), nullable=True),
            sa.Column('comments', sa.Text(), nullable=True),
            sa.Column('difficulties', sa.Text(), nullable=True),
            sa.Column('improvements', sa.Text(), nullable=True),
            sa.Column('successes', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint('user_id', 'start_date', 'end_date', name='uq_weekly_entries_user_week'),
        )
        op.create_index('ix_weekly_entries_user_id', 'weekly_entries', ['user_id'])

    if 'day_entries' not in tables:
        op.create_table(
            'day_entries',
            sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
            sa.Column('weekly_entry_id', sa.String(length=36), sa.ForeignKey('weekly_entries.id', ondelete='CASCADE'), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('exercises', sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'), nullable=False),
            sa.UniqueConstraint('weekly_entry_id', 'date', name='uq_day_entries_entry_date'),
        )
        op.create_index('ix_day_entries_weekly_entry_id', 'day_entries', ['weekly_entry_id'])


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS day_entries')
    op.execute('DROP TABLE IF EXISTS weekly_entries')
