"""Crisis events table

Revision ID: 001_crisis_events
Revises: 
Create Date: 2026-10-19 00:00:00.000000

Creates the crisis event record table:
- crisis_events: One row per crisis message, resolved by moderators

Uses generic column types so the same revision runs on PostgreSQL
and on SQLite for local development.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '001_crisis_events'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'crisis_events',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('severity_level', sa.Integer(), nullable=False),
        sa.Column('crisis_type', sa.String(30), nullable=False),
        sa.Column('trigger_keywords', sa.JSON(), nullable=True),
        sa.Column('context_summary', sa.Text(), nullable=True),
        sa.Column('response_given', sa.Text(), nullable=True),
        sa.Column('resources_provided', sa.JSON(), nullable=True),
        sa.Column('human_notified', sa.Boolean(), nullable=True),
        sa.Column('follow_up_required', sa.Boolean(), nullable=True),
        sa.Column('resolved', sa.Boolean(), nullable=True),
        sa.Column('resolution_notes', sa.Text(), nullable=True),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('escalated_to', sa.String(255), nullable=True),
        sa.Column('escalation_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_crisis_events_user_id', 'crisis_events', ['user_id'])
    op.create_index('ix_crisis_events_severity_level', 'crisis_events', ['severity_level'])
    op.create_index('ix_crisis_events_resolved', 'crisis_events', ['resolved'])
    op.create_index('ix_crisis_events_created_at', 'crisis_events', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_crisis_events_created_at', table_name='crisis_events')
    op.drop_index('ix_crisis_events_resolved', table_name='crisis_events')
    op.drop_index('ix_crisis_events_severity_level', table_name='crisis_events')
    op.drop_index('ix_crisis_events_user_id', table_name='crisis_events')
    op.drop_table('crisis_events')
