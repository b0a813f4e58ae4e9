"""init_event_ticketing_schema

Revision ID: 0001
Revises:
Create Date: 2026-01-05

Schema:
- event: one row per event aggregate (JSONB document + listing columns + version)
- reservation: short-lived reservation tokens, scanned by expiry
- booking: confirmed bookings, one per reservation

Note: event.version is the optimistic-concurrency counter; every write
compares it and bumps it by one.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables with final schema."""

    # Event table
    op.create_table(
        'event',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('venue_name', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('state', sa.String(length=100), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('event_type', sa.String(length=100), nullable=False),
        sa.Column('mode', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('min_price', sa.Float(), nullable=True),
        sa.Column('max_price', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('document', JSONB(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('total_views', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_event_city'), 'event', ['city'], unique=False)
    op.create_index(op.f('ix_event_category'), 'event', ['category'], unique=False)
    op.create_index(op.f('ix_event_is_published'), 'event', ['is_published'], unique=False)
    op.create_index(op.f('ix_event_created_by'), 'event', ['created_by'], unique=False)
    op.create_index(op.f('ix_event_start_date'), 'event', ['start_date'], unique=False)

    # Reservation table
    op.create_table(
        'reservation',
        sa.Column('reservation_id', sa.String(length=64), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('booking_id', sa.String(length=32), nullable=True),
        sa.Column('document', JSONB(), nullable=False),
        sa.PrimaryKeyConstraint('reservation_id'),
    )
    op.create_index(op.f('ix_reservation_event_id'), 'reservation', ['event_id'], unique=False)
    op.create_index(
        op.f('ix_reservation_expires_at'), 'reservation', ['expires_at'], unique=False
    )

    # Booking table
    op.create_table(
        'booking',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.String(length=32), nullable=False),
        sa.Column('reservation_id', sa.String(length=64), nullable=False),
        sa.Column('event_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('document', JSONB(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_id'),
        sa.UniqueConstraint('reservation_id'),
    )
    op.create_index(op.f('ix_booking_event_id'), 'booking', ['event_id'], unique=False)
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_index(op.f('ix_booking_event_id'), table_name='booking')
    op.drop_table('booking')

    op.drop_index(op.f('ix_reservation_expires_at'), table_name='reservation')
    op.drop_index(op.f('ix_reservation_event_id'), table_name='reservation')
    op.drop_table('reservation')

    op.drop_index(op.f('ix_event_start_date'), table_name='event')
    op.drop_index(op.f('ix_event_created_by'), table_name='event')
    op.drop_index(op.f('ix_event_is_published'), table_name='event')
    op.drop_index(op.f('ix_event_category'), table_name='event')
    op.drop_index(op.f('ix_event_city'), table_name='event')
    op.drop_table('event')
