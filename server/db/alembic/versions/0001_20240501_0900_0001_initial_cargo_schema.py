"""Initial cargo schema

Revision ID: 0001
Revises:
Create Date: 2024-05-01 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    # Create flights table
    op.create_table('flights',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('flight_id', sa.String(length=64), nullable=False),
        sa.Column('flight_number', sa.String(length=16), nullable=False),
        sa.Column('airline_name', sa.String(length=128), nullable=False),
        sa.Column('origin', sa.String(length=8), nullable=False),
        sa.Column('destination', sa.String(length=8), nullable=False),
        sa.Column('departure_date_time', sa.DateTime(), nullable=False),
        sa.Column('arrival_date_time', sa.DateTime(), nullable=False),
        sa.CheckConstraint('arrival_date_time > departure_date_time', name='ck_flight_arrival_after_departure'),
        sa.CheckConstraint('length(origin) > 0', name='ck_flight_origin_not_empty'),
        sa.CheckConstraint('length(destination) > 0', name='ck_flight_destination_not_empty'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_flights_flight_id'), 'flights', ['flight_id'], unique=True)
    op.create_index('ix_flights_origin_departure', 'flights', ['origin', 'departure_date_time'], unique=False)
    op.create_index(
        'ix_flights_origin_destination_departure',
        'flights',
        ['origin', 'destination', 'departure_date_time'],
        unique=False
    )

    # Create bookings table
    op.create_table('bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ref_id', sa.String(length=40), nullable=False),
        sa.Column('origin', sa.String(length=8), nullable=False),
        sa.Column('destination', sa.String(length=8), nullable=False),
        sa.Column('pieces', sa.Integer(), nullable=False),
        sa.Column('weight_kg', sa.Float(), nullable=False),
        sa.Column('flight_ids', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('pieces > 0', name='ck_booking_pieces_positive'),
        sa.CheckConstraint('weight_kg > 0', name='ck_booking_weight_positive'),
        sa.CheckConstraint('length(ref_id) > 0', name='ck_booking_ref_id_not_empty'),
        sa.CheckConstraint(
            "status IN ('BOOKED', 'DEPARTED', 'ARRIVED', 'DELIVERED', 'CANCELLED')",
            name='ck_booking_status_known'
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bookings_ref_id'), 'bookings', ['ref_id'], unique=True)
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)
    op.create_index(op.f('ix_bookings_created_at'), 'bookings', ['created_at'], unique=False)

    # Create timeline_events table
    op.create_table('timeline_events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('event_type', sa.String(length=20), nullable=False),
        sa.Column('location', sa.String(length=64), nullable=False),
        sa.Column('flight_info', sa.String(length=128), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_timeline_events_booking_id'), 'timeline_events', ['booking_id'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f('ix_timeline_events_booking_id'), table_name='timeline_events')
    op.drop_table('timeline_events')

    op.drop_index(op.f('ix_bookings_created_at'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_status'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_ref_id'), table_name='bookings')
    op.drop_table('bookings')

    op.drop_index('ix_flights_origin_destination_departure', table_name='flights')
    op.drop_index('ix_flights_origin_departure', table_name='flights')
    op.drop_index(op.f('ix_flights_flight_id'), table_name='flights')
    op.drop_table('flights')
