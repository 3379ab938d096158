"""Create initial schema

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261019_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def _has_table(bind, name: str) -> bool:
    try:
        insp = inspect(bind)
        return insp.has_table(name)
    except Exception:
        return False

def upgrade() -> None:
    bind = op.get_bind()

    bookingstatus_enum = sa.Enum('pending', 'confirmed', 'cancelled', name='bookingstatus')
    paymentmethod_enum = sa.Enum('chapa', 'bank_transfer', name='paymentmethod')
    paymentstatus_enum = sa.Enum('pending', 'verified', 'failed', name='paymentstatus')

    if not _has_table(bind, 'rooms'):
        op.create_table('rooms',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('room_number', sa.String(length=20), nullable=False),
            sa.Column('floor', sa.Integer(), nullable=False),
            sa.Column('room_type', sa.String(length=100), nullable=False),
            sa.Column('capacity', sa.Integer(), server_default='1', nullable=False),
            sa.Column('price_per_night', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('size_sqm', sa.Integer(), nullable=True),
            sa.Column('amenities', sa.JSON(), nullable=False),
            sa.Column('is_available', sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('image_url', sa.String(length=500), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('room_number')
        )
        op.create_index(op.f('ix_rooms_id'), 'rooms', ['id'], unique=False)
        op.create_index(op.f('ix_rooms_floor'), 'rooms', ['floor'], unique=False)
        op.create_index(op.f('ix_rooms_is_available'), 'rooms', ['is_available'], unique=False)

    if not _has_table(bind, 'bookings'):
        op.create_table('bookings',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('room_id', sa.Integer(), nullable=False),
            sa.Column('guest_name', sa.String(length=200), nullable=False),
            sa.Column('guest_email', sa.String(length=255), nullable=False),
            sa.Column('guest_phone', sa.String(length=50), nullable=True),
            sa.Column('check_in_date', sa.Date(), nullable=False),
            sa.Column('check_out_date', sa.Date(), nullable=False),
            sa.Column('number_of_guests', sa.Integer(), server_default='1', nullable=False),
            sa.Column('total_amount', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('booking_status', bookingstatus_enum, server_default='pending', nullable=False),
            sa.Column('special_requests', sa.Text(), nullable=True),
            sa.Column('screenshot_url', sa.String(length=500), nullable=True),
            sa.Column('transaction_id', sa.String(length=200), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_bookings_id'), 'bookings', ['id'], unique=False)
        op.create_index(op.f('ix_bookings_room_id'), 'bookings', ['room_id'], unique=False)
        op.create_index(op.f('ix_bookings_check_in_date'), 'bookings', ['check_in_date'], unique=False)
        op.create_index(op.f('ix_bookings_check_out_date'), 'bookings', ['check_out_date'], unique=False)
        # composite index helps overlap searches
        op.create_index('ix_bookings_room_dates', 'bookings', ['room_id', 'check_in_date', 'check_out_date'], unique=False)

    if not _has_table(bind, 'payments'):
        op.create_table('payments',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('booking_id', sa.Integer(), nullable=False),
            sa.Column('payment_method', paymentmethod_enum, nullable=False),
            sa.Column('payment_status', paymentstatus_enum, server_default='pending', nullable=False),
            sa.Column('transaction_reference', sa.String(length=200), nullable=True),
            sa.Column('transaction_screenshot_url', sa.String(length=500), nullable=True),
            sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('payment_date', sa.DateTime(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_payments_id'), 'payments', ['id'], unique=False)
        op.create_index(op.f('ix_payments_booking_id'), 'payments', ['booking_id'], unique=False)

    if not _has_table(bind, 'room_media'):
        op.create_table('room_media',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('room_id', sa.Integer(), nullable=True),
            sa.Column('media_type', sa.String(length=20), nullable=False),
            sa.Column('media_url', sa.String(length=500), nullable=False),
            sa.Column('caption', sa.String(length=300), nullable=True),
            sa.Column('is_primary', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_room_media_room_id'), 'room_media', ['room_id'], unique=False)

    if not _has_table(bind, 'room_reviews'):
        op.create_table('room_reviews',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('room_id', sa.Integer(), nullable=True),
            sa.Column('guest_name', sa.String(length=200), nullable=False),
            sa.Column('rating', sa.Integer(), nullable=True),
            sa.Column('review_text', sa.Text(), nullable=True),
            sa.Column('is_featured', sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_room_reviews_room_id'), 'room_reviews', ['room_id'], unique=False)

    if not _has_table(bind, 'services_gallery'):
        op.create_table('services_gallery',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=False),
            sa.Column('subtitle', sa.String(length=200), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('media_url', sa.String(length=500), nullable=False),
            sa.Column('media_type', sa.String(length=20), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )

    if not _has_table(bind, 'contact_info'):
        op.create_table('contact_info',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('icon', sa.String(length=50), nullable=True),
            sa.Column('title', sa.String(length=100), nullable=False),
            sa.Column('details', sa.JSON(), nullable=False),
            sa.Column('sort_order', sa.Integer(), server_default='0', nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

    if not _has_table(bind, 'social_links'):
        op.create_table('social_links',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('icon', sa.String(length=50), nullable=True),
            sa.Column('href', sa.String(length=500), nullable=False),
            sa.Column('label', sa.String(length=100), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

    if not _has_table(bind, 'contact_messages'):
        op.create_table('contact_messages',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('first_name', sa.String(length=100), nullable=False),
            sa.Column('last_name', sa.String(length=100), nullable=True),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('phone', sa.String(length=50), nullable=True),
            sa.Column('check_in', sa.Date(), nullable=True),
            sa.Column('check_out', sa.Date(), nullable=True),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )


def downgrade() -> None:
    bind = op.get_bind()
    dialect_name = bind.dialect.name
    op.drop_table('contact_messages')
    op.drop_table('social_links')
    op.drop_table('contact_info')
    op.drop_table('services_gallery')
    op.drop_table('room_reviews')
    op.drop_table('room_media')
    op.drop_table('payments')
    op.drop_table('bookings')
    op.drop_table('rooms')

    # Drop ENUM types for PostgreSQL
    if dialect_name == 'postgresql':
        sa.Enum(name='paymentstatus').drop(bind, checkfirst=True)
        sa.Enum(name='paymentmethod').drop(bind, checkfirst=True)
        sa.Enum(name='bookingstatus').drop(bind, checkfirst=True)
