from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from ..models import Booking, BookingStatus

# Statuses that hold a room for their dates when a new booking is written
BLOCKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


def find_conflicts(
    db: Session,
    room_id: int,
    check_in: date,
    check_out: date,
    statuses: Iterable[BookingStatus] = (BookingStatus.CONFIRMED,),
    exclude_booking_id: int | None = None,
) -> list[Booking]:
    """Bookings of `room_id` whose [check_in, check_out) overlaps the requested range."""
    q = db.query(Booking).filter(
        Booking.room_id == room_id,
        Booking.booking_status.in_(list(statuses)),
        Booking.check_in_date < check_out,
        Booking.check_out_date > check_in,
    )
    if exclude_booking_id is not None:
        q = q.filter(Booking.id != exclude_booking_id)
    return q.all()


def is_room_available(
    db: Session,
    room_id: int,
    check_in: date,
    check_out: date,
    statuses: Iterable[BookingStatus] = (BookingStatus.CONFIRMED,),
    exclude_booking_id: int | None = None,
) -> bool:
    """Return True if no booking with one of `statuses` overlaps the range."""
    return not find_conflicts(db, room_id, check_in, check_out, statuses, exclude_booking_id)
