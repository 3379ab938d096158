from datetime import date, timedelta
from decimal import Decimal

from app.models import Booking, BookingStatus
from app.services.availability import BLOCKING_STATUSES, find_conflicts, is_room_available


def _book(db, room, check_in, check_out, status=BookingStatus.CONFIRMED):
    booking = Booking(
        room_id=room.id,
        guest_name="Abebe Kebede",
        guest_email="abebe@example.com",
        check_in_date=check_in,
        check_out_date=check_out,
        number_of_guests=1,
        total_amount=Decimal("690.00"),
        booking_status=status,
    )
    db.add(booking)
    db.commit()
    return booking


def test_overlapping_stay_conflicts(db, rooms):
    room = rooms[0]
    start = date.today() + timedelta(days=10)
    _book(db, room, start, start + timedelta(days=3))
    assert not is_room_available(db, room.id, start + timedelta(days=1), start + timedelta(days=5))
    assert not is_room_available(db, room.id, start - timedelta(days=2), start + timedelta(days=1))


def test_back_to_back_stays_do_not_conflict(db, rooms):
    room = rooms[0]
    start = date.today() + timedelta(days=10)
    _book(db, room, start, start + timedelta(days=3))
    # checking in on the day the previous guest checks out is fine
    assert is_room_available(db, room.id, start + timedelta(days=3), start + timedelta(days=4))
    assert is_room_available(db, room.id, start - timedelta(days=2), start)


def test_other_rooms_are_unaffected(db, rooms):
    start = date.today() + timedelta(days=10)
    _book(db, rooms[0], start, start + timedelta(days=3))
    assert is_room_available(db, rooms[1].id, start, start + timedelta(days=3))


def test_pending_bookings_only_block_when_asked(db, rooms):
    room = rooms[0]
    start = date.today() + timedelta(days=10)
    _book(db, room, start, start + timedelta(days=2), status=BookingStatus.PENDING)
    assert is_room_available(db, room.id, start, start + timedelta(days=2))
    assert not is_room_available(db, room.id, start, start + timedelta(days=2), statuses=BLOCKING_STATUSES)


def test_cancelled_bookings_never_block(db, rooms):
    room = rooms[0]
    start = date.today() + timedelta(days=10)
    _book(db, room, start, start + timedelta(days=2), status=BookingStatus.CANCELLED)
    assert is_room_available(db, room.id, start, start + timedelta(days=2), statuses=BLOCKING_STATUSES)


def test_exclude_booking_id(db, rooms):
    room = rooms[0]
    start = date.today() + timedelta(days=10)
    existing = _book(db, room, start, start + timedelta(days=2))
    assert find_conflicts(db, room.id, start, start + timedelta(days=2)) == [existing]
    assert is_room_available(db, room.id, start, start + timedelta(days=2), exclude_booking_id=existing.id)
