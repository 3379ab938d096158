from datetime import date, timedelta, timezone
from decimal import Decimal

import pytest

from app.exceptions import BookingValidationError, DataStoreError, ScreenshotValidationError
from app.models import Booking, BookingStatus, Payment, PaymentMethod, PaymentStatus, Room
from app.schemas import BookingRequest
from app.services import booking_recorder
from app.services.booking_recorder import Screenshot, record_booking, validate_booking

from conftest import PNG_BYTES


def _request(room_ids, stay, **overrides):
    check_in, check_out = stay
    data = dict(
        first_name="Abebe",
        last_name="Kebede",
        email="abebe@example.com",
        phone="+251911234567",
        room_ids=room_ids,
        check_in=check_in,
        check_out=check_out,
        number_of_guests=1,
        payment_method=PaymentMethod.CHAPA,
    )
    data.update(overrides)
    return BookingRequest(**data)


def _bank(room_ids, stay, **overrides):
    return _request(
        room_ids, stay, **{"payment_method": PaymentMethod.BANK_TRANSFER, "transaction_reference": "FT2430012345", **overrides}
    )


def _screenshot():
    return Screenshot(filename="receipt.png", content_type="image/png", data=PNG_BYTES)


# ==== validation ====

@pytest.mark.parametrize("field", ["first_name", "last_name", "email", "phone"])
def test_missing_guest_fields_are_rejected(db, rooms, stay, field):
    with pytest.raises(BookingValidationError):
        validate_booking(db, _request([rooms[0].id], stay, **{field: "  "}))


def test_unknown_room_is_rejected(db, rooms, stay):
    with pytest.raises(BookingValidationError) as exc:
        validate_booking(db, _request([rooms[0].id, 9999], stay))
    assert exc.value.message == "Room data is not available. Please try again."


def test_check_in_in_the_past_is_rejected(db, rooms):
    yesterday = date.today() - timedelta(days=1)
    with pytest.raises(BookingValidationError):
        validate_booking(db, _request([rooms[0].id], (yesterday, yesterday + timedelta(days=3))))


def test_zero_night_stay_is_rejected(db, rooms, stay):
    with pytest.raises(BookingValidationError):
        validate_booking(db, _request([rooms[0].id], (stay[0], stay[0])))


def test_bank_transfer_needs_reference_and_screenshot(db, rooms, stay):
    with pytest.raises(BookingValidationError) as exc:
        validate_booking(db, _bank([rooms[0].id], stay))
    assert exc.value.message == "Please provide transaction ID and screenshot."
    with pytest.raises(BookingValidationError):
        validate_booking(db, _bank([rooms[0].id], stay, transaction_reference=" "), _screenshot())


def test_guests_over_capacity_are_rejected(db, rooms, stay):
    with pytest.raises(BookingValidationError) as exc:
        validate_booking(db, _request([rooms[0].id], stay, number_of_guests=2))
    assert exc.value.message == "Number of guests exceeds room capacity. Max 1 guests."
    # capacity is taken from the first selected room
    validate_booking(db, _request([rooms[1].id, rooms[0].id], stay, number_of_guests=2))


def test_bad_screenshot_is_rejected_before_any_write(db, rooms, stay, upload_dir):
    bad = Screenshot(filename="receipt.txt", content_type="text/plain", data=b"not an image at all")
    with pytest.raises(ScreenshotValidationError):
        record_booking(db, _bank([rooms[0].id], stay), bad)
    assert db.query(Booking).count() == 0
    assert db.query(Payment).count() == 0


def test_validation_returns_rooms_and_quote(db, rooms, stay):
    selected, q = validate_booking(db, _request([rooms[2].id, rooms[0].id], stay))
    assert [r.room_number for r in selected] == ["401", "301"]
    assert q.nights == 2 and q.room_count == 2
    assert q.total == Decimal("2760.00")


# ==== recording ====

def test_two_room_gateway_booking(db, rooms, stay):
    outcome = record_booking(db, _request([rooms[0].id, rooms[2].id], stay))

    assert outcome.ok and not outcome.partial
    assert outcome.status_code == 201
    assert outcome.message.endswith("Payment integration will be available soon.")
    assert [b.room_id for b in outcome.bookings] == [rooms[0].id, rooms[2].id]

    db.expire_all()
    bookings = db.query(Booking).order_by(Booking.id).all()
    payments = db.query(Payment).order_by(Payment.id).all()
    assert len(bookings) == 2 and len(payments) == 2
    for booking, payment in zip(bookings, payments):
        assert booking.guest_name == "Abebe Kebede"
        assert booking.booking_status == BookingStatus.PENDING
        assert booking.total_amount == Decimal("1380.00")
        assert booking.screenshot_url is None and booking.transaction_id is None
        assert payment.booking_id == booking.id
        assert payment.payment_method == PaymentMethod.CHAPA
        assert payment.payment_status == PaymentStatus.PENDING
        assert payment.amount == booking.total_amount
        assert payment.transaction_reference is None
        assert payment.payment_date is not None
    assert sum(b.total_amount for b in bookings) == outcome.quote.total
    assert not db.get(Room, rooms[0].id).is_available
    assert not db.get(Room, rooms[2].id).is_available
    assert db.get(Room, rooms[1].id).is_available


def test_gateway_booking_keeps_screenshot_off_the_payment(db, rooms, stay, upload_dir):
    outcome = record_booking(db, _request([rooms[0].id], stay), _screenshot())
    assert outcome.ok
    assert outcome.bookings[0].screenshot_url.startswith("/static/uploads/")
    assert outcome.payments[0].transaction_screenshot_url is None
    assert outcome.payments[0].transaction_reference is None
    assert len(list(upload_dir.iterdir())) == 1


def test_bank_transfer_uploads_one_screenshot_per_booking(db, rooms, stay, upload_dir):
    outcome = record_booking(db, _bank([rooms[0].id, rooms[2].id], stay), _screenshot())

    assert outcome.ok
    assert outcome.message.endswith("We will verify your payment soon.")
    urls = [b.screenshot_url for b in outcome.bookings]
    assert len(set(urls)) == 2
    for booking, payment in zip(outcome.bookings, outcome.payments):
        assert booking.transaction_id == "FT2430012345"
        assert booking.screenshot_url.split("/")[-1].startswith(f"{booking.id}_")
        assert payment.transaction_reference == "FT2430012345"
        assert payment.transaction_screenshot_url == booking.screenshot_url
    assert len(list(upload_dir.iterdir())) == 2


def test_second_payment_failure_keeps_first_room(db, rooms, stay, monkeypatch):
    real_insert_payment = booking_recorder.insert_payment
    calls = []

    def flaky_insert_payment(*args, **kwargs):
        calls.append(args)
        if len(calls) == 2:
            raise DataStoreError()
        return real_insert_payment(*args, **kwargs)

    monkeypatch.setattr(booking_recorder, "insert_payment", flaky_insert_payment)
    outcome = record_booking(db, _request([rooms[0].id, rooms[2].id], stay))

    assert not outcome.ok and outcome.partial
    assert outcome.status_code == 502
    assert outcome.failed_room.id == rooms[2].id
    assert "Room(s) 301 were booked, but room 401 was not." in outcome.message

    db.expire_all()
    bookings = db.query(Booking).all()
    assert [b.room_id for b in bookings] == [rooms[0].id]
    assert [p.booking_id for p in db.query(Payment).all()] == [bookings[0].id]
    assert not db.get(Room, rooms[0].id).is_available
    assert db.get(Room, rooms[2].id).is_available


def test_failed_room_screenshot_is_removed(db, rooms, stay, upload_dir, monkeypatch):
    real_insert_payment = booking_recorder.insert_payment
    calls = []

    def flaky_insert_payment(*args, **kwargs):
        calls.append(args)
        if len(calls) == 2:
            raise DataStoreError()
        return real_insert_payment(*args, **kwargs)

    monkeypatch.setattr(booking_recorder, "insert_payment", flaky_insert_payment)
    outcome = record_booking(db, _bank([rooms[0].id, rooms[2].id], stay), _screenshot())

    assert outcome.partial
    first = outcome.bookings[0]
    remaining = [p.name for p in upload_dir.iterdir()]
    assert remaining == [first.screenshot_url.split("/")[-1]]


def test_first_room_failure_books_nothing(db, rooms, stay, monkeypatch):
    def broken_insert_payment(*args, **kwargs):
        raise DataStoreError()

    monkeypatch.setattr(booking_recorder, "insert_payment", broken_insert_payment)
    outcome = record_booking(db, _request([rooms[0].id, rooms[2].id], stay))

    assert not outcome.ok and not outcome.partial
    assert outcome.bookings == []
    assert outcome.message == DataStoreError.message
    db.expire_all()
    assert db.query(Booking).count() == 0
    assert db.get(Room, rooms[0].id).is_available


def test_overlapping_pending_booking_stops_the_loop(db, rooms, stay):
    first = record_booking(db, _request([rooms[2].id], stay))
    assert first.ok

    check_in, check_out = stay
    overlapping = (check_in + timedelta(days=1), check_out + timedelta(days=1))
    outcome = record_booking(db, _request([rooms[0].id, rooms[2].id], overlapping))

    assert outcome.partial
    assert outcome.status_code == 409
    assert [b.room_id for b in outcome.bookings] == [rooms[0].id]
    assert outcome.failed_room.id == rooms[2].id


def test_back_to_back_booking_is_allowed(db, rooms, stay):
    assert record_booking(db, _request([rooms[0].id], stay)).ok
    check_out = stay[1]
    outcome = record_booking(db, _request([rooms[0].id], (check_out, check_out + timedelta(days=1))))
    assert outcome.ok


def test_same_room_twice_is_rejected_before_any_write(db, rooms, stay):
    with pytest.raises(BookingValidationError) as exc:
        record_booking(db, _request([rooms[0].id, rooms[0].id], stay))
    assert exc.value.message == "Each room can only be selected once."
    assert db.query(Booking).count() == 0
    assert db.get(Room, rooms[0].id).is_available


def test_screenshot_name_and_payment_date_share_a_clock(db, rooms, stay, upload_dir):
    outcome = record_booking(db, _bank([rooms[0].id], stay), _screenshot())
    booking, payment = outcome.bookings[0], outcome.payments[0]
    stamp = int(booking.screenshot_url.rsplit("/", 1)[-1].split("_", 1)[1].split(".")[0])
    paid_at = payment.payment_date.replace(tzinfo=timezone.utc)
    assert stamp == int(paid_at.timestamp() * 1000)
