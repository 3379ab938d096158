"""Turn a guest's booking form into Booking and Payment rows.

Each selected room is booked in its own database transaction: overlap
check, booking insert, screenshot upload, availability flip and payment
insert either all commit or all roll back. Rooms are processed one after
another in the order they were selected and the first failure stops the
loop; rooms committed before it stay booked and are reported alongside the
failure.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import (
    BookingError,
    BookingValidationError,
    DataStoreError,
    RoomUnavailableError,
)
from ..models import Booking, BookingStatus, Payment, PaymentMethod, PaymentStatus, Room
from ..schemas import BookingRequest
from .availability import BLOCKING_STATUSES, is_room_available
from .catalog import get_rooms
from .media import remove_screenshot, screenshot_name, upload_screenshot, validate_screenshot
from .pricing import Quote, quote

logger = logging.getLogger(__name__)


@dataclass
class Screenshot:
    filename: str | None
    content_type: str | None
    data: bytes


@dataclass
class BookingOutcome:
    request: BookingRequest
    quote: Quote
    bookings: list[Booking] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    failed_room: Room | None = None
    error: BookingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def partial(self) -> bool:
        return self.error is not None and bool(self.bookings)

    @property
    def status_code(self) -> int:
        return 201 if self.ok else self.error.status_code

    @property
    def message(self) -> str:
        if self.ok:
            if self.request.payment_method == PaymentMethod.BANK_TRANSFER:
                return "Your booking(s) have been created! We will verify your payment soon."
            return "Your booking(s) have been created! Payment integration will be available soon."
        if not self.partial:
            return self.error.message
        booked = ", ".join(b.room.room_number for b in self.bookings)
        failed = self.failed_room.room_number if self.failed_room else "the remaining rooms"
        return f"{self.error.message} Room(s) {booked} were booked, but room {failed} was not."


def validate_booking(db: Session, req: BookingRequest, screenshot: Screenshot | None = None) -> tuple[list[Room], Quote]:
    """Run every pre-write check; returns the selected rooms and their quote."""
    if not all(v and v.strip() for v in (req.first_name, req.last_name, req.email, req.phone)):
        raise BookingValidationError("Please fill in first name, last name, email and phone.")

    if not req.room_ids:
        raise BookingValidationError("Please select a room.")
    if len(set(req.room_ids)) != len(req.room_ids):
        raise BookingValidationError("Each room can only be selected once.")
    rooms = get_rooms(db, req.room_ids)
    if len(rooms) != len(req.room_ids):
        raise BookingValidationError("Room data is not available. Please try again.")

    if not req.check_in or not req.check_out:
        raise BookingValidationError("Please select check-in and check-out dates.")
    if req.check_in < date.today():
        raise BookingValidationError("Check-in date cannot be in the past.")
    q = quote(rooms[0].price_per_night, req.check_in, req.check_out, len(rooms))
    if not q.is_bookable:
        raise BookingValidationError("Check-out must be at least one night after check-in.")

    if req.payment_method == PaymentMethod.BANK_TRANSFER:
        if not (req.transaction_reference or "").strip() or screenshot is None:
            raise BookingValidationError("Please provide transaction ID and screenshot.")

    # All rooms in one request are the same type; the first one stands for all
    representative = rooms[0]
    if req.number_of_guests < 1:
        raise BookingValidationError("Please select the number of guests.")
    if req.number_of_guests > representative.capacity:
        raise BookingValidationError(
            f"Number of guests exceeds room capacity. Max {representative.capacity} guests."
        )

    if screenshot is not None:
        validate_screenshot(screenshot.filename, screenshot.content_type, screenshot.data)
    return rooms, q


def lock_room(db: Session, room_id: int) -> Room:
    try:
        room = db.execute(select(Room).where(Room.id == room_id).with_for_update()).scalar_one_or_none()
    except SQLAlchemyError as exc:
        raise DataStoreError() from exc
    if room is None:
        raise RoomUnavailableError("This room is no longer available.")
    return room


def insert_booking(db: Session, room: Room, req: BookingRequest, amount: Decimal) -> Booking:
    is_bank = req.payment_method == PaymentMethod.BANK_TRANSFER
    booking = Booking(
        room_id=room.id,
        guest_name=req.guest_name,
        guest_email=req.email.strip(),
        guest_phone=req.phone.strip(),
        check_in_date=req.check_in,
        check_out_date=req.check_out,
        number_of_guests=req.number_of_guests,
        total_amount=amount,
        booking_status=BookingStatus.PENDING,
        special_requests=(req.special_requests or "").strip() or None,
        transaction_id=req.transaction_reference.strip() if is_bank else None,
    )
    try:
        db.add(booking)
        db.flush()
    except SQLAlchemyError as exc:
        raise DataStoreError() from exc
    return booking


def attach_screenshot(db: Session, booking: Booking, url: str) -> None:
    booking.screenshot_url = url
    try:
        db.flush()
    except SQLAlchemyError as exc:
        raise DataStoreError() from exc


def mark_room_unavailable(db: Session, room: Room) -> None:
    room.is_available = False
    try:
        db.flush()
    except SQLAlchemyError as exc:
        raise DataStoreError() from exc


def insert_payment(
    db: Session,
    booking: Booking,
    req: BookingRequest,
    amount: Decimal,
    screenshot_url: str | None,
    paid_at: datetime,
) -> Payment:
    is_bank = req.payment_method == PaymentMethod.BANK_TRANSFER
    payment = Payment(
        booking_id=booking.id,
        payment_method=req.payment_method,
        payment_status=PaymentStatus.PENDING,
        transaction_reference=req.transaction_reference.strip() if is_bank else None,
        transaction_screenshot_url=screenshot_url if is_bank else None,
        amount=amount,
        payment_date=paid_at,
    )
    try:
        db.add(payment)
        db.flush()
    except SQLAlchemyError as exc:
        raise DataStoreError() from exc
    return payment


def _book_room(
    db: Session,
    room: Room,
    req: BookingRequest,
    screenshot: Screenshot | None,
    amount: Decimal,
    uploads: list[str],
) -> tuple[Booking, Payment]:
    room = lock_room(db, room.id)
    if not is_room_available(db, room.id, req.check_in, req.check_out, statuses=BLOCKING_STATUSES):
        raise RoomUnavailableError(f"Room {room.room_number} is already booked for the selected dates.")

    booking = insert_booking(db, room, req, amount)
    # One clock for the upload name and the payment timestamp
    now = datetime.now(timezone.utc)
    logger.debug("Inserted booking %s for room %s", booking.id, room.room_number)

    screenshot_url = None
    if screenshot is not None:
        # Uploaded once per booking, each under its own name
        name = screenshot_name(booking.id, screenshot.filename, screenshot.data, now=now)
        screenshot_url = upload_screenshot(screenshot.data, name)
        uploads.append(name)
        attach_screenshot(db, booking, screenshot_url)

    mark_room_unavailable(db, room)
    payment = insert_payment(db, booking, req, amount, screenshot_url, now.replace(tzinfo=None))

    try:
        db.commit()
    except SQLAlchemyError as exc:
        raise DataStoreError() from exc
    return booking, payment


def record_booking(db: Session, req: BookingRequest, screenshot: Screenshot | None = None) -> BookingOutcome:
    """Validate, then book every selected room in order.

    Validation failures raise BookingValidationError before anything is
    written. Failures while writing are returned on the outcome instead.
    """
    rooms, q = validate_booking(db, req, screenshot)
    outcome = BookingOutcome(request=req, quote=q)
    amount = q.per_room
    logger.info(
        "Recording %s booking for %d room(s), %s to %s, total %s",
        req.payment_method.value, len(rooms), req.check_in, req.check_out, q.total,
    )

    for room in rooms:
        uploads: list[str] = []
        try:
            booking, payment = _book_room(db, room, req, screenshot, amount, uploads)
        except BookingError as exc:
            db.rollback()
            for name in uploads:
                remove_screenshot(name)
            logger.exception(
                "Booking room %s failed after %d room(s) were booked", room.room_number, len(outcome.bookings)
            )
            outcome.failed_room = room
            outcome.error = exc
            break
        outcome.bookings.append(booking)
        outcome.payments.append(payment)
        logger.info("Booked room %s as booking %s (payment %s)", room.room_number, booking.id, payment.id)

    return outcome
