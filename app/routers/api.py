from datetime import date
from typing import Optional, List
from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..exceptions import BookingError, BookingValidationError
from ..limiter import limiter
from ..models import PaymentMethod
from ..schemas import (
    AvailabilityOut, BookingOut, BookingRequest, BookingResultOut, ContactInfoOut, ContactMessageIn,
    FloorOut, PaymentOut, QuoteOut, RoomMediaOut, RoomOut, RoomReviewOut, ServiceGalleryOut, SocialLinkOut,
)
from ..services import catalog
from ..services.availability import is_room_available
from ..services.booking_recorder import record_booking
from ..services.contact import submit_contact_message
from ..services.mail import booking_summary, send_booking_notification
from ..services.pricing import quote
from .bookings_views import parse_date, parse_payment_method, screenshot_from_upload

router = APIRouter(prefix="/api/v1", tags=["api"])

# ==== Rooms ====

@router.get("/rooms", response_model=List[RoomOut])
def api_rooms(
    db: Session = Depends(get_db),
    available: Optional[bool] = None,
    floor: Optional[int] = None,
    room_type: Optional[str] = None,
    order: str = "floor",
):
    return catalog.list_rooms(db, available=available, floor=floor, room_type=room_type, order=order)

@router.get("/rooms/{room_id}", response_model=RoomOut)
def api_room(room_id: int, db: Session = Depends(get_db)):
    room = catalog.get_room(db, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room

@router.get("/rooms/{room_id}/availability", response_model=AvailabilityOut)
def api_room_availability(room_id: int, check_in: date, check_out: date, db: Session = Depends(get_db)):
    if not catalog.get_room(db, room_id):
        raise HTTPException(status_code=404, detail="Room not found")
    if check_out <= check_in:
        raise HTTPException(status_code=400, detail="check_out must be after check_in")
    return AvailabilityOut(
        room_id=room_id,
        check_in=check_in,
        check_out=check_out,
        available=is_room_available(db, room_id, check_in, check_out),
    )

@router.get("/floors", response_model=List[FloorOut])
def api_floors(db: Session = Depends(get_db)):
    return [FloorOut(floor=f["floor"], total=f["total"], available=f["available"]) for f in catalog.floor_summary(db)]

@router.get("/quote", response_model=QuoteOut)
def api_quote(
    db: Session = Depends(get_db),
    room_id: Optional[int] = None,
    price: Optional[float] = None,
    check_in: Optional[str] = None,
    check_out: Optional[str] = None,
    rooms: int = 1,
):
    if room_id is not None:
        room = catalog.get_room(db, room_id)
        if not room:
            raise HTTPException(status_code=404, detail="Room not found")
        price = room.price_per_night
    return QuoteOut.from_quote(quote(price, parse_date(check_in), parse_date(check_out), rooms))

# ==== Gallery & contact ====

@router.get("/media", response_model=List[RoomMediaOut])
def api_media(db: Session = Depends(get_db), room_id: List[int] = Query(default=[]), media_type: Optional[str] = None):
    return catalog.list_room_media(db, room_ids=room_id or None, media_type=media_type)

@router.get("/reviews", response_model=List[RoomReviewOut])
def api_reviews(db: Session = Depends(get_db), room_id: List[int] = Query(default=[]), limit: Optional[int] = 6):
    return catalog.list_featured_reviews(db, room_ids=room_id or None, limit=limit)

@router.get("/contact-info", response_model=List[ContactInfoOut])
def api_contact_info(db: Session = Depends(get_db)):
    return catalog.list_contact_info(db)

@router.get("/social-links", response_model=List[SocialLinkOut])
def api_social_links(db: Session = Depends(get_db)):
    return catalog.list_social_links(db)

@router.get("/services-gallery", response_model=List[ServiceGalleryOut])
def api_services_gallery(db: Session = Depends(get_db), media_type: Optional[str] = None):
    return catalog.list_services_gallery(db, media_type=media_type)

@router.post("/contact-messages", status_code=201)
@limiter.limit(settings.RATE_LIMIT_CONTACT)
def api_contact_message(request: Request, payload: ContactMessageIn, db: Session = Depends(get_db)):
    try:
        msg = submit_contact_message(db, payload)
    except BookingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)
    return {"id": msg.id, "message": "Thank you for contacting us! We'll get back to you soon."}

# ==== Bookings ====

@router.post("/bookings", response_model=BookingResultOut, status_code=201)
@limiter.limit(settings.RATE_LIMIT_BOOKING)
async def api_create_booking(
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    room_ids: List[int] = Form(default=[]),
    first_name: str = Form(""),
    last_name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    check_in: str = Form(""),
    check_out: str = Form(""),
    guests: int = Form(1),
    payment_method: str = Form(PaymentMethod.CHAPA.value),
    transaction_reference: str = Form(""),
    special_requests: str = Form(""),
    screenshot: UploadFile | None = File(None),
):
    try:
        req = BookingRequest(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            room_ids=room_ids,
            check_in=parse_date(check_in),
            check_out=parse_date(check_out),
            number_of_guests=guests,
            payment_method=parse_payment_method(payment_method),
            transaction_reference=transaction_reference or None,
            special_requests=special_requests or None,
        )
        outcome = record_booking(db, req, await screenshot_from_upload(screenshot))
    except BookingValidationError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    if outcome.bookings:
        background_tasks.add_task(send_booking_notification, booking_summary(outcome))
    if not outcome.ok:
        return JSONResponse(
            status_code=outcome.status_code,
            content={
                "detail": outcome.message,
                "booked_room_ids": [b.room_id for b in outcome.bookings],
                "failed_room_id": outcome.failed_room.id if outcome.failed_room else None,
            },
            background=background_tasks,
        )
    return BookingResultOut(
        bookings=[BookingOut.model_validate(b) for b in outcome.bookings],
        payments=[PaymentOut.model_validate(p) for p in outcome.payments],
        quote=QuoteOut.from_quote(outcome.quote),
        message=outcome.message,
    )
