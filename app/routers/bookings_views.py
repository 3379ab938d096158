import logging
from datetime import date
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..exceptions import BookingError, BookingValidationError
from ..limiter import limiter
from ..models import PaymentMethod
from ..schemas import BookingRequest
from ..services import catalog
from ..services.booking_recorder import Screenshot, record_booking
from ..services.mail import booking_summary, send_booking_notification
from ..services.pricing import quote
from ..templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/book", tags=["bookings"])


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_payment_method(value: str | None) -> PaymentMethod:
    try:
        return PaymentMethod(value or PaymentMethod.CHAPA.value)
    except ValueError:
        raise BookingValidationError("Please choose a payment method.")


async def screenshot_from_upload(upload: UploadFile | None) -> Screenshot | None:
    if upload is None or not upload.filename:
        return None
    # One byte past the limit is enough for validation to reject it
    data = await upload.read(settings.UPLOAD_IMAGE_MAX_BYTES + 1)
    return Screenshot(filename=upload.filename, content_type=upload.content_type, data=data)


def _form_context(request: Request, rooms, check_in, check_out, guests, **extra) -> dict:
    price = rooms[0].price_per_night if rooms else None
    ctx = {
        "request": request,
        "rooms": rooms,
        "display_room": rooms[0] if rooms else None,
        "check_in": check_in.isoformat() if check_in else "",
        "check_out": check_out.isoformat() if check_out else "",
        "guests": guests,
        "quote": quote(price, check_in, check_out, len(rooms)),
        "payment_methods": list(PaymentMethod),
        "today_str": date.today().isoformat(),
        "form": {},
        "error": None,
    }
    ctx.update(extra)
    return ctx


@router.get("", response_class=HTMLResponse)
def booking_form(
    request: Request,
    db: Session = Depends(get_db),
    room_id: int | None = None,
    rooms: int = 1,
    check_in: str | None = None,
    check_out: str | None = None,
    guests: int = 1,
):
    s = parse_date(check_in)
    e = parse_date(check_out)
    if room_id is not None:
        selected = catalog.get_rooms(db, [room_id])
        if not selected:
            return HTMLResponse("<h2>Room not found</h2>", status_code=404)
    else:
        try:
            selected = catalog.pick_available_rooms(db, rooms)
        except BookingError as exc:
            ctx = _form_context(request, [], s, e, guests, error=exc.message)
            return templates.TemplateResponse("booking/form.html", ctx, status_code=exc.status_code)
    return templates.TemplateResponse("booking/form.html", _form_context(request, selected, s, e, guests))


@router.get("/quote", response_class=HTMLResponse)
def booking_quote(
    request: Request,
    db: Session = Depends(get_db),
    room_ids: List[int] = Query(default=[]),
    check_in: str | None = None,
    check_out: str | None = None,
):
    rooms = catalog.get_rooms(db, room_ids)
    price = rooms[0].price_per_night if rooms else None
    q = quote(price, parse_date(check_in), parse_date(check_out), len(rooms))
    return templates.TemplateResponse("booking/_quote.html", {"request": request, "quote": q})


@router.post("", response_class=HTMLResponse)
@limiter.limit(settings.RATE_LIMIT_BOOKING)
async def booking_submit(
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
    s = parse_date(check_in)
    e = parse_date(check_out)
    form = {
        "first_name": first_name, "last_name": last_name, "email": email, "phone": phone,
        "payment_method": payment_method, "transaction_reference": transaction_reference,
        "special_requests": special_requests,
    }
    rooms = catalog.get_rooms(db, room_ids)
    try:
        req = BookingRequest(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            room_ids=room_ids,
            check_in=s,
            check_out=e,
            number_of_guests=guests,
            payment_method=parse_payment_method(payment_method),
            transaction_reference=transaction_reference or None,
            special_requests=special_requests or None,
        )
        outcome = record_booking(db, req, await screenshot_from_upload(screenshot))
    except BookingValidationError as exc:
        ctx = _form_context(request, rooms, s, e, guests, form=form, error=exc.message)
        return templates.TemplateResponse("booking/form.html", ctx, status_code=exc.status_code)

    if outcome.bookings:
        background_tasks.add_task(send_booking_notification, booking_summary(outcome))
    ctx = {
        "request": request,
        "outcome": outcome,
        "bookings": outcome.bookings,
        "message": outcome.message,
    }
    status_code = 200 if outcome.ok else outcome.status_code
    return templates.TemplateResponse("booking/result.html", ctx, status_code=status_code)
