from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..exceptions import BookingError
from ..limiter import limiter
from ..schemas import ContactMessageIn
from ..services.contact import submit_contact_message
from .bookings_views import parse_date

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_class=HTMLResponse)
@limiter.limit(settings.RATE_LIMIT_CONTACT)
def contact_submit(
    request: Request,
    db: Session = Depends(get_db),
    first_name: str = Form(""),
    last_name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    check_in: str = Form(""),
    check_out: str = Form(""),
    message: str = Form(""),
):
    form = ContactMessageIn(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
        check_in=parse_date(check_in),
        check_out=parse_date(check_out),
        message=message,
    )
    try:
        submit_contact_message(db, form)
    except BookingError as exc:
        return HTMLResponse(f"<div class='text-red-700 p-2'>{exc.message}</div>", status_code=exc.status_code)
    return HTMLResponse(
        "<div class='text-green-700 p-2'>Message Sent. Thank you for contacting us! We'll get back to you soon.</div>"
    )
