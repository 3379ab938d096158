import logging
import datetime
import requests
from ..config import settings
from ..templating import templates

logger = logging.getLogger(__name__)


def send_booking_notification(summary: dict):
    """Tells the front desk about a new booking using the Mailgun API.

    `summary` is a plain dict built while the request's session was open, so
    this can run as a background task after the response is sent.
    """
    if not settings.ADMIN_NOTIFICATION_EMAIL_ENABLE or not settings.ADMIN_NOTIFICATION_EMAIL:
        return
    if not settings.MAILGUN_API_KEY or not settings.MAILGUN_DOMAIN:
        logger.warning("Mailgun API key or domain not configured. Skipping email.")
        return

    template_body = templates.get_template("emails/booking_notification.html").render({
        **summary,
        "app_name": settings.APP_NAME,
        "current_year": datetime.datetime.now().year,
    })

    mailgun_url = f"https://api.mailgun.net/v3/{settings.MAILGUN_DOMAIN}/messages"
    auth = ("api", settings.MAILGUN_API_KEY)
    data = {
        "from": f"{settings.APP_NAME} <{settings.MAIL_FROM}>",
        "to": [settings.ADMIN_NOTIFICATION_EMAIL],
        "subject": f"New booking from {summary.get('guest_name', 'a guest')}",
        "html": template_body,
    }

    try:
        response = requests.post(mailgun_url, auth=auth, data=data, timeout=10)
        response.raise_for_status()  # Raise an exception for bad status codes (4xx or 5xx)
        logger.info("Booking notification for %s sent via Mailgun.", summary.get("booking_ids"))
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to send booking notification via Mailgun: {e}")


def booking_summary(outcome) -> dict:
    """Snapshot of a recorded booking for the notification email."""
    req = outcome.request
    return {
        "guest_name": req.guest_name,
        "guest_email": req.email,
        "guest_phone": req.phone,
        "check_in": req.check_in.isoformat(),
        "check_out": req.check_out.isoformat(),
        "guests": req.number_of_guests,
        "payment_method": req.payment_method.value,
        "transaction_reference": req.transaction_reference,
        "rooms": [b.room.room_number for b in outcome.bookings],
        "booking_ids": [b.id for b in outcome.bookings],
        "total": f"{outcome.quote.total:,.2f}",
        "currency": settings.CURRENCY,
    }
