import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import ContactValidationError, DataStoreError
from ..models import ContactMessage
from ..schemas import ContactMessageIn

logger = logging.getLogger(__name__)


def submit_contact_message(db: Session, form: ContactMessageIn) -> ContactMessage:
    if not form.first_name.strip() or not form.email.strip() or not form.message.strip():
        raise ContactValidationError()
    msg = ContactMessage(
        first_name=form.first_name.strip(),
        last_name=form.last_name.strip() or None,
        email=form.email.strip(),
        phone=form.phone.strip() or None,
        check_in=form.check_in,
        check_out=form.check_out,
        message=form.message.strip(),
    )
    try:
        db.add(msg)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Saving contact message from %s failed", form.email)
        raise DataStoreError("Failed to send message. Please try again.") from exc
    db.refresh(msg)
    logger.info("Contact message %s received from %s", msg.id, msg.email)
    return msg
