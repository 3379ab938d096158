from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from enum import Enum as PyEnum
from sqlalchemy import Integer, String, ForeignKey, Numeric, Enum, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base

if TYPE_CHECKING:
    from .booking import Booking

class PaymentMethod(str, PyEnum):
    CHAPA = "chapa"
    BANK_TRANSFER = "bank_transfer"

class PaymentStatus(str, PyEnum):
    PENDING = "pending"
    VERIFIED = "verified"
    FAILED = "failed"

def _values(enum_cls):
    return [m.value for m in enum_cls]

class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    booking_id: Mapped[int] = mapped_column(ForeignKey("bookings.id"), index=True)
    payment_method: Mapped[PaymentMethod] = mapped_column(Enum(PaymentMethod, values_callable=_values), nullable=False)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, values_callable=_values), default=PaymentStatus.PENDING, nullable=False
    )
    transaction_reference: Mapped[str | None] = mapped_column(String(200))
    transaction_screenshot_url: Mapped[str | None] = mapped_column(String(500))
    amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    payment_date: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    booking: Mapped[Booking] = relationship(back_populates="payments")
