from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import Integer, String, Numeric, Boolean, Text, JSON, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..db import Base

if TYPE_CHECKING:
    from .booking import Booking
    from .media import RoomMedia, RoomReview

class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    room_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    floor: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    room_type: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price_per_night: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    size_sqm: Mapped[int | None] = mapped_column(Integer, nullable=True)
    amenities: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    # Coarse flag, not a calendar: see services.availability for date ranges
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    bookings: Mapped[list[Booking]] = relationship(back_populates="room")
    media: Mapped[list[RoomMedia]] = relationship(back_populates="room", cascade="all, delete-orphan")
    reviews: Mapped[list[RoomReview]] = relationship(back_populates="room", cascade="all, delete-orphan")

    @property
    def name(self) -> str:
        return f"Room {self.room_number}"
