from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field

from .models import BookingStatus, PaymentMethod, PaymentStatus

# ==== Inputs ====

class BookingRequest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    room_ids: List[int] = Field(default_factory=list)
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    number_of_guests: int = 1
    payment_method: PaymentMethod = PaymentMethod.CHAPA
    transaction_reference: Optional[str] = None
    special_requests: Optional[str] = None

    @property
    def guest_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}".strip()

class ContactMessageIn(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    message: str = ""

# ==== Outputs ====

class RoomOut(BaseModel):
    id: int
    room_number: str
    floor: int
    room_type: str
    capacity: int
    price_per_night: float
    size_sqm: Optional[int] = None
    amenities: List[str] = []
    is_available: bool
    description: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        from_attributes = True

class FloorOut(BaseModel):
    floor: int
    total: int
    available: int

class AvailabilityOut(BaseModel):
    room_id: int
    check_in: date
    check_out: date
    available: bool

class QuoteOut(BaseModel):
    nights: int
    room_count: int
    price_per_night: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    per_room: Decimal
    is_available: bool
    is_bookable: bool
    display_total: str

    @classmethod
    def from_quote(cls, q) -> "QuoteOut":
        return cls(
            nights=q.nights,
            room_count=q.room_count,
            price_per_night=q.price_per_night,
            subtotal=q.subtotal,
            tax=q.tax,
            total=q.total,
            per_room=q.per_room,
            is_available=q.is_available,
            is_bookable=q.is_bookable,
            display_total=q.display(),
        )

class BookingOut(BaseModel):
    id: int
    room_id: int
    guest_name: str
    guest_email: str
    guest_phone: Optional[str] = None
    check_in_date: date
    check_out_date: date
    number_of_guests: int
    total_amount: float
    booking_status: BookingStatus
    special_requests: Optional[str] = None
    screenshot_url: Optional[str] = None
    transaction_id: Optional[str] = None

    class Config:
        use_enum_values = True
        from_attributes = True

class PaymentOut(BaseModel):
    id: int
    booking_id: int
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    transaction_reference: Optional[str] = None
    transaction_screenshot_url: Optional[str] = None
    amount: float
    payment_date: Optional[datetime] = None

    class Config:
        use_enum_values = True
        from_attributes = True

class BookingResultOut(BaseModel):
    bookings: List[BookingOut]
    payments: List[PaymentOut]
    quote: QuoteOut
    message: str

class RoomMediaOut(BaseModel):
    id: int
    room_id: Optional[int] = None
    media_type: str
    media_url: str
    caption: Optional[str] = None
    is_primary: bool

    class Config:
        from_attributes = True

class RoomReviewOut(BaseModel):
    id: int
    room_id: Optional[int] = None
    guest_name: str
    rating: Optional[int] = None
    review_text: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ContactInfoOut(BaseModel):
    id: int
    icon: Optional[str] = None
    title: str
    details: List[str] = []

    class Config:
        from_attributes = True

class SocialLinkOut(BaseModel):
    icon: Optional[str] = None
    href: str
    label: str

    class Config:
        from_attributes = True

class ServiceGalleryOut(BaseModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    media_url: str
    media_type: str

    class Config:
        from_attributes = True
