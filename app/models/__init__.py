from .room import Room
from .booking import Booking, BookingStatus
from .payment import Payment, PaymentMethod, PaymentStatus
from .media import RoomMedia, RoomReview, ServiceGalleryItem
from .contact import ContactInfo, SocialLink, ContactMessage
