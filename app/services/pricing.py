"""Stay pricing: nights, subtotal, tax and total for one or more rooms."""
import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

TAX_RATE = Decimal("0.15")
UNAVAILABLE = "unavailable"
_CENTS = Decimal("0.01")
_ZERO = Decimal("0.00")


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def calculate_nights(check_in: date | datetime | None, check_out: date | datetime | None) -> int:
    """Whole nights between the two dates, rounded up; 0 when missing or not ordered."""
    if not check_in or not check_out:
        return 0
    delta = _as_datetime(check_out) - _as_datetime(check_in)
    nights = math.ceil(delta.total_seconds() / 86400)
    return nights if nights > 0 else 0


@dataclass(frozen=True)
class Quote:
    nights: int
    room_count: int
    price_per_night: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    is_available: bool = True

    @property
    def is_bookable(self) -> bool:
        return self.is_available and self.nights > 0 and self.room_count > 0

    @property
    def per_room(self) -> Decimal:
        if self.room_count <= 0:
            return _ZERO
        return _money(self.total / self.room_count)

    def display(self, amount: Decimal | None = None) -> str:
        """Amount (total by default) formatted for display, or 'unavailable'."""
        if not self.is_available:
            return UNAVAILABLE
        value = self.total if amount is None else amount
        return f"{value:,.2f}"


def _unavailable(room_count: int) -> Quote:
    return Quote(
        nights=0,
        room_count=room_count,
        price_per_night=_ZERO,
        subtotal=_ZERO,
        tax=_ZERO,
        total=_ZERO,
        is_available=False,
    )


def quote(price_per_night, check_in, check_out, room_count: int = 1) -> Quote:
    """Price a stay. Never raises: bad or missing input gives an unavailable quote.

    subtotal = price x nights x rooms, tax = 15% of subtotal, total = subtotal + tax.
    A stay with zero nights prices at zero and is not bookable.
    """
    try:
        count = int(room_count)
    except (TypeError, ValueError):
        count = 0
    if price_per_night is None or not check_in or not check_out or count <= 0:
        return _unavailable(max(count, 0))
    try:
        price = Decimal(str(price_per_night))
    except (InvalidOperation, ValueError):
        return _unavailable(count)
    if not price.is_finite() or price < 0:
        return _unavailable(count)

    nights = calculate_nights(check_in, check_out)
    subtotal = _money(price * nights * count)
    tax = _money(subtotal * TAX_RATE)
    return Quote(
        nights=nights,
        room_count=count,
        price_per_night=_money(price),
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
    )
