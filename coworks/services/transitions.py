"""
Allowed status transitions for bookings and payments.

Every status write goes through `ensure_transition` first; anything not
listed here (including writing the current value again) is rejected.
"""
from coworks.models.enums import BookingStatus, BookingPaymentStatus, PaymentStatus


class InvalidTransition(ValueError):
    def __init__(self, kind: str, current: str, new: str):
        self.kind = kind
        self.current = current
        self.new = new
        super().__init__(f"Cannot change {kind} from '{current}' to '{new}'")


BOOKING_STATUS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
}

BOOKING_PAYMENT_STATUS = {
    BookingPaymentStatus.PENDING: {BookingPaymentStatus.PAID, BookingPaymentStatus.FAILED},
    BookingPaymentStatus.FAILED: {BookingPaymentStatus.PAID},
    BookingPaymentStatus.PAID: {BookingPaymentStatus.REFUNDED},
    BookingPaymentStatus.REFUNDED: set(),
}

PAYMENT_STATUS = {
    PaymentStatus.CREATED: {PaymentStatus.AUTHORIZED, PaymentStatus.CAPTURED, PaymentStatus.FAILED},
    PaymentStatus.AUTHORIZED: {PaymentStatus.CAPTURED, PaymentStatus.FAILED},
    PaymentStatus.CAPTURED: {PaymentStatus.REFUNDED},
    PaymentStatus.FAILED: set(),
    PaymentStatus.REFUNDED: set(),
}

TABLES = {
    "booking status": (BookingStatus, BOOKING_STATUS),
    "booking payment status": (BookingPaymentStatus, BOOKING_PAYMENT_STATUS),
    "payment status": (PaymentStatus, PAYMENT_STATUS),
}

# payment.status -> booking.payment_status it implies
PAYMENT_TO_BOOKING = {
    PaymentStatus.CAPTURED: BookingPaymentStatus.PAID,
    PaymentStatus.REFUNDED: BookingPaymentStatus.REFUNDED,
    PaymentStatus.FAILED: BookingPaymentStatus.FAILED,
}
BOOKING_TO_PAYMENT = {v: k for k, v in PAYMENT_TO_BOOKING.items()}


def can_transition(kind: str, current: str, new: str) -> bool:
    enum, table = TABLES[kind]
    try:
        current, new = enum(current), enum(new)
    except ValueError:
        return False
    return new in table[current]


def ensure_transition(kind: str, current: str, new: str):
    if not can_transition(kind, current, new):
        raise InvalidTransition(kind, current, new)
