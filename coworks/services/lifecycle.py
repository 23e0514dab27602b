"""
Booking-to-payment lifecycle.

A booking starts pending/pending, gets a gateway order, and is confirmed/paid
once the gateway signature checks out. Payment status and booking payment
status are always written together and committed once, so the pairing
(captured <-> paid, refunded <-> refunded, failed <-> failed) never diverges.
"""
from datetime import date

from fastapi import HTTPException
from razorpay.errors import BadRequestError, GatewayError, ServerError, SignatureVerificationError
from sqlalchemy.orm import Session

from coworks.core.config import CURRENCY
from coworks.core.logging_config import get_logger
from coworks.models.booking import Booking
from coworks.models.enums import BookingPaymentStatus, PaymentStatus
from coworks.models.location import Location
from coworks.models.payment import Payment
from coworks.models.profile import Profile
from coworks.models.space import Space
from coworks.schemas.booking import BookingCreate
from coworks.services.transitions import (
    BOOKING_TO_PAYMENT,
    PAYMENT_TO_BOOKING,
    ensure_transition,
)
from coworks.utils.pricing import booking_window, calculate_total_amount, to_minor_units
from coworks.utils.razorpay_client import razorpay_client

logger = get_logger()


class PaymentGatewayError(Exception):
    """Order creation was refused or failed at the gateway"""


# ---------------------------------------------------------------------
# PAIRED STATUS WRITES
# ---------------------------------------------------------------------
def _mark_booking_payment(booking: Booking, new: str):
    if booking.payment_status == new:
        return
    ensure_transition("booking payment status", booking.payment_status, new)
    booking.payment_status = new

    if new == "paid" and booking.status == "pending":
        booking.status = "confirmed"


def _sync_booking_payment(booking: Booking, payment_status: str):
    paired = PAYMENT_TO_BOOKING.get(PaymentStatus(payment_status))
    if paired:
        _mark_booking_payment(booking, paired.value)


def _mark_payment(payment: Payment, new: str):
    ensure_transition("payment status", payment.status, new)
    payment.status = new
    if new == "refunded" and payment.refund_amount is None:
        payment.refund_amount = payment.amount


def _commit(db: Session):
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


# ---------------------------------------------------------------------
# BOOKING CREATION
# ---------------------------------------------------------------------
def get_bookable_space(db: Session, space_id: int) -> Space:
    space = (
        db.query(Space)
        .join(Location)
        .filter(
            Space.id == space_id,
            Space.is_active == True,
            Location.is_active == True,
        )
        .first()
    )
    if not space:
        raise HTTPException(status_code=404, detail="Space not found")
    return space


def create_booking(db: Session, profile: Profile, data: BookingCreate) -> Booking:
    space = get_bookable_space(db, data.space_id)

    if data.booking_date < date.today():
        raise HTTPException(status_code=400, detail="Cannot book past dates")

    start_time, end_time, total_hours = booking_window(
        data.booking_date, data.start_hour, data.duration
    )

    booking = Booking(
        user_id=profile.id,
        space_id=space.id,
        start_time=start_time,
        end_time=end_time,
        total_hours=total_hours,
        total_amount=calculate_total_amount(space.price_per_month, data.duration),
        notes=data.notes,
        status="pending",
        payment_status="pending",
    )

    db.add(booking)
    db.commit()
    db.refresh(booking)

    logger.bind(log_type="booking").info(
        f"Booking Created | User={profile.email} | Space={space.id} | Amount={booking.total_amount}"
    )

    return booking


def get_own_booking(db: Session, profile: Profile, booking_id: int) -> Booking:
    booking = db.query(Booking).filter(
        Booking.id == booking_id,
        Booking.user_id == profile.id
    ).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


# ---------------------------------------------------------------------
# GATEWAY ORDER
# ---------------------------------------------------------------------
def create_order(db: Session, booking: Booking, amount: float) -> str:
    if booking.payment_status in ("paid", "refunded"):
        raise PaymentGatewayError(f"Booking is already {booking.payment_status}")
    if booking.status in ("cancelled", "completed"):
        raise PaymentGatewayError(f"Booking is {booking.status}")
    # the order is always raised for the stored total
    if round(amount, 2) != round(booking.total_amount, 2):
        raise PaymentGatewayError("Amount does not match booking total")
    amount = booking.total_amount

    try:
        rp_order = razorpay_client.order.create({
            "amount": to_minor_units(amount),
            "currency": CURRENCY,
            "receipt": f"booking_{booking.id}"
        })
    except (BadRequestError, GatewayError, ServerError) as e:
        logger.bind(log_type="payment").error(
            f"Order creation failed | Booking={booking.id} | {e}"
        )
        raise PaymentGatewayError(str(e)) from e

    order_id = rp_order["id"]

    db.add(Payment(
        booking_id=booking.id,
        amount=amount,
        currency=CURRENCY,
        status="created",
        razorpay_order_id=order_id,
    ))
    booking.razorpay_order_id = order_id
    _commit(db)

    logger.bind(log_type="payment").info(
        f"Order Created | Booking={booking.id} | Order={order_id} | Amount={amount}"
    )

    return order_id


def find_order_payment(db: Session, booking: Booking, order_id: str) -> Payment | None:
    return db.query(Payment).filter(
        Payment.booking_id == booking.id,
        Payment.razorpay_order_id == order_id
    ).first()


# ---------------------------------------------------------------------
# VERIFY PAYMENT
# ---------------------------------------------------------------------
def verify_payment(
    db: Session,
    booking: Booking,
    razorpay_order_id: str,
    razorpay_payment_id: str,
    razorpay_signature: str,
) -> dict:
    if booking.payment_status == "paid":
        return {"message": "Payment already verified"}
    if booking.payment_status == "refunded":
        raise HTTPException(status_code=400, detail="Payment for this booking was refunded")

    payment = find_order_payment(db, booking, razorpay_order_id)

    # a failed order is spent; checkout needs a fresh one
    if payment and payment.status == "failed":
        raise HTTPException(
            status_code=400,
            detail="Payment on this order failed. Create a new order to retry"
        )

    if booking.razorpay_order_id != razorpay_order_id:
        raise HTTPException(status_code=400, detail="Order does not belong to this booking")

    if not payment:
        payment = Payment(
            booking_id=booking.id,
            amount=booking.total_amount,
            currency=CURRENCY,
            status="created",
            razorpay_order_id=razorpay_order_id,
        )
        db.add(payment)

    payment.razorpay_payment_id = razorpay_payment_id
    payment.razorpay_signature = razorpay_signature

    try:
        razorpay_client.utility.verify_payment_signature({
            "razorpay_order_id": razorpay_order_id,
            "razorpay_payment_id": razorpay_payment_id,
            "razorpay_signature": razorpay_signature,
        })
    except SignatureVerificationError:
        _mark_payment(payment, "failed")
        _sync_booking_payment(booking, "failed")
        booking.razorpay_order_id = None
        _commit(db)

        logger.bind(log_type="payment").warning(
            f"Signature mismatch | Booking={booking.id} | Order={razorpay_order_id}"
        )
        raise HTTPException(status_code=400, detail="Invalid payment signature")

    _mark_payment(payment, "captured")
    booking.razorpay_payment_id = razorpay_payment_id
    _sync_booking_payment(booking, "captured")
    _commit(db)

    logger.bind(log_type="payment").info(
        f"Payment Verified | Booking={booking.id} | Payment={razorpay_payment_id}"
    )

    return {"message": "Payment verified successfully"}


# ---------------------------------------------------------------------
# ADMIN MUTATIONS
# ---------------------------------------------------------------------
def set_booking_status(db: Session, booking: Booking, new: str, actor: str) -> Booking:
    old = booking.status
    ensure_transition("booking status", old, new)
    booking.status = new
    _commit(db)

    logger.bind(log_type="admin", actor=actor).info(
        f"Booking {booking.id} status {old} -> {new}"
    )
    return booking


def set_booking_payment_status(db: Session, booking: Booking, new: str, actor: str) -> Booking:
    old = booking.payment_status
    ensure_transition("booking payment status", old, new)

    payment = booking.payments[-1] if booking.payments else None
    paired = BOOKING_TO_PAYMENT.get(BookingPaymentStatus(new))

    try:
        _mark_booking_payment(booking, new)
        if payment is not None and paired is not None and payment.status != paired.value:
            _mark_payment(payment, paired.value)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.bind(log_type="admin", actor=actor).info(
        f"Booking {booking.id} payment status {old} -> {new}"
    )
    return booking


def set_payment_status(db: Session, payment: Payment, new: str, actor: str) -> Payment:
    old = payment.status

    try:
        _mark_payment(payment, new)
        _sync_booking_payment(payment.booking, new)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.bind(log_type="admin", actor=actor).info(
        f"Payment {payment.id} status {old} -> {new} (booking {payment.booking_id})"
    )
    return payment


def refund_payment(db: Session, payment: Payment, actor: str) -> Payment:
    return set_payment_status(db, payment, "refunded", actor)
