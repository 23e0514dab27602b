from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from coworks.core.dependencies import AdminSession, get_db, get_admin_session
from coworks.models.booking import Booking
from coworks.models.payment import Payment
from coworks.models.space import Space
from coworks.schemas.booking import BookingDetail, BookingList, BookingStatusUpdate
from coworks.schemas.payment import PaymentDetail, PaymentList, PaymentStatusUpdate
from coworks.services import lifecycle
from coworks.utils.filters import (
    filter_bookings,
    filter_payments,
    summarize_bookings,
    summarize_payments,
)

router = APIRouter(prefix="/admin", tags=["Admin Bookings & Payments"])

BOOKING_JOINS = (
    joinedload(Booking.profile),
    joinedload(Booking.space).joinedload(Space.location),
)


def load_booking_details(db: Session) -> list[BookingDetail]:
    bookings = (
        db.query(Booking)
        .options(*BOOKING_JOINS)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )
    return [BookingDetail.model_validate(b) for b in bookings]


def load_payment_details(db: Session) -> list[PaymentDetail]:
    payments = (
        db.query(Payment)
        .options(
            joinedload(Payment.booking).joinedload(Booking.profile),
            joinedload(Payment.booking).joinedload(Booking.space).joinedload(Space.location),
        )
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .all()
    )
    return [PaymentDetail.model_validate(p) for p in payments]


def get_booking_or_404(db: Session, booking_id: int) -> Booking:
    booking = db.query(Booking).options(*BOOKING_JOINS).filter(Booking.id == booking_id).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


def get_payment_or_404(db: Session, payment_id: int) -> Payment:
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    return payment


# =====================================================================
# BOOKINGS
# =====================================================================
@router.get("/bookings", response_model=BookingList)
def list_bookings(
    q: str = "",
    status: str = "all",
    payment_status: str = "all",
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    bookings = load_booking_details(db)

    return BookingList(
        items=filter_bookings(bookings, q, status, payment_status),
        summary=summarize_bookings(bookings),
    )


@router.get("/bookings/{booking_id}", response_model=BookingDetail)
def booking_details(
    booking_id: int,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    return get_booking_or_404(db, booking_id)


@router.patch("/bookings/{booking_id}/status", response_model=BookingDetail)
def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    booking = get_booking_or_404(db, booking_id)
    return lifecycle.set_booking_status(db, booking, data.status, session.email)


@router.patch("/bookings/{booking_id}/payment-status", response_model=BookingDetail)
def update_booking_payment_status(
    booking_id: int,
    data: BookingStatusUpdate,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    booking = get_booking_or_404(db, booking_id)
    return lifecycle.set_booking_payment_status(db, booking, data.status, session.email)


# =====================================================================
# PAYMENTS
# =====================================================================
@router.get("/payments", response_model=PaymentList)
def list_payments(
    q: str = "",
    status: str = "all",
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    payments = load_payment_details(db)

    return PaymentList(
        items=filter_payments(payments, q, status),
        summary=summarize_payments(payments),
    )


@router.patch("/payments/{payment_id}/status", response_model=PaymentDetail)
def update_payment_status(
    payment_id: int,
    data: PaymentStatusUpdate,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    payment = get_payment_or_404(db, payment_id)
    return lifecycle.set_payment_status(db, payment, data.status, session.email)


@router.post("/payments/{payment_id}/refund", response_model=PaymentDetail)
def refund_payment(
    payment_id: int,
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    payment = get_payment_or_404(db, payment_id)
    return lifecycle.refund_payment(db, payment, session.email)
