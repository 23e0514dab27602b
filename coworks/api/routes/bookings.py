from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from coworks.core.config import CURRENCY, CHECKOUT_NAME, RAZORPAY_KEY_ID
from coworks.core.dependencies import get_db, get_current_profile
from coworks.models.booking import Booking
from coworks.models.profile import Profile
from coworks.models.space import Space
from coworks.schemas.booking import BookingCreate, BookingOut, CheckoutOptions, MyBooking
from coworks.services import lifecycle
from coworks.utils.pricing import to_minor_units

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ---------------------------------------------------------------------
# CREATE BOOKING (pending / pending)
# ---------------------------------------------------------------------
@router.post("/", response_model=BookingOut)
def create_booking(
    data: BookingCreate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    return lifecycle.create_booking(db, profile, data)


# ---------------------------------------------------------------------
# USER - MY BOOKINGS
# ---------------------------------------------------------------------
@router.get("/my", response_model=list[MyBooking])
def my_bookings(
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    return (
        db.query(Booking)
        .options(joinedload(Booking.space).joinedload(Space.location))
        .filter(Booking.user_id == profile.id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )


# ---------------------------------------------------------------------
# HOSTED CHECKOUT OPTIONS
# ---------------------------------------------------------------------
@router.get("/{booking_id}/checkout", response_model=CheckoutOptions)
def checkout_options(
    booking_id: int,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    booking = lifecycle.get_own_booking(db, profile, booking_id)

    if not booking.razorpay_order_id:
        raise HTTPException(status_code=400, detail="Payment order not created yet")

    payment = lifecycle.find_order_payment(db, booking, booking.razorpay_order_id)
    amount = payment.amount if payment else booking.total_amount

    return CheckoutOptions(
        key=RAZORPAY_KEY_ID,
        amount=to_minor_units(amount),
        currency=CURRENCY,
        order_id=booking.razorpay_order_id,
        name=CHECKOUT_NAME,
        description=f"Booking for {booking.space.name}",
        prefill={"email": profile.email},
    )
