from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from coworks.core.dependencies import get_db, get_current_profile
from coworks.models.profile import Profile
from coworks.schemas.payment import CreateOrderRequest, VerifyPaymentRequest
from coworks.services import lifecycle

router = APIRouter(prefix="/api/razorpay", tags=["Payments"])


# ---------------------------------------------------------------------
# CREATE ORDER
# ---------------------------------------------------------------------
@router.post("/create-order")
def create_order(
    data: CreateOrderRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    booking = lifecycle.get_own_booking(db, profile, data.bookingId)

    try:
        order_id = lifecycle.create_order(db, booking, data.amount)
    except lifecycle.PaymentGatewayError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    return {"orderId": order_id}


# ---------------------------------------------------------------------
# VERIFY PAYMENT
# ---------------------------------------------------------------------
@router.post("/verify-payment")
def verify_payment(
    data: VerifyPaymentRequest,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    booking = lifecycle.get_own_booking(db, profile, data.bookingId)

    return lifecycle.verify_payment(
        db,
        booking,
        data.razorpay_order_id,
        data.razorpay_payment_id,
        data.razorpay_signature,
    )
