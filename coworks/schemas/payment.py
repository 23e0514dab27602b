from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from coworks.schemas.booking import BookingDetail


class CreateOrderRequest(BaseModel):
    amount: float = Field(gt=0)
    bookingId: int


class VerifyPaymentRequest(BaseModel):
    bookingId: int
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


class PaymentOut(BaseModel):
    id: int
    booking_id: int
    amount: float
    currency: str
    status: str
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    refund_id: Optional[str] = None
    refund_amount: Optional[float] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentDetail(PaymentOut):
    booking: BookingDetail


class PaymentStatusUpdate(BaseModel):
    status: str


class PaymentSummary(BaseModel):
    total_revenue: float
    pending_amount: float
    refunded_amount: float


class PaymentList(BaseModel):
    items: list[PaymentDetail]
    summary: PaymentSummary
