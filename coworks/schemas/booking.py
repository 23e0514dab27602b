from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional

from coworks.schemas.profile import ProfileBrief
from coworks.schemas.space import SpaceWithLocation
from coworks.utils.pricing import SUPPORTED_DURATIONS, OPENING_HOUR, CLOSING_HOUR


class BookingCreate(BaseModel):
    space_id: int
    booking_date: date
    start_hour: int = Field(default=9, ge=OPENING_HOUR, le=CLOSING_HOUR)
    duration: int = 1  # months
    notes: Optional[str] = ""

    @field_validator("duration")
    @classmethod
    def supported_duration(cls, value: int):
        if value not in SUPPORTED_DURATIONS:
            raise ValueError(f"Duration must be one of {SUPPORTED_DURATIONS} months")
        return value


class BookingOut(BaseModel):
    id: int
    user_id: int
    space_id: int
    start_time: datetime
    end_time: datetime
    total_hours: float
    total_amount: float
    status: str
    payment_status: str
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BookingDetail(BookingOut):
    """Booking joined with its profile, space and location"""
    profile: ProfileBrief
    space: SpaceWithLocation


class MyBooking(BookingOut):
    space: SpaceWithLocation


class BookingStatusUpdate(BaseModel):
    status: str


class CheckoutOptions(BaseModel):
    key: str
    amount: int  # minor units
    currency: str
    order_id: str
    name: str
    description: str
    prefill: dict


class BookingSummary(BaseModel):
    total: int
    pending: int
    confirmed: int
    cancelled: int
    completed: int
    revenue: float = 0


class BookingList(BaseModel):
    items: list[BookingDetail]
    summary: BookingSummary
