from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from coworks.db.session import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)
    space_id = Column(Integer, ForeignKey("spaces.id"), nullable=False)

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    total_hours = Column(Float, nullable=False)
    total_amount = Column(Float, nullable=False)

    status = Column(String, nullable=False, default="pending")
    payment_status = Column(String, nullable=False, default="pending")

    razorpay_order_id = Column(String, nullable=True)
    razorpay_payment_id = Column(String, nullable=True)

    notes = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    profile = relationship("Profile", back_populates="bookings")
    space = relationship("Space", back_populates="bookings")
    payments = relationship(
        "Payment",
        back_populates="booking",
        order_by="Payment.id"
    )
