from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from coworks.db.session import Base


class Space(Base):
    __tablename__ = "spaces"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)

    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="hotdesk")  # hotdesk | meeting_room | private_office
    capacity = Column(Integer, nullable=False, default=1)
    price_per_month = Column(Float, nullable=False, default=0.0)
    description = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    amenities = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    location = relationship("Location", back_populates="spaces")
    bookings = relationship("Booking", back_populates="space")
