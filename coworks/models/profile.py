from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from coworks.db.session import Base
from coworks.models.enums import ProfileRole


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    phone = Column(String, unique=True, nullable=True)
    role = Column(String, nullable=False, default=ProfileRole.USER.value)
    password_hash = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    bookings = relationship("Booking", back_populates="profile")
