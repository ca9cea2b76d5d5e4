from sqlalchemy import Column, Integer, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from ..core.database import Base

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # One booking per slot. This constraint is the double-booking guard;
    # BookingService relies on it instead of checking availability first.
    slot_id = Column(Integer, ForeignKey("slots.id"), unique=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="bookings")
    slot = relationship("Slot", back_populates="booking")

    def __repr__(self):
        return f"<Booking(id={self.id}, user_id={self.user_id}, slot_id={self.slot_id})>"
