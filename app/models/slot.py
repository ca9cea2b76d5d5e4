from sqlalchemy import Column, Integer, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.database import Base

class Slot(Base):
    __tablename__ = "slots"
    __table_args__ = (
        # Re-seeding must not duplicate an interval
        UniqueConstraint("start_at", "end_at", name="uq_slots_start_end"),
    )

    id = Column(Integer, primary_key=True, index=True)
    start_at = Column(DateTime, nullable=False, index=True)
    end_at = Column(DateTime, nullable=False)

    # Relationships
    booking = relationship("Booking", back_populates="slot", uselist=False)

    def __repr__(self):
        return f"<Slot(id={self.id}, start_at='{self.start_at}', end_at='{self.end_at}')>"
