from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List
import logging

from ..models.booking import Booking
from ..models.slot import Slot
from ..core.exceptions import SlotConflictError, SlotNotFoundError, StorageError

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL)
UNIQUE_VIOLATION = "23505"

def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a uniqueness violation apart from other integrity failures."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    # SQLite reports constraint kinds only in the message
    return "unique constraint" in str(orig).lower()

class BookingService:
    """Slot availability and booking creation.

    Double-booking is prevented by the unique constraint on
    ``bookings.slot_id``. ``create_booking`` inserts unconditionally and
    translates a uniqueness violation into ``SlotConflictError``; a
    conflicted caller has to re-read availability and pick another slot.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_available_slots(self) -> List[Slot]:
        """Slots without a booking, earliest first."""
        booked_slot_ids = select(Booking.slot_id)

        return (
            self.db.query(Slot)
            .filter(Slot.id.notin_(booked_slot_ids))
            .order_by(Slot.start_at.asc(), Slot.id.asc())
            .all()
        )

    def create_booking(self, user_id: int, slot_id: int) -> Booking:
        """Book slot_id for user_id, or fail with a conflict."""
        try:
            # Slots are never deleted, so this lookup cannot race with writers
            slot = self.db.query(Slot).filter(Slot.id == slot_id).first()
            if not slot:
                raise SlotNotFoundError()

            booking = Booking(user_id=user_id, slot_id=slot_id)
            self.db.add(booking)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc):
                logger.warning(f"Slot {slot_id} already booked; rejected user {user_id}")
                raise SlotConflictError()
            logger.error(f"Integrity error booking slot {slot_id}: {str(exc.orig)}")
            raise StorageError()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Storage error booking slot {slot_id}: {str(exc)}")
            raise StorageError()

        self.db.refresh(booking)
        logger.info(f"User {user_id} booked slot {slot_id} (booking {booking.id})")
        return booking

    def list_user_bookings(self, user_id: int) -> List[Booking]:
        """A user's bookings with their slots, newest first."""
        return (
            self.db.query(Booking)
            .options(joinedload(Booking.slot))
            .filter(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )

    def list_all_bookings(self) -> List[Booking]:
        """Every booking with its slot and owner, newest first."""
        return (
            self.db.query(Booking)
            .options(joinedload(Booking.slot), joinedload(Booking.user))
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )
