from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ..core.database import get_db
from ..core.security import TokenPayload
from .deps import require_patient, require_admin
from ..services.booking_service import BookingService
from ..schemas.booking import (
    BookingCreate, BookingCreatedResponse, BookingResponse, BookingWithUserResponse
)

router = APIRouter(tags=["Bookings"])

@router.post("/book", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def book_slot(
    booking_data: BookingCreate,
    token_payload: TokenPayload = Depends(require_patient),
    db: Session = Depends(get_db)
):
    """Book a slot for the authenticated patient.

    Responds 409 when the slot already has a booking. The client should
    fetch /api/slots again and choose another slot.
    """
    booking = BookingService(db).create_booking(token_payload.sub, booking_data.slot_id)

    return BookingCreatedResponse(booking=BookingResponse.model_validate(booking))

@router.get("/my-bookings", response_model=List[BookingResponse])
async def my_bookings(
    token_payload: TokenPayload = Depends(require_patient),
    db: Session = Depends(get_db)
):
    """List the authenticated patient's bookings, newest first."""
    return BookingService(db).list_user_bookings(token_payload.sub)

@router.get("/all-bookings", response_model=List[BookingWithUserResponse])
async def all_bookings(
    _: TokenPayload = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """List every booking with its slot and owner (admin only)."""
    return BookingService(db).list_all_bookings()
