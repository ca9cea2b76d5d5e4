from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..core.database import get_db
from ..services.booking_service import BookingService
from ..schemas.booking import SlotResponse

router = APIRouter(tags=["Slots"])

@router.get("/slots", response_model=List[SlotResponse])
async def list_available_slots(db: Session = Depends(get_db)):
    """List unbooked slots, earliest first. No authentication required."""
    return BookingService(db).list_available_slots()
