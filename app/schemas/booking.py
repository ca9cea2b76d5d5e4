from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .auth import UserResponse


class SlotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    start_at: datetime
    end_at: datetime


class BookingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Bounded to the storage integer range
    slot_id: int = Field(alias="slotId", gt=0, le=2**31 - 1)


class BookingResponse(BaseModel):
    """A booking with its slot, serialized with camelCase keys."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: int = Field(alias="userId")
    slot_id: int = Field(alias="slotId")
    created_at: datetime = Field(alias="createdAt")
    slot: SlotResponse


class BookingWithUserResponse(BookingResponse):
    user: UserResponse


class BookingCreatedResponse(BaseModel):
    message: str = "Booking successful"
    booking: BookingResponse
