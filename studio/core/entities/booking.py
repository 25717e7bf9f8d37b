"""Booking domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from studio.core.entities.base import utc_now


class SessionTime(str, Enum):
    """The two fixed daily class slots."""

    SESSION_1 = "SESSION_1"
    SESSION_2 = "SESSION_2"


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class BookingType(str, Enum):
    REGULAR = "REGULAR"
    GIFTS = "GIFTS"
    INFLUENCER = "INFLUENCER"


class Booking(BaseModel):
    """A party booked into one session slot on one calendar day."""

    id: int | None = None
    student_name: str
    student_email: str | None = None
    student_phone: str | None = None
    number_of_people: int = Field(default=1, ge=1)
    session_date: date
    session_time: SessionTime
    booking_type: BookingType = BookingType.REGULAR
    status: BookingStatus = BookingStatus.PENDING
    notes: str | None = None
    created_by_id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        """Cancelled bookings count for neither capacity nor stock."""
        return self.status != BookingStatus.CANCELLED


class CapacityCheck(BaseModel):
    """Outcome of a capacity check. A rejection is a result, not an error."""

    accepted: bool
    current_capacity: int
    max_capacity: int
    spots_remaining: int


class SlotCapacity(BaseModel):
    """Booked headcount of one slot."""

    booked: int = 0
    available: int = 0
    percentage: int = 0


class DayCapacity(BaseModel):
    """Capacity overview of both slots on one date."""

    session_date: date
    max_capacity: int
    session_1: SlotCapacity
    session_2: SlotCapacity
