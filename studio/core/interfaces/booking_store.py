"""Abstract interface for booking storage."""

from abc import ABC, abstractmethod
from datetime import date

from studio.core.entities.booking import Booking, BookingStatus, SessionTime


class IBookingStore(ABC):
    """Interface for booking persistence and capacity aggregation."""

    @abstractmethod
    async def create_booking(self, booking: Booking) -> Booking:
        """Create a booking."""
        pass

    @abstractmethod
    async def get_booking(self, booking_id: int) -> Booking | None:
        """Get booking by ID."""
        pass

    @abstractmethod
    async def update_booking(self, booking: Booking) -> Booking:
        """Update a booking."""
        pass

    @abstractmethod
    async def delete_booking(self, booking_id: int) -> bool:
        """Delete a booking. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_bookings(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        session_time: SessionTime | None = None,
        status: BookingStatus | None = None,
        include_cancelled: bool = True,
    ) -> list[Booking]:
        """List bookings in [date_from, date_to] ordered by date, slot, creation."""
        pass

    @abstractmethod
    async def sum_booked_people(
        self,
        session_date: date,
        session_time: SessionTime,
        excluding_booking_id: int | None = None,
    ) -> int:
        """Sum number_of_people over non-cancelled bookings of one slot."""
        pass
