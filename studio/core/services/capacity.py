"""
Session capacity checker.

Read-only: sums the headcount of active bookings in a slot and compares it to
the studio-wide ceiling from the settings row.
"""

from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from studio.config import get_logger
from studio.core.entities.booking import (
    CapacityCheck,
    DayCapacity,
    SessionTime,
    SlotCapacity,
)
from studio.core.interfaces import IBookingStore, ISettingsStore

logger = get_logger(__name__)


class CapacityChecker:
    """Accepts or rejects a party size for one session slot."""

    def __init__(self, booking_store: IBookingStore, settings_store: ISettingsStore):
        self._booking_store = booking_store
        self._settings_store = settings_store

    async def max_capacity(self) -> int:
        settings = await self._settings_store.get_or_create()
        return settings.max_persons_per_class

    async def check_capacity(
        self,
        session_date: date,
        session_time: SessionTime,
        requested_pax: int,
        excluding_booking_id: int | None = None,
    ) -> CapacityCheck:
        """
        Check whether ``requested_pax`` more people fit into the slot.

        Cancelled bookings are ignored. When editing a booking pass its id as
        ``excluding_booking_id`` so its current headcount is not counted twice.
        A rejection is returned, not raised.
        """
        max_capacity = await self.max_capacity()
        current = await self._booking_store.sum_booked_people(
            session_date,
            session_time,
            excluding_booking_id=excluding_booking_id,
        )
        accepted = current + requested_pax <= max_capacity
        if not accepted:
            logger.info(
                "capacity_rejected",
                session_date=session_date.isoformat(),
                session_time=session_time.value,
                requested=requested_pax,
                current=current,
                max_capacity=max_capacity,
            )
        return CapacityCheck(
            accepted=accepted,
            current_capacity=current,
            max_capacity=max_capacity,
            spots_remaining=max_capacity - current,
        )

    async def get_session_capacity(
        self, start_date: date, end_date: date
    ) -> list[DayCapacity]:
        """Per-slot occupancy for every date in range that has active bookings."""
        max_capacity = await self.max_capacity()
        bookings = await self._booking_store.list_bookings(
            date_from=start_date,
            date_to=end_date,
            include_cancelled=False,
        )

        booked: dict[date, dict[SessionTime, int]] = defaultdict(
            lambda: {SessionTime.SESSION_1: 0, SessionTime.SESSION_2: 0}
        )
        for booking in bookings:
            booked[booking.session_date][booking.session_time] += booking.number_of_people

        return [
            DayCapacity(
                session_date=day,
                max_capacity=max_capacity,
                session_1=_slot(slots[SessionTime.SESSION_1], max_capacity),
                session_2=_slot(slots[SessionTime.SESSION_2], max_capacity),
            )
            for day, slots in sorted(booked.items())
        ]


def _slot(booked: int, max_capacity: int) -> SlotCapacity:
    percentage = (Decimal(booked) * 100 / max_capacity).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return SlotCapacity(
        booked=booked,
        available=max_capacity - booked,
        percentage=int(percentage),
    )
