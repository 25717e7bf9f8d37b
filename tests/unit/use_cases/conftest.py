"""Fixtures for use case tests."""

from contextlib import nullcontext
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from studio.core.entities.booking import Booking, BookingStatus, CapacityCheck, SessionTime
from studio.core.services import CapacityChecker, InventoryConsumptionEngine


@pytest.fixture
def transaction():
    """Records that a unit of work was opened without touching a database."""
    factory = MagicMock(side_effect=lambda: nullcontext())
    return factory


@pytest.fixture
def booking_store():
    store = AsyncMock()

    async def create_booking(booking):
        booking.id = 1
        return booking

    async def update_booking(booking):
        return booking

    store.create_booking.side_effect = create_booking
    store.update_booking.side_effect = update_booking
    store.delete_booking.return_value = True
    return store


@pytest.fixture
def capacity_checker():
    checker = AsyncMock(spec=CapacityChecker)
    checker.check_capacity.return_value = CapacityCheck(
        accepted=True, current_capacity=0, max_capacity=10, spots_remaining=10
    )
    return checker


@pytest.fixture
def consumption_engine():
    engine = AsyncMock(spec=InventoryConsumptionEngine)
    engine.consume.return_value = []
    engine.adjust.return_value = []
    engine.restore.return_value = []
    return engine


@pytest.fixture
def existing_booking() -> Booking:
    return Booking(
        id=1,
        student_name="Meera",
        number_of_people=3,
        session_date=date(2026, 5, 2),
        session_time=SessionTime.SESSION_1,
        status=BookingStatus.CONFIRMED,
    )
