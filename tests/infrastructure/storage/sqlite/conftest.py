"""Pytest fixtures for SQLite storage tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from studio.core.entities.booking import Booking, BookingStatus, SessionTime
from studio.core.entities.inventory import InventoryItem


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def sample_booking() -> Booking:
    return Booking(
        student_name="Meera",
        student_email="meera@example.com",
        number_of_people=3,
        session_date=date(2026, 5, 2),
        session_time=SessionTime.SESSION_1,
        status=BookingStatus.CONFIRMED,
        created_by_id="staff-1",
    )


@pytest.fixture
def sample_item() -> InventoryItem:
    return InventoryItem(
        name="Clay",
        unit="kg",
        current_stock=Decimal("12.500"),
        current_cost=Decimal("48.3333"),
        reorder_level=Decimal("5"),
        created_by_id="staff-1",
    )
