"""Session capacity endpoints."""

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query

from studio.api.dependencies import get_capacity
from studio.application.dto.responses import (
    CapacityCheckResponse,
    DayCapacityResponse,
    SessionCapacityResponse,
)
from studio.core.entities.booking import SessionTime
from studio.core.exceptions import ValidationError
from studio.core.services import CapacityChecker

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.get("/capacity", response_model=SessionCapacityResponse)
async def get_session_capacity(
    start_date: date | None = None,
    end_date: date | None = None,
    checker: CapacityChecker = Depends(get_capacity),
) -> SessionCapacityResponse:
    """
    Occupancy of both slots for each date in the range that has bookings.

    Defaults to the next 30 days.
    """
    start_date = start_date or date.today()
    end_date = end_date or start_date + timedelta(days=30)
    if end_date < start_date:
        raise ValidationError("end_date", "End date must not be before start date", end_date)

    days = await checker.get_session_capacity(start_date, end_date)
    return SessionCapacityResponse(
        max_capacity=await checker.max_capacity(),
        days=[DayCapacityResponse.from_entity(day) for day in days],
    )


@router.get("/capacity/check", response_model=CapacityCheckResponse)
async def check_capacity(
    session_date: date,
    session_time: SessionTime,
    people: int = Query(default=1, gt=0),
    exclude_booking_id: int | None = None,
    checker: CapacityChecker = Depends(get_capacity),
) -> CapacityCheckResponse:
    """Would ``people`` more fit into the slot? A rejection is still a 200."""
    check = await checker.check_capacity(
        session_date,
        session_time,
        people,
        excluding_booking_id=exclude_booking_id,
    )
    return CapacityCheckResponse.from_entity(check)
