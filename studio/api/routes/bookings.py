"""Booking endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from studio.api.dependencies import (
    get_booking_repo,
    get_create_booking_use_case,
    get_delete_booking_use_case,
    get_update_booking_use_case,
    require_user,
)
from studio.application.dto.requests import CreateBookingRequest, UpdateBookingRequest
from studio.application.dto.responses import (
    BookingDeletedResponse,
    BookingListResponse,
    BookingMutationResponse,
    BookingResponse,
    ErrorResponse,
)
from studio.application.use_cases import (
    CreateBookingUseCase,
    DeleteBookingUseCase,
    UpdateBookingUseCase,
)
from studio.core.entities.booking import BookingStatus, SessionTime
from studio.core.entities.user import Caller
from studio.core.exceptions import BookingNotFoundError
from studio.core.interfaces import IBookingStore

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    date_: date | None = Query(default=None, alias="date"),
    start_date: date | None = None,
    end_date: date | None = None,
    session_time: SessionTime | None = None,
    status: BookingStatus | None = None,
    store: IBookingStore = Depends(get_booking_repo),
) -> BookingListResponse:
    """List bookings for one date or a date range."""
    if date_ is not None:
        start_date = end_date = date_
    bookings = await store.list_bookings(
        date_from=start_date,
        date_to=end_date,
        session_time=session_time,
        status=status,
    )
    return BookingListResponse(
        bookings=[BookingResponse.from_entity(b) for b in bookings],
        total=len(bookings),
    )


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_booking(
    booking_id: int,
    store: IBookingStore = Depends(get_booking_repo),
) -> BookingResponse:
    booking = await store.get_booking(booking_id)
    if booking is None:
        raise BookingNotFoundError(booking_id)
    return BookingResponse.from_entity(booking)


@router.post(
    "",
    response_model=BookingMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_booking(
    request: CreateBookingRequest,
    user: Caller = Depends(require_user),
    use_case: CreateBookingUseCase = Depends(get_create_booking_use_case),
) -> BookingMutationResponse:
    """Create a booking; consumes the cost-of-sale recipe for every person."""
    result = await use_case.execute(request, user)
    return use_case.to_response(result)


@router.patch(
    "/{booking_id}",
    response_model=BookingMutationResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_booking(
    booking_id: int,
    request: UpdateBookingRequest,
    user: Caller = Depends(require_user),
    use_case: UpdateBookingUseCase = Depends(get_update_booking_use_case),
) -> BookingMutationResponse:
    """Partially update a booking; stock follows status and party size."""
    result = await use_case.execute(booking_id, request, user)
    return use_case.to_response(result)


@router.delete(
    "/{booking_id}",
    response_model=BookingDeletedResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_booking(
    booking_id: int,
    user: Caller = Depends(require_user),
    use_case: DeleteBookingUseCase = Depends(get_delete_booking_use_case),
) -> BookingDeletedResponse:
    """Delete a booking and restore the stock it still holds."""
    result = await use_case.execute(booking_id, user)
    return use_case.to_response(result)
