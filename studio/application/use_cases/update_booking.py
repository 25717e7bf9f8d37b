"""
Update Booking Use Case.

Partial edit with capacity and stock follow-up.
"""

from studio.application.dto.requests import UpdateBookingRequest
from studio.application.dto.responses import (
    BookingMutationResponse,
    BookingResponse,
    InventoryLogResponse,
)
from studio.application.services import (
    TransactionFactory,
    get_capacity_checker,
    get_consumption_engine,
    get_default_transaction,
)
from studio.application.use_cases.create_booking import BookingResult
from studio.config import get_logger
from studio.core.entities.base import utc_now
from studio.core.entities.booking import Booking
from studio.core.entities.inventory_log import InventoryLog
from studio.core.entities.user import Caller
from studio.core.exceptions import BookingNotFoundError, CapacityExceededError
from studio.core.interfaces import IBookingStore
from studio.core.services import CapacityChecker, InventoryConsumptionEngine

logger = get_logger(__name__)

# Fields an explicit null clears; null elsewhere means "keep"
_CLEARABLE_FIELDS = {"student_email", "student_phone", "notes"}


def _needs_capacity_check(old: Booking, new: Booking) -> bool:
    if not new.is_active:
        return False
    if not old.is_active:
        return True
    return (
        new.number_of_people != old.number_of_people
        or new.session_date != old.session_date
        or new.session_time != old.session_time
    )


class UpdateBookingUseCase:
    """Edit a booking and move stock to match its new state."""

    def __init__(
        self,
        booking_store: IBookingStore | None = None,
        capacity_checker: CapacityChecker | None = None,
        consumption_engine: InventoryConsumptionEngine | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._booking_store = booking_store
        self._capacity_checker = capacity_checker
        self._consumption_engine = consumption_engine
        self._transaction = transaction or get_default_transaction()

    async def _get_booking_store(self) -> IBookingStore:
        if self._booking_store is None:
            from studio.infrastructure.storage.sqlite import get_booking_store

            self._booking_store = await get_booking_store()
        return self._booking_store

    async def _get_capacity_checker(self) -> CapacityChecker:
        if self._capacity_checker is None:
            self._capacity_checker = await get_capacity_checker()
        return self._capacity_checker

    async def _get_consumption_engine(self) -> InventoryConsumptionEngine:
        if self._consumption_engine is None:
            self._consumption_engine = await get_consumption_engine()
        return self._consumption_engine

    async def execute(
        self, booking_id: int, request: UpdateBookingRequest, user: Caller
    ) -> BookingResult:
        """
        Execute update booking use case.

        Stock follows the status transition:
        active -> cancelled restores, cancelled -> active consumes the new
        party size, and an active booking whose party size changed is
        adjusted by the difference.
        """
        booking_store = await self._get_booking_store()
        checker = await self._get_capacity_checker()
        engine = await self._get_consumption_engine()

        async with self._transaction():
            old = await booking_store.get_booking(booking_id)
            if old is None:
                raise BookingNotFoundError(booking_id)

            changes = {
                key: value
                for key, value in request.model_dump(exclude_unset=True).items()
                if value is not None or key in _CLEARABLE_FIELDS
            }
            updated = old.model_copy(update=changes)
            updated.updated_at = utc_now()

            if _needs_capacity_check(old, updated):
                check = await checker.check_capacity(
                    updated.session_date,
                    updated.session_time,
                    updated.number_of_people,
                    excluding_booking_id=booking_id,
                )
                if not check.accepted:
                    raise CapacityExceededError(
                        requested=updated.number_of_people,
                        current_capacity=check.current_capacity,
                        max_capacity=check.max_capacity,
                    )

            updated = await booking_store.update_booking(updated)

            movements: list[InventoryLog] = []
            if old.is_active and not updated.is_active:
                movements = list(await engine.restore(booking_id, performed_by=user.id))
            elif not old.is_active and updated.is_active:
                movements = list(
                    await engine.consume(
                        booking_id, updated.number_of_people, performed_by=user.id
                    )
                )
            elif updated.is_active and old.number_of_people != updated.number_of_people:
                movements = list(
                    await engine.adjust(
                        booking_id,
                        old.number_of_people,
                        updated.number_of_people,
                        performed_by=user.id,
                    )
                )

        logger.info(
            "booking_updated",
            booking_id=booking_id,
            old_status=old.status.value,
            new_status=updated.status.value,
            old_people=old.number_of_people,
            new_people=updated.number_of_people,
            movements=len(movements),
        )
        return BookingResult(booking=updated, movements=movements)

    def to_response(self, result: BookingResult) -> BookingMutationResponse:
        """Convert result to API response."""
        return BookingMutationResponse(
            booking=BookingResponse.from_entity(result.booking),
            inventory_movements=[
                InventoryLogResponse.from_entity(log) for log in result.movements
            ],
        )
