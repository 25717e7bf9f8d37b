"""
Delete Booking Use Case.

Restore held stock, then remove the row.
"""

from dataclasses import dataclass, field

from studio.application.dto.responses import BookingDeletedResponse, InventoryLogResponse
from studio.application.services import (
    TransactionFactory,
    get_consumption_engine,
    get_default_transaction,
)
from studio.config import get_logger
from studio.core.entities.inventory_log import StockAdjustedLog
from studio.core.entities.user import Caller
from studio.core.exceptions import BookingNotFoundError
from studio.core.interfaces import IBookingStore
from studio.core.services import InventoryConsumptionEngine

logger = get_logger(__name__)


@dataclass
class DeleteBookingResult:
    booking_id: int
    movements: list[StockAdjustedLog] = field(default_factory=list)


class DeleteBookingUseCase:
    """Delete a booking and give back the stock it consumed."""

    def __init__(
        self,
        booking_store: IBookingStore | None = None,
        consumption_engine: InventoryConsumptionEngine | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._booking_store = booking_store
        self._consumption_engine = consumption_engine
        self._transaction = transaction or get_default_transaction()

    async def _get_booking_store(self) -> IBookingStore:
        if self._booking_store is None:
            from studio.infrastructure.storage.sqlite import get_booking_store

            self._booking_store = await get_booking_store()
        return self._booking_store

    async def _get_consumption_engine(self) -> InventoryConsumptionEngine:
        if self._consumption_engine is None:
            self._consumption_engine = await get_consumption_engine()
        return self._consumption_engine

    async def execute(self, booking_id: int, user: Caller) -> DeleteBookingResult:
        """
        Execute delete booking use case.

        Restoring a cancelled booking is a no-op because its trail already
        nets to zero, so deletion never credits stock twice.
        """
        booking_store = await self._get_booking_store()
        engine = await self._get_consumption_engine()

        async with self._transaction():
            booking = await booking_store.get_booking(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)

            movements = await engine.restore(booking_id, performed_by=user.id)
            await booking_store.delete_booking(booking_id)

        logger.info("booking_deleted", booking_id=booking_id, movements=len(movements))
        return DeleteBookingResult(booking_id=booking_id, movements=list(movements))

    def to_response(self, result: DeleteBookingResult) -> BookingDeletedResponse:
        """Convert result to API response."""
        return BookingDeletedResponse(
            id=result.booking_id,
            inventory_movements=[
                InventoryLogResponse.from_entity(log) for log in result.movements
            ],
        )
