"""
Create Booking Use Case.

Capacity check, insert and stock consumption.
"""

from dataclasses import dataclass, field

from studio.application.dto.requests import CreateBookingRequest
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
from studio.config import get_logger
from studio.core.entities.booking import Booking
from studio.core.entities.inventory_log import InventoryLog
from studio.core.entities.user import Caller
from studio.core.exceptions import CapacityExceededError
from studio.core.interfaces import IBookingStore
from studio.core.services import CapacityChecker, InventoryConsumptionEngine

logger = get_logger(__name__)


@dataclass
class BookingResult:
    """A booking and the stock movements written with it."""

    booking: Booking
    movements: list[InventoryLog] = field(default_factory=list)


class CreateBookingUseCase:
    """Book a party into a slot and consume its cost-of-sale stock."""

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

    async def execute(self, request: CreateBookingRequest, user: Caller) -> BookingResult:
        """
        Execute create booking use case.

        Capacity check, insert and consumption share one transaction, so two
        concurrent bookings cannot both pass the check for the last spots.
        """
        logger.info(
            "create_booking_started",
            session_date=request.session_date.isoformat(),
            session_time=request.session_time.value,
            people=request.number_of_people,
        )

        booking_store = await self._get_booking_store()
        checker = await self._get_capacity_checker()
        engine = await self._get_consumption_engine()

        booking = Booking(
            student_name=request.student_name,
            student_email=request.student_email or None,
            student_phone=request.student_phone or None,
            number_of_people=request.number_of_people,
            session_date=request.session_date,
            session_time=request.session_time,
            booking_type=request.booking_type,
            status=request.status,
            notes=request.notes or None,
            created_by_id=user.id,
        )

        async with self._transaction():
            # 1. Capacity (cancelled bookings take no spots)
            if booking.is_active:
                check = await checker.check_capacity(
                    booking.session_date,
                    booking.session_time,
                    booking.number_of_people,
                )
                if not check.accepted:
                    raise CapacityExceededError(
                        requested=booking.number_of_people,
                        current_capacity=check.current_capacity,
                        max_capacity=check.max_capacity,
                    )

            # 2. Insert
            booking = await booking_store.create_booking(booking)

            # 3. Consume stock
            movements: list[InventoryLog] = []
            if booking.is_active:
                movements = list(
                    await engine.consume(
                        booking.id,  # type: ignore[arg-type]
                        booking.number_of_people,
                        performed_by=user.id,
                    )
                )

        logger.info(
            "booking_created",
            booking_id=booking.id,
            people=booking.number_of_people,
            movements=len(movements),
        )
        return BookingResult(booking=booking, movements=movements)

    def to_response(self, result: BookingResult) -> BookingMutationResponse:
        """Convert result to API response."""
        return BookingMutationResponse(
            booking=BookingResponse.from_entity(result.booking),
            inventory_movements=[
                InventoryLogResponse.from_entity(log) for log in result.movements
            ],
        )
