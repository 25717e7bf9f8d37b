"""End-to-end booking flows: capacity, consumption, adjustment and restoration."""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from studio.application.dto.requests import (
    CreateBookingRequest,
    UpdateBookingRequest,
    UpdateCostOfSaleItemRequest,
)
from studio.application.use_cases import (
    CreateBookingUseCase,
    DeleteBookingUseCase,
    ManageCostOfSaleUseCase,
    UpdateBookingUseCase,
)
from studio.core.entities.booking import BookingStatus, SessionTime
from studio.core.entities.inventory_log import AutoConsumedLog, StockAdjustedLog
from studio.core.exceptions import CapacityExceededError
from studio.core.services.consumption import RESTORE_NOTES
from studio.infrastructure.storage.sqlite import (
    get_booking_store,
    get_inventory_log_store,
)

SESSION_DATE = date(2026, 5, 2)


def _booking(people: int, **overrides) -> CreateBookingRequest:
    data = {
        "student_name": "Meera",
        "number_of_people": people,
        "session_date": SESSION_DATE,
        "session_time": SessionTime.SESSION_1,
        "status": BookingStatus.CONFIRMED,
    }
    data.update(overrides)
    return CreateBookingRequest(**data)


async def _booking_logs(booking_id: int):
    store = await get_inventory_log_store()
    return await store.list_booking_logs(booking_id)


class TestCapacity:
    async def test_exact_capacity_accepted_one_more_rejected(self, migrated_db, staff):
        use_case = CreateBookingUseCase()

        with pytest.raises(CapacityExceededError) as exc_info:
            await use_case.execute(_booking(11), staff)
        assert exc_info.value.details["spots_remaining"] == 10

        result = await use_case.execute(_booking(10), staff)
        assert result.booking.number_of_people == 10

    async def test_rejected_booking_writes_nothing(self, clay, staff, stock_of):
        use_case = CreateBookingUseCase()
        await use_case.execute(_booking(8), staff)

        with pytest.raises(CapacityExceededError):
            await use_case.execute(_booking(3), staff)

        store = await get_booking_store()
        assert len(await store.list_bookings()) == 1
        assert await stock_of(clay.id) == Decimal("84")

    async def test_edit_excludes_own_headcount(self, migrated_db, staff):
        created = await CreateBookingUseCase().execute(_booking(5), staff)

        updated = await UpdateBookingUseCase().execute(
            created.booking.id, UpdateBookingRequest(number_of_people=10), staff
        )

        assert updated.booking.number_of_people == 10

    async def test_cancelled_booking_frees_its_spots(self, migrated_db, staff):
        created = await CreateBookingUseCase().execute(_booking(4), staff)
        await UpdateBookingUseCase().execute(
            created.booking.id,
            UpdateBookingRequest(status=BookingStatus.CANCELLED),
            staff,
        )

        result = await CreateBookingUseCase().execute(_booking(10), staff)

        assert result.booking.id is not None

    async def test_concurrent_bookings_cannot_both_take_last_spots(self, migrated_db, staff):
        await CreateBookingUseCase().execute(_booking(6), staff)

        outcomes = await asyncio.gather(
            CreateBookingUseCase().execute(_booking(4, student_name="A"), staff),
            CreateBookingUseCase().execute(_booking(4, student_name="B"), staff),
            return_exceptions=True,
        )

        errors = [o for o in outcomes if isinstance(o, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], CapacityExceededError)
        store = await get_booking_store()
        assert await store.sum_booked_people(SESSION_DATE, SessionTime.SESSION_1) == 10


class TestConsumption:
    async def test_round_trip_through_cancellation(self, clay, staff, stock_of):
        created = await CreateBookingUseCase().execute(_booking(3), staff)

        assert await stock_of(clay.id) == Decimal("94")
        [consumed] = created.movements
        assert isinstance(consumed, AutoConsumedLog)
        assert consumed.quantity == Decimal("-6")
        assert consumed.booking_id == created.booking.id

        cancelled = await UpdateBookingUseCase().execute(
            created.booking.id,
            UpdateBookingRequest(status=BookingStatus.CANCELLED),
            staff,
        )

        assert await stock_of(clay.id) == Decimal("100")
        [restored] = cancelled.movements
        assert isinstance(restored, StockAdjustedLog)
        assert restored.quantity == Decimal("6")
        assert restored.notes == RESTORE_NOTES
        assert restored.is_purchase is False

        logs = await _booking_logs(created.booking.id)
        assert [log.quantity for log in logs] == [Decimal("-6"), Decimal("6")]

    async def test_pax_change_moves_only_the_difference(self, clay, staff, stock_of):
        created = await CreateBookingUseCase().execute(_booking(3), staff)

        grown = await UpdateBookingUseCase().execute(
            created.booking.id, UpdateBookingRequest(number_of_people=5), staff
        )
        assert await stock_of(clay.id) == Decimal("90")
        assert grown.movements[0].quantity == Decimal("-4")
        assert grown.movements[0].notes == "Adjusted for people change: 3 → 5"

        shrunk = await UpdateBookingUseCase().execute(
            created.booking.id, UpdateBookingRequest(number_of_people=2), staff
        )
        assert await stock_of(clay.id) == Decimal("96")
        assert shrunk.movements[0].quantity == Decimal("6")

        await DeleteBookingUseCase().execute(created.booking.id, staff)
        assert await stock_of(clay.id) == Decimal("100")

    async def test_restore_is_idempotent(self, clay, staff, stock_of):
        created = await CreateBookingUseCase().execute(_booking(3), staff)
        booking_id = created.booking.id
        await UpdateBookingUseCase().execute(
            booking_id, UpdateBookingRequest(status=BookingStatus.CANCELLED), staff
        )

        deleted = await DeleteBookingUseCase().execute(booking_id, staff)

        assert deleted.movements == []
        assert await stock_of(clay.id) == Decimal("100")
        assert len(await _booking_logs(booking_id)) == 2

    async def test_restore_ignores_later_recipe_changes(self, clay, staff, stock_of):
        created = await CreateBookingUseCase().execute(_booking(3), staff)
        manage = ManageCostOfSaleUseCase()
        [recipe_row] = await manage.list_items()
        await manage.update(
            recipe_row.id,
            UpdateCostOfSaleItemRequest(quantity_per_person=Decimal("5")),
            staff,
        )

        await DeleteBookingUseCase().execute(created.booking.id, staff)

        assert await stock_of(clay.id) == Decimal("100")

    async def test_cancelled_booking_never_consumes(self, clay, staff, stock_of):
        created = await CreateBookingUseCase().execute(
            _booking(4, status=BookingStatus.CANCELLED), staff
        )
        await DeleteBookingUseCase().execute(created.booking.id, staff)

        assert created.movements == []
        assert await stock_of(clay.id) == Decimal("100")

    async def test_reactivation_consumes_again(self, clay, staff, stock_of):
        created = await CreateBookingUseCase().execute(_booking(3), staff)
        booking_id = created.booking.id
        await UpdateBookingUseCase().execute(
            booking_id, UpdateBookingRequest(status=BookingStatus.CANCELLED), staff
        )

        await UpdateBookingUseCase().execute(
            booking_id, UpdateBookingRequest(status=BookingStatus.CONFIRMED), staff
        )
        assert await stock_of(clay.id) == Decimal("94")

        await DeleteBookingUseCase().execute(booking_id, staff)
        assert await stock_of(clay.id) == Decimal("100")

    async def test_no_recipe_is_a_noop(self, migrated_db, staff):
        created = await CreateBookingUseCase().execute(_booking(3), staff)
        assert created.movements == []

    async def test_stock_may_go_negative(self, clay, staff, stock_of):
        for name in ("A", "B", "C", "D", "E", "F"):
            await CreateBookingUseCase().execute(
                _booking(9, student_name=name, session_date=date(2026, 6, ord(name) - 64)),
                staff,
            )

        assert await stock_of(clay.id) == Decimal("-8")
