"""Tests for the AuditLog read service."""

from decimal import Decimal

import pytest

from studio.core.entities.inventory_log import (
    AutoConsumedLog,
    StockAdjustedLog,
    StockSnapshot,
)
from studio.core.services import AuditLog


def _consumed(item_id: int, quantity: str, booking_id: int = 4) -> AutoConsumedLog:
    return AutoConsumedLog(
        item_id=item_id,
        old_value=StockSnapshot(stock=Decimal("0")),
        new_value=StockSnapshot(stock=Decimal("0")),
        quantity=Decimal(quantity),
        booking_id=booking_id,
    )


def _adjusted(item_id: int, quantity: str, **extra) -> StockAdjustedLog:
    return StockAdjustedLog(
        item_id=item_id,
        old_value=StockSnapshot(stock=Decimal("0"), cost=Decimal("0")),
        new_value=StockSnapshot(stock=Decimal("0"), cost=Decimal("0")),
        quantity=Decimal(quantity),
        **extra,
    )


@pytest.fixture
def audit(log_store):
    return AuditLog(log_store)


class TestBookingBalance:
    async def test_nets_per_item(self, audit, log_store):
        for log in (
            _consumed(1, "-6"),
            _consumed(2, "-3"),
            _consumed(1, "-4"),
            _adjusted(1, "10", booking_id=4),
            _consumed(1, "-1", booking_id=5),
        ):
            await log_store.add_log(log)

        assert await audit.booking_balance(4) == {1: Decimal("0"), 2: Decimal("-3")}

    async def test_unknown_booking(self, audit):
        assert await audit.booking_balance(4) == {}


class TestListPurchases:
    async def test_only_reversible_purchases(self, audit, log_store):
        purchase = await log_store.add_log(_adjusted(1, "10", is_purchase=True))
        await log_store.add_log(_adjusted(1, "5"))
        await log_store.add_log(_adjusted(1, "-10", reversed_log_id=99))
        await log_store.add_log(_consumed(1, "-2"))

        purchases = await audit.list_purchases(1)
        assert [p.id for p in purchases] == [purchase.id]

    async def test_list_logs_passes_limit(self, audit, log_store):
        await audit.list_logs(1, limit=5)
        log_store.list_logs.assert_awaited_once_with(1, limit=5)
