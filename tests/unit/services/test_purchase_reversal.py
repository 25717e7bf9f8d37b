"""Tests for PurchaseReversal."""

from decimal import Decimal

import pytest

from studio.core.entities.inventory_log import (
    AutoConsumedLog,
    StockAdjustedLog,
    StockSnapshot,
)
from studio.core.exceptions import (
    CorruptAuditDataError,
    InvalidOperationError,
    InventoryItemNotFoundError,
    InventoryLogNotFoundError,
)
from studio.core.services import PurchaseReversal, WeightedAverageCostLedger
from studio.core.services.reversal import EXPENSE_WARNING


@pytest.fixture
def reversal(inventory_store, log_store):
    return PurchaseReversal(inventory_store=inventory_store, log_store=log_store)


@pytest.fixture
def ledger(inventory_store, log_store, expense_store, settings_store):
    return WeightedAverageCostLedger(
        inventory_store=inventory_store,
        log_store=log_store,
        expense_store=expense_store,
        settings_store=settings_store,
    )


class TestReversePurchase:
    async def test_restores_snapshot_exactly(self, reversal, ledger, items, log_store):
        purchase = await ledger.record_purchase(
            1, Decimal("10"), Decimal("700"), supplier="Acme"
        )
        assert items[1].current_stock == Decimal("20")
        assert items[1].current_cost == Decimal("60")

        record = await reversal.reverse_purchase(1, purchase.log.id, performed_by="admin-1")

        assert record.item.current_stock == Decimal("10")
        assert record.item.current_cost == Decimal("50")
        assert record.warning == EXPENSE_WARNING
        assert purchase.log.id not in [log.id for log in log_store.logs]

        reversal_log = record.log
        assert isinstance(reversal_log, StockAdjustedLog)
        assert reversal_log.reversed_log_id == purchase.log.id
        assert reversal_log.id != purchase.log.id
        assert reversal_log.quantity == Decimal("-10")
        assert reversal_log.old_value == StockSnapshot(stock=Decimal("20"), cost=Decimal("60"))
        assert reversal_log.new_value == StockSnapshot(stock=Decimal("10"), cost=Decimal("50"))
        assert reversal_log.notes == f"Purchase reversed: {purchase.log.notes}"
        assert reversal_log.is_purchase is False

    async def test_restores_snapshot_not_recomputation(self, reversal, ledger, items):
        purchase = await ledger.record_purchase(1, Decimal("10"), Decimal("700"))
        # Stock moved after the purchase; reversal still jumps to the snapshot
        items[1].current_stock = Decimal("14")

        record = await reversal.reverse_purchase(1, purchase.log.id)
        assert record.item.current_stock == Decimal("10")

    async def test_reversal_entry_cannot_be_reversed(self, reversal, ledger):
        purchase = await ledger.record_purchase(1, Decimal("10"), Decimal("700"))
        record = await reversal.reverse_purchase(1, purchase.log.id)

        with pytest.raises(InvalidOperationError):
            await reversal.reverse_purchase(1, record.log.id)

    async def test_unknown_log(self, reversal):
        with pytest.raises(InventoryLogNotFoundError):
            await reversal.reverse_purchase(1, 999)

    async def test_log_of_other_item(self, reversal, ledger):
        purchase = await ledger.record_purchase(2, Decimal("10"), Decimal("20"))
        with pytest.raises(InvalidOperationError) as exc_info:
            await reversal.reverse_purchase(1, purchase.log.id)
        assert "does not belong" in exc_info.value.message

    async def test_non_purchase_log(self, reversal, log_store):
        log = await log_store.add_log(
            AutoConsumedLog(
                item_id=1,
                old_value=StockSnapshot(stock=Decimal("10")),
                new_value=StockSnapshot(stock=Decimal("4")),
                quantity=Decimal("-6"),
                booking_id=1,
            )
        )
        with pytest.raises(InvalidOperationError):
            await reversal.reverse_purchase(1, log.id)

    async def test_deleted_item(self, reversal, ledger, items):
        purchase = await ledger.record_purchase(1, Decimal("10"), Decimal("700"))
        del items[1]
        with pytest.raises(InventoryItemNotFoundError):
            await reversal.reverse_purchase(1, purchase.log.id)

    async def test_snapshot_without_cost(self, reversal, log_store):
        log = await log_store.add_log(
            StockAdjustedLog(
                item_id=1,
                old_value=StockSnapshot(stock=Decimal("0")),
                new_value=StockSnapshot(stock=Decimal("10")),
                quantity=Decimal("10"),
                is_purchase=True,
            )
        )
        with pytest.raises(CorruptAuditDataError):
            await reversal.reverse_purchase(1, log.id)
        log_store.delete_log.assert_not_called()
