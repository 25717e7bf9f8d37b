"""Tests for weighted-average costing and purchase recording."""

from decimal import Decimal

import pytest

from studio.core.entities.inventory_log import StockAdjustedLog
from studio.core.exceptions import InventoryItemNotFoundError, ValidationError
from studio.core.services import WeightedAverageCostLedger, purchase_notes, weighted_average_cost
from studio.core.services.costing import format_quantity


class TestWeightedAverageCost:
    def test_first_purchase_uses_purchase_price(self):
        assert weighted_average_cost(Decimal("0"), Decimal("0"), Decimal("10"), Decimal("500")) == (
            Decimal("10"),
            Decimal("50"),
        )

    def test_blends_with_stock_on_hand(self):
        new_stock, new_cost = weighted_average_cost(
            Decimal("10"), Decimal("50"), Decimal("10"), Decimal("700")
        )
        assert new_stock == Decimal("20")
        assert new_cost == Decimal("60")

    def test_negative_stock_uses_purchase_price(self):
        new_stock, new_cost = weighted_average_cost(
            Decimal("-4"), Decimal("5"), Decimal("10"), Decimal("1000")
        )
        assert new_stock == Decimal("6")
        assert new_cost == Decimal("100")

    def test_fractional_quantities(self):
        new_stock, new_cost = weighted_average_cost(
            Decimal("2.5"), Decimal("40"), Decimal("2.5"), Decimal("150")
        )
        assert new_stock == Decimal("5.0")
        assert new_cost == Decimal("50")


class TestPurchaseNotes:
    def test_with_supplier(self):
        notes = purchase_notes(Decimal("10"), "kg", Decimal("50"), "₹", "Acme Clay")
        assert notes == "Purchase: 10 kg @ ₹50.00/kg from Acme Clay"

    def test_without_supplier(self):
        notes = purchase_notes(Decimal("2.50"), "l", Decimal("12.346"), "$", None)
        assert notes == "Purchase: 2.5 l @ $12.35/l"

    @pytest.mark.parametrize(
        ("value", "text"),
        [(Decimal("10.00"), "10"), (Decimal("1E+1"), "10"), (Decimal("0.250"), "0.25")],
    )
    def test_format_quantity(self, value, text):
        assert format_quantity(value) == text


@pytest.fixture
def ledger(inventory_store, log_store, expense_store, settings_store):
    return WeightedAverageCostLedger(
        inventory_store=inventory_store,
        log_store=log_store,
        expense_store=expense_store,
        settings_store=settings_store,
        expense_category="Cost of Sale",
    )


class TestRecordPurchase:
    async def test_first_purchase(self, ledger, items):
        items[1].current_stock = Decimal("0")
        items[1].current_cost = Decimal("0")

        record = await ledger.record_purchase(1, Decimal("10"), Decimal("500"))

        assert record.item.current_stock == Decimal("10")
        assert record.item.current_cost == Decimal("50")

    async def test_blended_purchase_writes_log_and_expense(
        self, ledger, log_store, expense_store
    ):
        record = await ledger.record_purchase(
            1, Decimal("10"), Decimal("700"), supplier="Acme", performed_by="admin-1"
        )

        assert record.item.current_stock == Decimal("20")
        assert record.item.current_cost == Decimal("60")

        log = log_store.logs[0]
        assert isinstance(log, StockAdjustedLog)
        assert log.is_purchase is True
        assert log.supplier == "Acme"
        assert log.quantity == Decimal("10")
        assert log.old_value.stock == Decimal("10")
        assert log.old_value.cost == Decimal("50")
        assert log.new_value.cost == Decimal("60")
        assert log.notes == "Purchase: 10 kg @ ₹70.00/kg from Acme"

        expense_store.get_or_create_category.assert_awaited_once_with("Cost of Sale")
        assert record.expense.id == 42
        assert record.expense.amount == Decimal("700")
        assert record.expense.category_id == 3
        assert record.expense.description == "Clay"

    @pytest.mark.parametrize(
        ("quantity", "total", "field"),
        [("0", "10", "quantity"), ("-1", "10", "quantity"), ("5", "0", "total_cost")],
    )
    async def test_rejects_non_positive(self, ledger, inventory_store, quantity, total, field):
        with pytest.raises(ValidationError) as exc_info:
            await ledger.record_purchase(1, Decimal(quantity), Decimal(total))
        assert exc_info.value.details["field"] == field
        inventory_store.update_item.assert_not_called()

    async def test_missing_item(self, ledger, expense_store):
        with pytest.raises(InventoryItemNotFoundError):
            await ledger.record_purchase(99, Decimal("1"), Decimal("1"))
        expense_store.create_expense.assert_not_called()
