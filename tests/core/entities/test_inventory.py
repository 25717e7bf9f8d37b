"""Tests for inventory entities."""

from decimal import Decimal

from studio.core.entities.inventory import CostOfSaleItem, InventoryItem


class TestInventoryItem:
    def test_defaults(self):
        item = InventoryItem(name="Clay")
        assert item.current_stock == Decimal("0")
        assert item.current_cost == Decimal("0")
        assert item.unit == "unit"
        assert item.is_deleted is False

    def test_total_value(self):
        item = InventoryItem(name="Clay", current_stock=Decimal("20"), current_cost=Decimal("60"))
        assert item.total_value == Decimal("1200")

    def test_negative_stock_allowed(self):
        item = InventoryItem(name="Glaze", current_stock=Decimal("-4"), current_cost=Decimal("5"))
        assert item.total_value == Decimal("-20")

    def test_low_stock_requires_reorder_level(self):
        item = InventoryItem(name="Clay", current_stock=Decimal("0"))
        assert item.is_low_stock is False

    def test_low_stock_at_reorder_level(self):
        item = InventoryItem(name="Clay", current_stock=Decimal("5"), reorder_level=Decimal("5"))
        assert item.is_low_stock is True
        item.current_stock = Decimal("5.01")
        assert item.is_low_stock is False


class TestCostOfSaleItem:
    def test_quantity_for_people(self):
        cos = CostOfSaleItem(item_id=1, quantity_per_person=Decimal("2"))
        assert cos.quantity_for(3) == Decimal("6")

    def test_quantity_for_negative_difference(self):
        cos = CostOfSaleItem(item_id=1, quantity_per_person=Decimal("0.5"))
        assert cos.quantity_for(-2) == Decimal("-1.0")
