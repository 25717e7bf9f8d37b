"""Tests for SQLiteCostOfSaleStore."""

from decimal import Decimal

import pytest

from studio.core.entities.inventory import CostOfSaleItem, InventoryItem
from studio.core.exceptions import DuplicateCostOfSaleItemError
from studio.infrastructure.storage.sqlite.cost_of_sale_store import SQLiteCostOfSaleStore
from studio.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore


@pytest.fixture
async def items(migrated_db) -> list[InventoryItem]:
    store = SQLiteInventoryStore()
    return [
        await store.create_item(InventoryItem(name="Clay", unit="kg")),
        await store.create_item(InventoryItem(name="Glaze", unit="ml")),
    ]


class TestSQLiteCostOfSaleStore:
    async def test_create_joins_item_details(self, items):
        store = SQLiteCostOfSaleStore()
        created = await store.create(
            CostOfSaleItem(item_id=items[0].id, quantity_per_person=Decimal("0.250"))
        )

        fetched = await store.get(created.id)

        assert fetched.item_name == "Clay"
        assert fetched.item_unit == "kg"
        assert fetched.quantity_per_person == Decimal("0.250")
        assert (await store.get_by_item(items[0].id)).id == created.id
        assert await store.get_by_item(items[1].id) is None

    async def test_one_row_per_item(self, items):
        store = SQLiteCostOfSaleStore()
        await store.create(CostOfSaleItem(item_id=items[0].id, quantity_per_person=Decimal("1")))

        with pytest.raises(DuplicateCostOfSaleItemError):
            await store.create(
                CostOfSaleItem(item_id=items[0].id, quantity_per_person=Decimal("2"))
            )

    async def test_update_delete_and_list(self, items):
        store = SQLiteCostOfSaleStore()
        clay = await store.create(
            CostOfSaleItem(item_id=items[0].id, quantity_per_person=Decimal("1"))
        )
        await store.create(CostOfSaleItem(item_id=items[1].id, quantity_per_person=Decimal("5")))

        clay.quantity_per_person = Decimal("1.5")
        await store.update(clay)
        assert (await store.get(clay.id)).quantity_per_person == Decimal("1.5")

        assert [c.item_name for c in await store.list_items()] == ["Clay", "Glaze"]

        assert await store.delete(clay.id) is True
        assert await store.delete(clay.id) is False
        assert await store.delete_by_item(items[1].id) == 1
        assert await store.list_items() == []
