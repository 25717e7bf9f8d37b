"""Recording mock stores for engine service tests."""

import itertools
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from studio.core.entities.app_settings import AppSettings
from studio.core.entities.expense import ExpenseCategory
from studio.core.entities.inventory import CostOfSaleItem, InventoryItem


@pytest.fixture
def items() -> dict[int, InventoryItem]:
    return {
        1: InventoryItem(
            id=1, name="Clay", unit="kg", current_stock=Decimal("10"), current_cost=Decimal("50")
        ),
        2: InventoryItem(
            id=2, name="Glaze", unit="ml", current_stock=Decimal("100"), current_cost=Decimal("2")
        ),
    }


@pytest.fixture
def inventory_store(items):
    store = AsyncMock()

    async def get_item(item_id, include_deleted=False):
        return items.get(item_id)

    async def update_item(item):
        items[item.id] = item
        return item

    store.get_item.side_effect = get_item
    store.update_item.side_effect = update_item
    return store


@pytest.fixture
def log_store():
    store = AsyncMock()
    store.logs = []
    ids = itertools.count(1)

    async def add_log(log):
        log.id = next(ids)
        store.logs.append(log)
        return log

    async def get_log(log_id):
        return next((log for log in store.logs if log.id == log_id), None)

    async def delete_log(log_id):
        before = len(store.logs)
        store.logs[:] = [log for log in store.logs if log.id != log_id]
        return len(store.logs) < before

    async def list_booking_logs(booking_id):
        return [log for log in store.logs if log.booking_id == booking_id]

    async def list_purchases(item_id):
        return [log for log in reversed(store.logs) if log.item_id == item_id]

    async def list_logs(item_id, limit=100):
        return [log for log in reversed(store.logs) if log.item_id == item_id][:limit]

    store.add_log.side_effect = add_log
    store.get_log.side_effect = get_log
    store.delete_log.side_effect = delete_log
    store.list_booking_logs.side_effect = list_booking_logs
    store.list_purchases.side_effect = list_purchases
    store.list_logs.side_effect = list_logs
    return store


@pytest.fixture
def cost_of_sale_store():
    store = AsyncMock()
    store.list_items.return_value = [
        CostOfSaleItem(id=1, item_id=1, quantity_per_person=Decimal("2")),
    ]
    return store


@pytest.fixture
def expense_store():
    store = AsyncMock()
    store.get_or_create_category.return_value = ExpenseCategory(id=3, name="Cost of Sale")

    async def create_expense(expense):
        expense.id = 42
        return expense

    store.create_expense.side_effect = create_expense
    return store


@pytest.fixture
def settings_store():
    store = AsyncMock()
    store.get_or_create.return_value = AppSettings(max_persons_per_class=10)
    return store


@pytest.fixture
def booking_store():
    store = AsyncMock()
    store.sum_booked_people.return_value = 0
    store.list_bookings.return_value = []
    return store
