"""Fixtures for end-to-end flows against a migrated SQLite database."""

from decimal import Decimal

import pytest

from studio.application.dto.requests import (
    CreateCostOfSaleItemRequest,
    CreateInventoryItemRequest,
)
from studio.application.use_cases import CreateInventoryItemUseCase, ManageCostOfSaleUseCase
from studio.core.entities.inventory import InventoryItem
from studio.infrastructure.storage.sqlite import get_inventory_store


@pytest.fixture
async def clay(migrated_db, staff) -> InventoryItem:
    """Clay at 100 kg, 50 per kg, consumed at 2 kg per person."""
    result = await CreateInventoryItemUseCase().execute(
        CreateInventoryItemRequest(
            name="Clay",
            unit="kg",
            current_stock=Decimal("100"),
            current_cost=Decimal("50"),
        ),
        staff,
    )
    await ManageCostOfSaleUseCase().add(
        CreateCostOfSaleItemRequest(
            item_id=result.item.id, quantity_per_person=Decimal("2")
        ),
        staff,
    )
    return result.item


@pytest.fixture
def stock_of():
    async def _stock_of(item_id: int) -> Decimal:
        store = await get_inventory_store()
        item = await store.get_item(item_id, include_deleted=True)
        return item.current_stock

    return _stock_of
