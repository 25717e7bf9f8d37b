"""
Update Inventory Item Use Case.

Manual edits with audit trail.
"""

from typing import Any

from studio.application.dto.requests import UpdateInventoryItemRequest
from studio.application.dto.responses import InventoryItemResponse
from studio.application.services import TransactionFactory, get_default_transaction
from studio.application.use_cases.create_inventory_item import InventoryItemResult
from studio.config import get_logger
from studio.core.entities.base import utc_now
from studio.core.entities.inventory import InventoryPriceHistory
from studio.core.entities.inventory_log import (
    CostSnapshot,
    InventoryLog,
    PriceChangedLog,
    StockAdjustedLog,
    StockSnapshot,
    UpdatedLog,
)
from studio.core.entities.user import Caller
from studio.core.exceptions import InventoryItemNotFoundError
from studio.core.interfaces import IInventoryLogStore, IInventoryStore

logger = get_logger(__name__)

_DETAIL_FIELDS = ("name", "unit", "description", "reorder_level")


class UpdateInventoryItemUseCase:
    """
    Apply a manual edit to an inventory item.

    A stock change is logged as a manual STOCK_ADJUSTED entry (never a
    purchase), a cost change as a price history row plus PRICE_CHANGED. Edits
    to the remaining fields get one UPDATED entry, written only when neither
    of the other two was.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        log_store: IInventoryLogStore | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._inventory_store = inventory_store
        self._log_store = log_store
        self._transaction = transaction or get_default_transaction()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from studio.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_log_store(self) -> IInventoryLogStore:
        if self._log_store is None:
            from studio.infrastructure.storage.sqlite import get_inventory_log_store

            self._log_store = await get_inventory_log_store()
        return self._log_store

    async def execute(
        self, item_id: int, request: UpdateInventoryItemRequest, user: Caller
    ) -> InventoryItemResult:
        """Execute update inventory item use case."""
        inv_store = await self._get_inventory_store()
        log_store = await self._get_log_store()
        changes = request.model_dump(exclude_unset=True, exclude={"reason"})

        async with self._transaction():
            item = await inv_store.get_item(item_id)
            if item is None:
                raise InventoryItemNotFoundError(item_id)

            old_stock = item.current_stock
            old_cost = item.current_cost
            new_stock = changes.get("current_stock")
            new_cost = changes.get("current_cost")
            stock_changed = new_stock is not None and new_stock != old_stock
            cost_changed = new_cost is not None and new_cost != old_cost

            old_details: dict[str, Any] = {}
            new_details: dict[str, Any] = {}
            for name in _DETAIL_FIELDS:
                if name not in changes:
                    continue
                if name in ("name", "unit") and changes[name] is None:
                    continue
                if changes[name] != getattr(item, name):
                    old_details[name] = getattr(item, name)
                    new_details[name] = changes[name]

            if not (stock_changed or cost_changed or new_details):
                return InventoryItemResult(item=item)

            for name, value in new_details.items():
                setattr(item, name, value)
            if stock_changed:
                item.current_stock = new_stock
            if cost_changed:
                item.current_cost = new_cost
            item.updated_at = utc_now()
            item = await inv_store.update_item(item)

            logs: list[InventoryLog] = []
            if stock_changed:
                logs.append(
                    await log_store.add_log(
                        StockAdjustedLog(
                            item_id=item_id,
                            old_value=StockSnapshot(stock=old_stock),
                            new_value=StockSnapshot(stock=new_stock),
                            quantity=new_stock - old_stock,
                            notes="Manual stock adjustment",
                            performed_by_id=user.id,
                        )
                    )
                )

            if cost_changed:
                await inv_store.add_price_history(
                    InventoryPriceHistory(
                        item_id=item_id,
                        old_price=old_cost,
                        new_price=new_cost,
                        changed_by=user.display_name,
                        reason=request.reason or None,
                    )
                )
                logs.append(
                    await log_store.add_log(
                        PriceChangedLog(
                            item_id=item_id,
                            old_value=CostSnapshot(cost=old_cost),
                            new_value=CostSnapshot(cost=new_cost),
                            notes=request.reason or "Manual price change",
                            performed_by_id=user.id,
                        )
                    )
                )

            if new_details and not logs:
                logs.append(
                    await log_store.add_log(
                        UpdatedLog(
                            item_id=item_id,
                            old_value=old_details,
                            new_value=new_details,
                            notes=f"Updated {', '.join(new_details)}",
                            performed_by_id=user.id,
                        )
                    )
                )

        logger.info(
            "inventory_item_updated",
            item_id=item_id,
            stock_changed=stock_changed,
            cost_changed=cost_changed,
            fields=list(new_details),
        )
        return InventoryItemResult(item=item, logs=logs)

    def to_response(self, result: InventoryItemResult) -> InventoryItemResponse:
        """Convert result to API response."""
        return InventoryItemResponse.from_entity(result.item)
