"""Create Inventory Item Use Case."""

from dataclasses import dataclass, field

from studio.application.dto.requests import CreateInventoryItemRequest
from studio.application.dto.responses import InventoryItemResponse
from studio.application.services import TransactionFactory, get_default_transaction
from studio.config import get_logger
from studio.core.entities.inventory import InventoryItem, InventoryPriceHistory
from studio.core.entities.inventory_log import CreatedLog, InventoryLog, ItemSnapshot
from studio.core.entities.user import Caller
from studio.core.interfaces import IInventoryLogStore, IInventoryStore

logger = get_logger(__name__)


@dataclass
class InventoryItemResult:
    """An item and the audit entries written for the change."""

    item: InventoryItem
    logs: list[InventoryLog] = field(default_factory=list)


def item_snapshot(item: InventoryItem) -> ItemSnapshot:
    return ItemSnapshot(
        name=item.name,
        stock=item.current_stock,
        cost=item.current_cost,
        unit=item.unit,
    )


class CreateInventoryItemUseCase:
    """Create an item with its opening price and a CREATED audit entry."""

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
        self, request: CreateInventoryItemRequest, user: Caller
    ) -> InventoryItemResult:
        """Execute create inventory item use case."""
        inv_store = await self._get_inventory_store()
        log_store = await self._get_log_store()

        async with self._transaction():
            # 1. Item
            item = await inv_store.create_item(
                InventoryItem(
                    name=request.name,
                    description=request.description or None,
                    unit=request.unit,
                    current_stock=request.current_stock,
                    current_cost=request.current_cost,
                    reorder_level=request.reorder_level,
                    created_by_id=user.id,
                )
            )

            # 2. Opening price
            await inv_store.add_price_history(
                InventoryPriceHistory(
                    item_id=item.id,  # type: ignore[arg-type]
                    old_price=None,
                    new_price=item.current_cost,
                    changed_by=user.display_name,
                    reason="Initial price",
                )
            )

            # 3. Audit
            log = await log_store.add_log(
                CreatedLog(
                    item_id=item.id,  # type: ignore[arg-type]
                    new_value=item_snapshot(item),
                    quantity=item.current_stock,
                    notes=f"Created {item.name}",
                    performed_by_id=user.id,
                )
            )

        logger.info(
            "inventory_item_created",
            item_id=item.id,
            name=item.name,
            stock=str(item.current_stock),
            cost=str(item.current_cost),
        )
        return InventoryItemResult(item=item, logs=[log])

    def to_response(self, result: InventoryItemResult) -> InventoryItemResponse:
        """Convert result to API response."""
        return InventoryItemResponse.from_entity(result.item)
