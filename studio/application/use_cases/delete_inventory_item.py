"""
Delete Inventory Item Use Case.

Soft delete that keeps the audit trail.
"""

from dataclasses import dataclass

from studio.application.dto.responses import InventoryItemDeletedResponse
from studio.application.services import TransactionFactory, get_default_transaction
from studio.application.use_cases.create_inventory_item import item_snapshot
from studio.config import get_logger
from studio.core.entities.inventory_log import DeletedLog
from studio.core.entities.user import Caller
from studio.core.exceptions import InventoryItemNotFoundError
from studio.core.interfaces import ICostOfSaleStore, IInventoryLogStore, IInventoryStore

logger = get_logger(__name__)


@dataclass
class DeleteInventoryItemResult:
    item_id: int
    log: DeletedLog


class DeleteInventoryItemUseCase:
    """Delete an item: DELETED entry, recipe row removed, item soft-deleted."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        log_store: IInventoryLogStore | None = None,
        cost_of_sale_store: ICostOfSaleStore | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._inventory_store = inventory_store
        self._log_store = log_store
        self._cost_of_sale_store = cost_of_sale_store
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

    async def _get_cost_of_sale_store(self) -> ICostOfSaleStore:
        if self._cost_of_sale_store is None:
            from studio.infrastructure.storage.sqlite import get_cost_of_sale_store

            self._cost_of_sale_store = await get_cost_of_sale_store()
        return self._cost_of_sale_store

    async def execute(self, item_id: int, user: Caller) -> DeleteInventoryItemResult:
        inv_store = await self._get_inventory_store()
        log_store = await self._get_log_store()
        cos_store = await self._get_cost_of_sale_store()

        async with self._transaction():
            item = await inv_store.get_item(item_id)
            if item is None:
                raise InventoryItemNotFoundError(item_id)

            log = await log_store.add_log(
                DeletedLog(
                    item_id=item_id,
                    old_value=item_snapshot(item),
                    notes=f"Deleted {item.name}",
                    performed_by_id=user.id,
                )
            )
            removed = await cos_store.delete_by_item(item_id)
            await inv_store.soft_delete_item(item_id)

        logger.info(
            "inventory_item_deleted",
            item_id=item_id,
            name=item.name,
            recipe_rows_removed=removed,
        )
        return DeleteInventoryItemResult(item_id=item_id, log=log)  # type: ignore[arg-type]

    def to_response(self, result: DeleteInventoryItemResult) -> InventoryItemDeletedResponse:
        return InventoryItemDeletedResponse(
            id=result.item_id,
            log_id=result.log.id,  # type: ignore[arg-type]
        )
